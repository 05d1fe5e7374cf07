"""
lib/tree/PathResolver.py

Purpose:
Converts between nodes and slash-delimited remote paths by walking the first-parent graph.

Place in Architecture:
The remote store addresses everything by id; users address everything by path. Directory creation and existence checks both go through here. Parents missing from the cache are fetched from the remote store and cached on the way.

Interface:

	__init__(cache, remote=None): remote only needs FetchById() and FetchRoot().
	GetRoot(): The root node, fetched and cached if necessary.
	PathOf(node): The upath of node; "" for the root.
	ResolvePath(path): The node at path or None.
	Children(path): Nodes directly below path.

TODOs/FIXMEs:
None.
"""

import logging

from ..Errors import OrphanNodeError, CycleDetectedError, CacheConsistencyError, RemoteError
from ..Upath import UniversalPath

class PathResolver(object):
	def __init__(this, cache, remote=None):
		this.cache = cache
		this.remote = remote


	def GetRoot(this):
		root = this.cache.GetRoot()
		if (root is not None):
			return root

		if (this.remote is None):
			raise OrphanNodeError(None, "No root node found in the node cache")

		try:
			root = this.remote.FetchRoot()
		except RemoteError as e:
			raise OrphanNodeError(None, f"No root node found in the node cache or remote store: {e}") from e

		logging.debug(f"Fetched root {root.id}.")
		return this.cache.Upsert(root)


	# Walk from node toward the root, collecting names.
	# The root's own name is not part of any path.
	# RETURNS the upath of node as a string.
	def PathOf(this, node):
		names = []
		visited = []
		while (not node.isRoot):
			if (node.id in visited):
				raise CycleDetectedError(visited + [node.id])
			visited.append(node.id)
			names.append(node.name)

			if (node.parent is None):
				raise OrphanNodeError(node.id, f"Node {node.id} ({node.name}) has no parent and is not the root")
			node = this.GetParent(node)

		names.reverse()
		return "/".join(names)

	# RETURNS node's first parent, from the cache or, failing that, the remote store.
	def GetParent(this, node):
		parent = this.cache.GetById(node.parent)
		if (parent is not None):
			return parent

		if (this.remote is None):
			raise OrphanNodeError(node.parent)

		try:
			parent = this.remote.FetchById(node.parent)
		except RemoteError as e:
			logging.error(f"Could not fetch parent {node.parent} of {node.id}: {e}")
			raise OrphanNodeError(node.parent) from e

		logging.debug(f"Fetched missing parent {parent.id} ({parent.name}).")
		return this.cache.Upsert(parent)


	# Find the node at path by checking the full path of every node with the same name.
	# RETURNS the matching node or None.
	def ResolvePath(this, path):
		upath = UniversalPath(path)
		if (not upath):
			return this.GetRoot()

		target = str(upath)
		matches = [candidate for candidate in this.cache.GetByName(upath.GetName()) if this.PathOf(candidate) == target]

		if (len(matches) > 1):
			raise CacheConsistencyError(f"Multiple nodes found at {target}: {[node.id for node in matches]}")
		if (not matches):
			return None
		return matches[0]

	# RETURNS the nodes directly below path, or None if path does not exist.
	def Children(this, path):
		node = this.ResolvePath(path)
		if (node is None):
			return None
		return this.cache.GetChildren(node.id)
