"""
lib/tree/DirectoryEnsurer.py

Purpose:
Creates a remote folder path, one missing segment at a time.

Place in Architecture:
Used by the upload orchestrator before every file. Running it on a path that already exists makes no remote calls, so it is safe to call repeatedly and from several workers.

Interface:

	__init__(cache, resolver, remote): remote only needs CreateNode().
	EnsurePath(path): The leaf folder node, created if needed.

TODOs/FIXMEs:
None.
"""

import logging
import threading

from ..Errors import RemoteCreateError
from ..node.NodeKind import NodeKind
from ..Upath import UniversalPath

class DirectoryEnsurer(object):
	def __init__(this, cache, resolver, remote):
		this.cache = cache
		this.resolver = resolver
		this.remote = remote

		# Two callers ensuring the same prefix must not both create it.
		this.lock = threading.RLock()

	def EnsurePath(this, path):
		segments = UniversalPath(path).GetSegments()

		with this.lock:
			current = this.resolver.GetRoot()
			for index, name in enumerate(segments):
				prefix = UniversalPath(segments[:index + 1])

				match = this.resolver.ResolvePath(prefix)
				if (match is None):
					match = this.CreateFolder(name, current)
					logging.info(f"Created folder {prefix}.")

				current = match

		return current

	def CreateFolder(this, name, parent):
		try:
			node = this.remote.CreateNode(name, NodeKind.FOLDER, parent.id)
		except RemoteCreateError:
			logging.error(f"Failed to create folder {name} under {parent.id}.")
			raise
		return this.cache.Upsert(node)
