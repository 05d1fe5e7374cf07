"""
lib/node/Node.py

Purpose:
The typed record for a single remote file or folder.

Place in Architecture:
Returned by the remote connection, stored by the node cache and walked by the path resolver. A Node is identified only by its id, which the remote store assigns; names are not unique.

Interface:

	Node(id, name, kind, parents, isRoot, contentHash, meta)
	FromRemote(record): Builds a Node from a remote JSON record.
	parent: The first parent, the only one CloudMirror honors.
	IsFolder(), IsFile()

TODOs/FIXMEs:
None.
"""

import logging

from .NodeKind import NodeKind

class Node(object):
	def __init__(this, id, name, kind=NodeKind.FILE, parents=None, isRoot=False, contentHash=None, meta=None):
		if (not id):
			raise ValueError("Nodes must have an id assigned by the remote store")

		this.id = id
		this.name = name
		this.kind = NodeKind.Parse(kind)
		this.parents = list(parents or [])
		this.isRoot = bool(isRoot)
		this.contentHash = contentHash
		this.meta = dict(meta or {}) # The full remote record, for fields not modeled here.

	def __repr__(this):
		return f"<{this.kind} {this.name} ({this.id})>"

	def __eq__(this, other):
		if (not isinstance(other, Node)):
			return NotImplemented
		return (this.id == other.id
			and this.name == other.name
			and this.kind == other.kind
			and this.parents == other.parents
			and this.isRoot == other.isRoot
			and this.contentHash == other.contentHash)

	def __hash__(this):
		return hash(this.id)

	@property
	def parent(this):
		if (not this.parents):
			return None
		return this.parents[0]

	def IsFolder(this):
		return this.kind == NodeKind.FOLDER

	def IsFile(this):
		return this.kind == NodeKind.FILE

	# Parse a node record as returned by the remote metadata api, e.g.
	# {"id": "...", "name": "x.jpg", "kind": "FILE", "parents": ["..."], "contentProperties": {"md5": "..."}}
	@classmethod
	def FromRemote(cls, record):
		if (not isinstance(record, dict) or not record.get('id')):
			raise ValueError(f"Not a node record: {record!r}")

		parents = record.get('parents') or []
		if (len(parents) > 1):
			logging.debug(f"Node {record['id']} has {len(parents)} parents; only {parents[0]} is used.")

		contentHash = None
		contentProperties = record.get('contentProperties')
		if (isinstance(contentProperties, dict)):
			contentHash = contentProperties.get('md5')

		return cls(
			id=record['id'],
			name=record.get('name'),
			kind=record.get('kind'),
			parents=parents,
			isRoot=record.get('isRoot') is True,
			contentHash=contentHash,
			meta=record,
		)

	def ToRemote(this):
		ret = dict(this.meta)
		ret.update({
			'id': this.id,
			'name': this.name,
			'kind': ret.get('kind') or this.kind.value,
			'parents': list(this.parents),
		})
		if (this.isRoot):
			ret['isRoot'] = True
		if (this.contentHash is not None):
			ret['contentProperties'] = dict(ret.get('contentProperties') or {}, md5=this.contentHash)
		return ret
