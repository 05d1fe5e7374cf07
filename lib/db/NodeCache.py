"""
lib/db/NodeCache.py

Purpose:
Typed access to the local index of remote node metadata.

Place in Architecture:
Sits directly on the SQL database. Everything above it (path resolution, directory creation, upload bookkeeping) reads nodes through here, and writes nodes here only after the remote store has confirmed the change.

Interface:

	Upsert(node) / UpsertMany(nodes): Store or replace records keyed by node id. Committed before returning.
	GetById(id), GetByName(name), GetByContentHash(hash), GetChildren(id), GetRoot(), Count()

TODOs/FIXMEs:
None.
"""

import time
import logging
import threading
import sqlalchemy as sql
import sqlalchemy.orm as orm

from ..Errors import CacheConsistencyError
from ..node.Node import Node
from .NodeModel import Base, NodeModel, ParentModel

class NodeCache(object):
	def __init__(this, engine):
		if (isinstance(engine, str)):
			engine = sql.create_engine(engine)

		this.engine = engine
		this.lock = threading.RLock()

		Base.metadata.create_all(this.engine)

	def GetDatabaseSession(this):
		return orm.Session(this.engine, expire_on_commit=False)


	# Store node, replacing whatever was cached under the same id.
	def Upsert(this, node):
		with this.lock:
			with this.GetDatabaseSession() as session:
				this.Write(session, node)
				session.commit()
		logging.debug(f"Cached {node}.")
		return node

	# Store several nodes in a single transaction, e.g. a remote listing.
	# RETURNS the number of nodes written.
	def UpsertMany(this, nodes):
		count = 0
		with this.lock:
			with this.GetDatabaseSession() as session:
				for node in nodes:
					this.Write(session, node)
					count += 1
				session.commit()
		logging.debug(f"Cached {count} nodes.")
		return count

	# Stage node in session. Does not commit.
	def Write(this, session, node):
		obj = session.get(NodeModel, node.id)
		if (obj is None):
			obj = NodeModel(id=node.id)
			session.add(obj)

		obj.name = node.name
		obj.kind = node.kind.value
		obj.is_root = node.isRoot
		obj.content_hash = node.contentHash
		obj.meta = node.ToRemote()
		obj.last_synced = time.time()

		# Reconcile parent rows in place so (node_id, position) keys are reused.
		existing = {parent.position: parent for parent in obj.parents}
		for position, parentId in enumerate(node.parents):
			if (position in existing):
				existing[position].parent_id = parentId
			else:
				obj.parents.append(ParentModel(position=position, parent_id=parentId))
		for position, parent in existing.items():
			if (position >= len(node.parents)):
				obj.parents.remove(parent)


	# RETURNS the node with the given id or None.
	def GetById(this, id):
		with this.GetDatabaseSession() as session:
			results = session.query(NodeModel).filter_by(id=id).all()
			if (len(results) > 1):
				raise CacheConsistencyError(f"Multiple nodes with same ID found: {id}")
			if (not results):
				return None
			return this.ToNode(results[0])

	# Names are not unique.
	# RETURNS every node called name, possibly none.
	def GetByName(this, name):
		with this.GetDatabaseSession() as session:
			results = session.query(NodeModel).filter_by(name=name).order_by(NodeModel.id).all()
			return [this.ToNode(obj) for obj in results]

	# RETURNS the one node whose content has the given hash or None.
	def GetByContentHash(this, hash):
		if (not hash):
			return None

		with this.GetDatabaseSession() as session:
			results = session.query(NodeModel).filter_by(content_hash=hash).all()
			if (len(results) > 1):
				raise CacheConsistencyError(f"Multiple nodes with same content hash {hash}: {[obj.id for obj in results]}")
			if (not results):
				return None
			return this.ToNode(results[0])

	# RETURNS all nodes whose first parent is id.
	def GetChildren(this, id):
		with this.GetDatabaseSession() as session:
			results = (session.query(NodeModel)
				.join(ParentModel, ParentModel.node_id == NodeModel.id)
				.filter(ParentModel.parent_id == id, ParentModel.position == 0)
				.order_by(NodeModel.name, NodeModel.id)
				.all())
			return [this.ToNode(obj) for obj in results]

	# RETURNS the root node, or None if it has not been cached yet.
	def GetRoot(this):
		with this.GetDatabaseSession() as session:
			results = session.query(NodeModel).filter_by(is_root=True).all()
			if (len(results) > 1):
				raise CacheConsistencyError(f"Multiple root nodes found: {[obj.id for obj in results]}")
			if (not results):
				return None
			return this.ToNode(results[0])

	def Count(this):
		with this.GetDatabaseSession() as session:
			return session.query(NodeModel).count()


	@staticmethod
	def ToNode(obj):
		return Node(
			id=obj.id,
			name=obj.name,
			kind=obj.kind,
			parents=[parent.parent_id for parent in obj.parents],
			isRoot=obj.is_root,
			contentHash=obj.content_hash,
			meta=obj.meta,
		)
