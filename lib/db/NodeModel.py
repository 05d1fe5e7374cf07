"""
lib/db/NodeModel.py

Purpose:
Defines the SQLAlchemy ORM models for cached remote nodes. Each node is keyed by the id the remote store assigned to it, so renames and moves never change its identity.

Place in Architecture:
Provides persistent storage for node metadata used by the NodeCache.

Interface:

	NodeModel: columns id, name, kind, is_root, content_hash, meta, last_synced.
	ParentModel: one row per (node, parent) pair, with the parent's position in the remote parents list.
	Base: the declarative base both share; Base.metadata.create_all() builds the schema.

TODOs/FIXMEs:
None.
"""

import sqlalchemy as sql
import sqlalchemy.orm as orm

Base = orm.declarative_base()

# Nodes store the usable metadata for files and folders.
# Lookups by name, content hash and parent are all exact-match index queries.
class NodeModel(Base):
	__tablename__ = 'nodes'

	# Lookup info.
	id = sql.Column(sql.String, primary_key=True)
	name = sql.Column(sql.String, index=True)
	kind = sql.Column(sql.String, nullable=False)
	is_root = sql.Column(sql.Boolean, nullable=False, default=False, index=True)
	content_hash = sql.Column(sql.String, index=True) # Only for files with uploaded content.

	# Remote data.
	meta = sql.Column(sql.JSON) # The full remote record.
	last_synced = sql.Column(sql.Float, default=0) # When the record was last written from a remote response.

	parents = orm.relationship(
		"ParentModel",
		order_by="ParentModel.position",
		cascade="all, delete-orphan",
		lazy="selectin",
	)

	def __repr__(this):
		return f"<{this.name} ({this.id})>"


# Parent membership as a normalized relation, rather than a serialized list.
# Only position 0 is a tree edge; the rest are kept for completeness.
class ParentModel(Base):
	__tablename__ = 'node_parents'

	node_id = sql.Column(sql.String, sql.ForeignKey('nodes.id', ondelete="CASCADE"), primary_key=True)
	position = sql.Column(sql.Integer, primary_key=True)
	parent_id = sql.Column(sql.String, nullable=False, index=True)

	__table_args__ = (
		sql.Index('ix_node_parents_parent_position', 'parent_id', 'position'),
	)

	def __repr__(this):
		return f"<{this.node_id} [{this.position}] -> {this.parent_id}>"
