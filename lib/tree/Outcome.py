"""
lib/tree/Outcome.py

Purpose:
The possible answers to "does this upload already exist remotely?".

Place in Architecture:
Produced by the ExistenceChecker, consumed by the UploadOrchestrator to pick between create, skip and overwrite.

Interface:

	PathMatch(node, contentIdentical=None): a node already exists at the path.
	HashMatch(node, existingPath): nothing at the path, but the same bytes exist elsewhere.
	NoMatch(): neither.

TODOs/FIXMEs:
None.
"""


class Outcome(object):
	node = None

	def __repr__(this):
		return f"<{this.__class__.__name__} {this.node}>"


# contentIdentical is None when no local hash was given to compare against.
class PathMatch(Outcome):
	def __init__(this, node, contentIdentical=None):
		this.node = node
		this.contentIdentical = contentIdentical


class HashMatch(Outcome):
	def __init__(this, node, existingPath):
		this.node = node
		this.existingPath = existingPath


class NoMatch(Outcome):
	pass
