"""
lib/node/NodeKind.py

Purpose:
Defines an enumeration of the kinds of remote nodes CloudMirror understands.

Place in Architecture:
Used by Node, the node cache and the tree layer to tell folders from files.

Interface:

	Enum members: FOLDER and FILE.
	Parse(kind): Maps a remote kind string onto a member.

TODOs/FIXMEs:
None.
"""

from enum import Enum

class NodeKind(Enum):
	FOLDER = "FOLDER"
	FILE = "FILE"

	def __str__(self):
		return self.name

	# Anything the remote reports that is not a folder has content (e.g. ASSET), so it is treated as a file.
	# The raw kind string stays in the node's meta.
	@classmethod
	def Parse(cls, kind):
		if (isinstance(kind, NodeKind)):
			return kind
		if (kind is not None and str(kind).upper() == "FOLDER"):
			return cls.FOLDER
		return cls.FILE
