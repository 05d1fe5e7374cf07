"""
lib/tree/ExistenceChecker.py

Purpose:
Decides whether a prospective upload is already present remotely, by path and by content hash.

Place in Architecture:
Sits between the PathResolver and the UploadOrchestrator. Its Outcome is the only input to the create / skip / overwrite decision.

Interface:

	__init__(cache, resolver)
	CheckExists(remotePath, localContentHash=None): PathMatch, HashMatch or NoMatch.

TODOs/FIXMEs:
None.
"""

import logging

from .Outcome import PathMatch, HashMatch, NoMatch

class ExistenceChecker(object):
	def __init__(this, cache, resolver):
		this.cache = cache
		this.resolver = resolver

	def CheckExists(this, remotePath, localContentHash=None):
		node = this.resolver.ResolvePath(remotePath)

		if (node is not None):
			if (localContentHash is None):
				logging.debug(f"File {remotePath} exists.")
				return PathMatch(node)

			# No remote checksum means we cannot call them identical.
			identical = node.contentHash is not None and node.contentHash == localContentHash
			if (identical):
				logging.debug(f"File {remotePath} exists and is identical.")
			elif (node.contentHash is None):
				logging.debug(f"File {remotePath} exists, but no checksum is available.")
			else:
				logging.debug(f"File {remotePath} exists but checksum doesn't match.")
			return PathMatch(node, identical)

		if (localContentHash is not None):
			duplicate = this.cache.GetByContentHash(localContentHash)
			if (duplicate is not None):
				existingPath = this.resolver.PathOf(duplicate)
				logging.debug(f"File with same content as {remotePath} exists at {existingPath}.")
				return HashMatch(duplicate, existingPath)

		logging.debug(f"File {remotePath} does not exist.")
		return NoMatch()
