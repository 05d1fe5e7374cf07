"""
lib/upload/UploadStates.py

Purpose:
Defines an enumeration of the states a single file upload moves through.

Place in Architecture:
Recorded on every UploadResult so callers can see how far a file got.

Interface:

	Enum members: START, DIRECTORY_ENSURED, CHECKED, SKIPPED, CREATED, OVERWRITTEN, DONE and FAILED.

TODOs/FIXMEs:
None.
"""

from enum import Enum

# START -> DIRECTORY_ENSURED -> CHECKED -> {SKIPPED | CREATED | OVERWRITTEN} -> DONE
# FAILED can follow any state before DONE.
class UploadState(Enum):
	START = 0
	DIRECTORY_ENSURED = 1
	CHECKED = 2
	SKIPPED = 3
	CREATED = 4
	OVERWRITTEN = 5
	DONE = 6
	FAILED = 7

	def __str__(self):
		return self.name

	# One of the states a successful upload ends in.
	def IsOutcome(self):
		return self in (UploadState.SKIPPED, UploadState.CREATED, UploadState.OVERWRITTEN)
