"""
lib/upload/UploadOrchestrator.py

Purpose:
Uploads single files and whole directory trees, skipping anything already present remotely.

Place in Architecture:
The top of the core. For each file it ensures the destination folder, checks for an existing copy, transfers the content if needed and records the remote result in the node cache. Between files it renews the authorization once it has been held longer than renew_after seconds.

Interface:

	__init__(cache, ensurer, checker, remote, authorization=None, renew_after=60)
	UploadFile(src, dest, overwrite=False): Upload src to the remote file path dest. RETURNS an UploadResult, FAILED if the file could not be uploaded.
	UploadDirectory(src, destRoot, overwrite=False): Yields one UploadResult per regular file below src.
	RenewIfStale(): Renew the authorization if it is older than renew_after.

Consistency errors and authorization failures are never recorded as results; they propagate.

TODOs/FIXMEs:
None.
"""

import os
import logging

from ..Errors import ConsistencyError, AuthRenewalError
from ..Upath import UniversalPath
from ..Utils import ContentHash
from ..tree.Outcome import NoMatch, HashMatch
from .UploadStates import UploadState
from .UploadResult import UploadResult

class UploadOrchestrator(object):
	def __init__(this, cache, ensurer, checker, remote, authorization=None, renew_after=60):
		this.cache = cache
		this.ensurer = ensurer
		this.checker = checker
		this.remote = remote
		this.authorization = authorization
		this.renew_after = renew_after


	# Upload src to the remote path dest (which includes the file name).
	def UploadFile(this, src, dest, overwrite=False):
		this.RenewIfStale()
		return this.Upload(src, UniversalPath(dest).GetSegments(), overwrite)

	# Upload every regular file below src to destRoot/<basename of src>/..., keeping the relative layout.
	# Each local name becomes exactly one remote name.
	def UploadDirectory(this, src, destRoot, overwrite=False):
		src = os.path.abspath(os.path.expanduser(src))
		if (not os.path.isdir(src)):
			raise NotADirectoryError(f"{src} is not a directory")

		destBase = UniversalPath(destRoot).GetSegments() + [os.path.basename(src)]

		for file in WalkFiles(src):
			this.RenewIfStale()
			relative = os.path.relpath(file, src)
			yield this.Upload(file, destBase + relative.split(os.sep), overwrite)

	def RenewIfStale(this):
		if (this.authorization is None):
			return
		if (this.authorization.IsStale(this.renew_after)):
			logging.info(f"Authorization is older than {this.renew_after}s; renewing.")
			this.authorization.Renew()


	# RETURNS the finished UploadResult for src.
	def Upload(this, src, segments, overwrite):
		result = UploadResult(src, "/".join(segments))
		try:
			this.Transfer(result, UniversalPath(segments), overwrite)
		except (ConsistencyError, AuthRenewalError) as e:
			result.Fail(e)
			raise
		except Exception as e:
			logging.error(f"Failed to upload file {src}: {e}")
			result.Fail(e)
		else:
			logging.info(f"{result.state}: {src}: {result.message}")
		return result

	def Transfer(this, result, upath, overwrite):
		if (not upath):
			raise ValueError(f"Cannot upload {result.src} over the root")

		# Hash before any network call, so unreadable sources fail early.
		contentHash = ContentHash(result.src)

		folder = this.ensurer.EnsurePath(upath.GetParent())
		result.Transition(UploadState.DIRECTORY_ENSURED)

		outcome = this.checker.CheckExists(upath, contentHash)
		result.Transition(UploadState.CHECKED)

		if (isinstance(outcome, NoMatch)):
			node = this.remote.CreateNodeWithContent(upath.GetName(), folder.id, result.src)
			this.cache.Upsert(node)
			result.Finish(UploadState.CREATED, node, f"Uploaded to {upath}")

		elif (isinstance(outcome, HashMatch)):
			result.Finish(
				UploadState.SKIPPED,
				outcome.node,
				f"File with same content exists at {outcome.existingPath}",
				existingPath=outcome.existingPath,
			)

		elif (outcome.contentIdentical):
			result.Finish(UploadState.SKIPPED, outcome.node, f"Identical file already exists at {upath}")

		elif (not overwrite):
			result.Finish(UploadState.SKIPPED, outcome.node, f"File {upath} exists and overwrite is off")

		else:
			node = this.remote.OverwriteContent(outcome.node.id, result.src)
			this.cache.Upsert(node)
			result.Finish(UploadState.OVERWRITTEN, node, f"Overwrote {upath}")

		return result


# Depth-first, in name order, descending into directories as they are met.
# Symlinked directories are not followed.
def WalkFiles(directory):
	with os.scandir(directory) as scan:
		entries = sorted(scan, key=lambda entry: entry.name)

	for entry in entries:
		if (entry.is_dir(follow_symlinks=False)):
			yield from WalkFiles(entry.path)
		elif (entry.is_file()):
			yield entry.path
