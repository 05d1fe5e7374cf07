"""
lib/Errors.py

Purpose:
Defines the exceptions raised by CloudMirror.

Place in Architecture:
Shared by every layer. Invalid settings raise eons.MissingArgumentError. Consistency errors signal that the local node index no longer describes a tree and are never retried. Remote errors carry the raw response payload so callers can report what the server said.

Interface:

	CloudMirrorError: base of everything below.
	ConsistencyError: OrphanNodeError, CycleDetectedError, CacheConsistencyError.
	RemoteError: RemoteCreateError, RemoteTransferError (status, payload).
	AuthRenewalError: the authorization could not be renewed.

TODOs/FIXMEs:
None.
"""


class CloudMirrorError(Exception):
	pass


# The node index is corrupt or incomplete. These are fatal.
class ConsistencyError(CloudMirrorError):
	pass


class OrphanNodeError(ConsistencyError):
	def __init__(this, nodeId, message=None):
		super().__init__(message or f"No parent node found with ID {nodeId}")
		this.nodeId = nodeId


class CycleDetectedError(ConsistencyError):
	def __init__(this, chain):
		super().__init__(f"Parent chain does not reach the root: {' -> '.join(chain)}")
		this.chain = chain


class CacheConsistencyError(ConsistencyError):
	pass


# A remote call returned something other than success.
# status is None when the request never got a response.
class RemoteError(CloudMirrorError):
	def __init__(this, message, status=None, payload=None):
		super().__init__(message)
		this.status = status
		this.payload = payload

	def __str__(this):
		ret = super().__str__()
		if (this.status is not None):
			ret += f" (HTTP {this.status})"
		if (this.payload):
			ret += f": {this.payload}"
		return ret


class RemoteCreateError(RemoteError):
	pass


class RemoteTransferError(RemoteError):
	pass


class AuthRenewalError(CloudMirrorError):
	pass
