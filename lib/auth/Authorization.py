"""
lib/auth/Authorization.py

Purpose:
Holds the bearer token used for remote calls and renews it before it expires.

Place in Architecture:
The token and the time it was last renewed are ephemeral state shared by every uploader, so they live in Redis rather than the node database. The upload orchestrator checks freshness between files; the remote connection reads the current token for every request.

Interface:

	__init__(redis, renewer, namespace, lock_timeout, wait_retries): renewer is a callable returning a new token (or a dict with an access_token).
	CurrentToken(), LastRenewedAt(), IsStale(threshold), Renew(), Seed(token, renewedAt=None)
	Publish(token, previous): Store a renewed token unless another worker already replaced previous.
	GetValue(key, coerceType=None) / SetValue(key, value, expectedValue=None): Low-level access to the values in Redis.

TODOs/FIXMEs:
None.
"""

import os
import time
import socket
import logging
import threading

from ..Errors import AuthRenewalError
from ..Utils import ExponentialSleep

# Renewal must happen once no matter how many workers notice the token is old.
# The first to take the 'renewing' lock calls the renewer; everyone else waits
# for last_authorized to move forward.
class Authorization(object):
	def __init__(this, redis, renewer, namespace="cloudmirror", lock_timeout=30, wait_retries=10):
		this.redis = redis
		this.renewer = renewer
		this.namespace = namespace
		this.lock_timeout = lock_timeout # Should only matter if a renewer crashed while holding the lock.
		this.wait_retries = wait_retries

	def Key(this, key):
		return f"{this.namespace}:auth:{key}"


	# Get a value for a key in Redis.
	# If you need to coerce the value to a specific type, pass in the type as coerceType.
	# RETURNS the value, as a string unless coerced, or None if it is not set.
	def GetValue(this, key, coerceType=None):
		ret = this.redis.get(this.Key(key))
		if (ret is None):
			return None
		if (isinstance(ret, bytes)):
			ret = ret.decode('utf-8')
		if (coerceType is not None):
			ret = coerceType(ret)
		return ret

	# Set a value for a key in Redis.
	# For extra safety, you can pass in what you think the current value is. If it's not what you expect, the value will not be set.
	# RETURNS True if the value was set, False otherwise.
	def SetValue(this, key, value, expectedValue=None):
		if (expectedValue is not None):
			lua = """\
if redis.call('GET', KEYS[1]) == ARGV[1] then
	redis.call('SET', KEYS[1], ARGV[2])
	return 1
else
	return 0
end
"""
			return this.redis.eval(lua, 1, this.Key(key), str(expectedValue), str(value)) == 1

		return bool(this.redis.set(this.Key(key), str(value)))


	def Seed(this, token, renewedAt=None):
		if (renewedAt is None):
			renewedAt = time.time()
		this.SetValue('access_token', token)
		this.SetValue('last_authorized', renewedAt)

	def CurrentToken(this):
		return this.GetValue('access_token')

	# RETURNS the unix time of the last renewal, 0 if there has never been one.
	def LastRenewedAt(this):
		ret = this.GetValue('last_authorized', float)
		if (ret is None):
			return 0.0
		return ret

	def IsStale(this, threshold):
		return (time.time() - this.LastRenewedAt()) > threshold


	def Renew(this):
		lockKey = this.Key('renewing')
		owner = f"{socket.gethostname()}:{os.getpid()}:{threading.get_ident()}"
		before = this.LastRenewedAt()

		if (this.redis.set(lockKey, owner, nx=True, ex=this.lock_timeout)):
			try:
				this.CallRenewer()
			finally:
				if (this.GetValue('renewing') == owner):
					this.redis.delete(lockKey)
			return

		logging.debug("Authorization is being renewed elsewhere; waiting.")
		for i in range(this.wait_retries):
			ExponentialSleep(i)
			if (this.LastRenewedAt() > before):
				return
			if (this.redis.get(lockKey) is None):
				raise AuthRenewalError("Concurrent authorization renewal did not succeed")

		raise AuthRenewalError("Timed out waiting for authorization renewal")

	def CallRenewer(this):
		previous = this.CurrentToken()
		try:
			token = this.renewer()
		except AuthRenewalError:
			raise
		except Exception as e:
			logging.error(f"Failed to renew authorization: {e}")
			raise AuthRenewalError(f"Failed to renew authorization: {e}") from e

		if (isinstance(token, dict)):
			token = token.get('access_token')
		if (not token):
			logging.error("Authorization renewal returned no token.")
			raise AuthRenewalError("Authorization renewal returned no token")

		this.Publish(token, previous)

	# Replace the token only if it is still the one seen before renewing.
	# If another worker published one in the meantime (e.g. after our lock expired), theirs is kept.
	# RETURNS True if token was stored.
	def Publish(this, token, previous):
		if (previous is None):
			this.Seed(token)
		elif (not this.SetValue('access_token', token, expectedValue=previous)):
			logging.warning("Authorization was renewed elsewhere during this renewal; keeping that token.")
			return False
		else:
			this.SetValue('last_authorized', time.time())

		logging.info("Authorization renewed.")
		return True
