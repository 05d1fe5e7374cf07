import time
import threading

from StandardTestFixture import StandardTestFixture
from Fakes import FakeRedis

from libcloudmirror import Authorization, AuthRenewalError


class Renewer(object):
	def __init__(this, token="fresh-token"):
		this.token = token
		this.calls = 0

	def __call__(this):
		this.calls += 1
		if (isinstance(this.token, Exception)):
			raise this.token
		return this.token


class TestAuthorization(StandardTestFixture):

	def test_seed_and_read(this):
		auth = Authorization(FakeRedis(), Renewer())
		this.assert_equal(auth.CurrentToken(), None)
		this.assert_equal(auth.LastRenewedAt(), 0.0)

		auth.Seed("token-1", 1234.5)
		this.assert_equal(auth.CurrentToken(), "token-1")
		this.assert_equal(auth.LastRenewedAt(), 1234.5)

	def test_staleness(this):
		auth = Authorization(FakeRedis(), Renewer())
		assert auth.IsStale(60)

		auth.Seed("token-1", time.time() - 120)
		assert auth.IsStale(60)

		auth.Seed("token-1")
		assert not auth.IsStale(60)

	def test_renew(this):
		renewer = Renewer()
		redis = FakeRedis()
		auth = Authorization(redis, renewer)
		auth.Seed("old-token", 0)

		auth.Renew()
		this.assert_equal(renewer.calls, 1)
		this.assert_equal(auth.CurrentToken(), "fresh-token")
		assert not auth.IsStale(60)
		this.assert_equal(redis.get(auth.Key('renewing')), None)

	def test_renewer_may_return_a_token_response(this):
		auth = Authorization(FakeRedis(), Renewer({"access_token": "from-dict", "expires_in": 3600}))
		auth.Renew()
		this.assert_equal(auth.CurrentToken(), "from-dict")

	def test_failed_renewal(this):
		redis = FakeRedis()
		auth = Authorization(redis, Renewer(IOError("token endpoint unreachable")))
		auth.Seed("old-token", 0)

		this.assert_raises(AuthRenewalError, auth.Renew)
		this.assert_equal(auth.CurrentToken(), "old-token")
		this.assert_equal(redis.get(auth.Key('renewing')), None)

	def test_empty_token_is_a_failure(this):
		auth = Authorization(FakeRedis(), Renewer(""))
		this.assert_raises(AuthRenewalError, auth.Renew)

	def test_waits_for_concurrent_renewal(this):
		redis = FakeRedis()
		renewer = Renewer()
		auth = Authorization(redis, renewer, wait_retries=3)
		auth.Seed("old-token", 0)

		# Someone else holds the lock and finishes renewing while we wait.
		redis.set(auth.Key('renewing'), "another-worker")
		other = threading.Timer(0.02, auth.Seed, args=("their-token",))
		other.start()

		auth.Renew()
		other.join()
		this.assert_equal(renewer.calls, 0)
		this.assert_equal(auth.CurrentToken(), "their-token")

	def test_concurrent_renewal_that_never_finishes(this):
		redis = FakeRedis()
		renewer = Renewer()
		auth = Authorization(redis, renewer, wait_retries=1)
		auth.Seed("old-token", 0)
		redis.set(auth.Key('renewing'), "another-worker")

		this.assert_raises(AuthRenewalError, auth.Renew)
		this.assert_equal(renewer.calls, 0)

	def test_compare_and_set(this):
		auth = Authorization(FakeRedis(), Renewer())
		auth.SetValue('access_token', "a")
		assert not auth.SetValue('access_token', "b", expectedValue="z")
		this.assert_equal(auth.CurrentToken(), "a")
		assert auth.SetValue('access_token', "b", expectedValue="a")
		this.assert_equal(auth.CurrentToken(), "b")

	def test_newer_token_from_elsewhere_is_kept(this):
		redis = FakeRedis()
		auth = Authorization(redis, None)
		auth.Seed("old-token", 0)

		# Our lock expired mid-renewal and another worker published first.
		def SlowRenewer():
			auth.Seed("their-token")
			return "our-token"
		auth.renewer = SlowRenewer

		auth.Renew()
		this.assert_equal(auth.CurrentToken(), "their-token")
		assert not auth.IsStale(60)

	def test_publish_replaces_only_the_expected_token(this):
		auth = Authorization(FakeRedis(), Renewer())
		assert auth.Publish("first", None)
		this.assert_equal(auth.CurrentToken(), "first")

		assert not auth.Publish("second", "stale")
		this.assert_equal(auth.CurrentToken(), "first")

		auth.Seed("first", 0)
		assert auth.Publish("second", "first")
		this.assert_equal(auth.CurrentToken(), "second")
		assert not auth.IsStale(60)
