import hashlib
import logging
import os

from StandardTestFixture import StandardTestFixture

from libcloudmirror import ContentHash, ConfigureLogging
from libcloudmirror.Utils import parse_lifetime, parse_log_level


class TestUtils(StandardTestFixture):

	def test_content_hash_is_md5(this):
		data = os.urandom(300000)
		path = this.WriteFile(os.path.join(this.MakeDirectory(), "data.bin"), data)
		this.assert_equal(ContentHash(path), hashlib.md5(data).hexdigest())
		this.assert_equal(ContentHash(path, blockSize=7), hashlib.md5(data).hexdigest())

	def test_parse_lifetime(this):
		this.assert_equal(parse_lifetime("60"), 60)
		this.assert_equal(parse_lifetime(5), 5)
		this.assert_raises(ValueError, parse_lifetime, "a minute")

	def test_logging(this):
		this.assert_equal(parse_log_level("debug"), logging.DEBUG)
		this.assert_raises(ValueError, parse_log_level, "verbose")

		root = logging.getLogger('')
		level = root.level
		handler = ConfigureLogging("warning")
		try:
			this.assert_equal(root.level, logging.WARNING)
			assert handler in root.handlers
		finally:
			root.removeHandler(handler)
			root.setLevel(level)
