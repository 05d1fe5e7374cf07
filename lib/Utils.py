import time
import logging

from cryptography.hazmat.primitives import hashes

# Sleep for exponentially increasing time. `n` is the number of times
# sleep has been called.
def ExponentialSleep(n, start=0.1, max_sleep=60):
	sleep_time = min(start * (2**n), max_sleep)
	time.sleep(sleep_time)


# Hex digest of a local file's bytes, read in blocks.
# This is what the remote store reports as contentProperties.md5.
def ContentHash(path, blockSize=131072):
	digest = hashes.Hash(hashes.MD5())
	with open(path, 'rb') as file:
		while True:
			block = file.read(blockSize)
			if not block:
				break
			digest.update(block)
	return digest.finalize().hex()


def parse_lifetime(lifetime_str):
	if (type(lifetime_str) in (int, float)):
		return lifetime_str

	if lifetime_str.lower() in ('inf', 'infinity', 'infinite'):
		return 100*365*24*60*60

	try:
		return int(lifetime_str)
	except ValueError:
		raise ValueError("invalid lifetime specifier")


def parse_log_level(log_level):
	try:
		return {'error': logging.ERROR,
				'warning': logging.WARNING,
				'info': logging.INFO,
				'debug': logging.DEBUG}[log_level]
	except KeyError:
		raise ValueError("invalid log level specifier")


def ConfigureLogging(log_level="info", fmt="%(asctime)s cloudmirror[%(process)d]: %(levelname)s: %(message)s"):
	logger = logging.getLogger('')
	handler = logging.StreamHandler()
	handler.setFormatter(logging.Formatter(fmt=fmt))
	logger.addHandler(handler)
	logger.setLevel(parse_log_level(log_level))
	return handler
