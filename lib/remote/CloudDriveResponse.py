"""
lib/remote/CloudDriveResponse.py

Purpose:
Wraps the HTTP response from a remote store api call.

Place in Architecture:
A thin wrapper around the response stream from urllib, allowing for standardized reading, decoding and closing of responses. Releases the connection slot it holds when closed.

Interface:

	__init__(connection, req, is_upload, timeout): Opens the request.
	status: The HTTP status code.
	read(size=None): Reads raw data from the response.
	json(): Reads and decodes the whole body.
	close(): Closes the response and notifies the connection.

TODOs/FIXMEs:
None.
"""

import json
from urllib.request import urlopen


class CloudDriveResponse(object):
	def __init__(this, connection, req, is_upload, timeout):
		this.connection = connection

		# Uploads use the default timeout: the whole body may sit in the send buffer
		# while we block on the server's reply, so a read timeout would fire even
		# though data is still going out.
		if is_upload:
			this.response = urlopen(req)
		else:
			this.response = urlopen(req, timeout=timeout)
		this.is_upload = is_upload

	@property
	def status(this):
		return getattr(this.response, 'status', None) or this.response.getcode()

	def read(this, size=None):
		return this.response.read(size)

	def json(this):
		return ParsePayload(this.read())

	def close(this):
		this.response.close()
		this.connection._release_response(this, this.is_upload)


# Decode a response body, keeping it as text when the server did not send json.
def ParsePayload(body):
	if (body is None):
		return None
	if (isinstance(body, bytes)):
		body = body.decode('utf-8', errors='replace')
	body = body.strip()
	if (not body):
		return None
	try:
		return json.loads(body)
	except ValueError:
		return body
