import io
import os
import uuid
import json


# A multipart/form-data body that streams a file from disk rather than reading it into memory.
# Readable by http.client like any other file object; Content-Length is known up front.
class MultipartStream(object):
	def __init__(this, filePath, fields=None, fileField='content', fileName=None):
		this.boundary = uuid.uuid4().hex
		fileName = fileName or os.path.basename(filePath)

		head = b""
		for key, value in (fields or {}).items():
			if (not isinstance(value, str)):
				value = json.dumps(value)
			head += this._PartHeader(f'name="{key}"', "application/json")
			head += value.encode('utf-8') + b"\r\n"
		head += this._PartHeader(f'name="{fileField}"; filename="{QuoteFileName(fileName)}"', "application/octet-stream")
		tail = f"\r\n--{this.boundary}--\r\n".encode('ascii')

		this.length = len(head) + os.path.getsize(filePath) + len(tail)
		this.parts = [io.BytesIO(head), open(filePath, 'rb'), io.BytesIO(tail)]

	def _PartHeader(this, disposition, contentType):
		return (f"--{this.boundary}\r\n"
			f"Content-Disposition: form-data; {disposition}\r\n"
			f"Content-Type: {contentType}\r\n\r\n").encode('utf-8')

	def GetContentType(this):
		return f"multipart/form-data; boundary={this.boundary}"

	def read(this, size=-1):
		if (size is None or size < 0):
			return b"".join(part.read() for part in this.parts)

		ret = b""
		for part in this.parts:
			if (len(ret) >= size):
				break
			ret += part.read(size - len(ret))
		return ret

	def close(this):
		for part in this.parts:
			part.close()

	def __enter__(this):
		return this

	def __exit__(this, *exc):
		this.close()


def QuoteFileName(name):
	return name.replace("\\", "\\\\").replace('"', '\\"')
