"""
lib/remote/CloudDriveConnection.py

Purpose:
Provides an API client for the remote object store. It wraps the node metadata and content endpoints and returns every result as a Node.

Place in Architecture:
The only place CloudMirror talks to the remote store. The tree and upload layers call it to create folders, upload and overwrite content, and fetch nodes the local cache does not have yet.

Interface:

	__init__(metadata_url, content_url, authorization, timeout, max_connections=10): Initializes the endpoints and semaphores for concurrency.
	Internal methods: _get_response(), _release_response(), _get_request(), _request().
	Public methods:
		CreateNode(name, kind, parentId), CreateNodeWithContent(name, parentId, filePath), OverwriteContent(nodeId, filePath), FetchById(id), FetchRoot().

TODOs/FIXMEs:
None.
"""

from urllib.request import Request
from urllib.parse import quote
from urllib.error import HTTPError, URLError
import json
import threading
import logging

from ..Errors import RemoteCreateError, RemoteTransferError
from ..node.Node import Node
from ..node.NodeKind import NodeKind
from .CloudDriveResponse import CloudDriveResponse, ParsePayload
from .Multipart import MultipartStream

class CloudDriveConnection(object):
	def __init__(this, metadata_url, content_url, authorization, timeout, max_connections=10):
		assert isinstance(metadata_url, str)
		assert isinstance(content_url, str)

		this.metadata_url = metadata_url.rstrip('/') + '/'
		this.content_url = content_url.rstrip('/') + '/'
		this.authorization = authorization

		this.connections = []
		this.lock = threading.Lock()

		upload_conns = max(1, max_connections//2)
		meta_conns = max(1, max_connections - upload_conns)

		this.meta_semaphore = threading.Semaphore(meta_conns)
		this.upload_semaphore = threading.Semaphore(upload_conns)
		this.timeout = timeout

	def _get_response(this, req, is_upload):
		semaphore = this.upload_semaphore if is_upload else this.meta_semaphore

		semaphore.acquire()
		try:
			response = CloudDriveResponse(this, req, is_upload, this.timeout)
			with this.lock:
				this.connections.append(response)
				return response
		except Exception:
			semaphore.release()
			raise

	def _release_response(this, response, is_upload):
		semaphore = this.upload_semaphore if is_upload else this.meta_semaphore

		with this.lock:
			if response in this.connections:
				semaphore.release()
				this.connections.remove(response)

	def _get_request(this, method, url, data=None, headers=None):
		allHeaders = {
			'Accept': 'application/json',
			'Authorization': f"Bearer {this.authorization.CurrentToken()}",
		}
		allHeaders.update(headers or {})
		return Request(url, data=data, headers=allHeaders, method=method)

	# Perform a request and decode the json reply.
	# Anything but the expected status raises errorClass with the server's payload.
	def _request(this, method, url, expected, errorClass, data=None, headers=None, is_upload=False):
		req = this._get_request(method, url, data=data, headers=headers)
		try:
			response = this._get_response(req, is_upload)
		except HTTPError as err:
			payload = ParsePayload(err.read())
			raise errorClass(f"{method} {url} failed", err.code, payload)
		except (URLError, IOError) as err:
			raise errorClass(f"{method} {url} failed: {err}")

		try:
			status = response.status
			payload = response.json()
		finally:
			response.close()

		if (status != expected):
			raise errorClass(f"{method} {url} returned an unexpected status", status, payload)
		return payload

	def _node(this, payload, errorClass):
		try:
			return Node.FromRemote(payload)
		except ValueError:
			raise errorClass("Remote store did not return a node", payload=payload)


	def CreateNode(this, name, kind, parentId):
		body = {
			'name': name,
			'kind': NodeKind.Parse(kind).value,
			'parents': [parentId],
		}
		payload = this._request(
			"POST",
			this.metadata_url + "nodes",
			201,
			RemoteCreateError,
			data=json.dumps(body).encode('utf-8'),
			headers={'Content-Type': 'application/json'},
		)
		logging.debug(f"Created {kind} {name} under {parentId}.")
		return this._node(payload, RemoteCreateError)

	def CreateNodeWithContent(this, name, parentId, filePath):
		metadata = {
			'kind': NodeKind.FILE.value,
			'name': name,
			'parents': [parentId],
		}
		with MultipartStream(filePath, fields={'metadata': json.dumps(metadata)}, fileName=name) as body:
			payload = this._request(
				"POST",
				this.content_url + "nodes",
				201,
				RemoteTransferError,
				data=body,
				headers={'Content-Type': body.GetContentType(), 'Content-Length': str(body.length)},
				is_upload=True,
			)
		logging.debug(f"Uploaded {filePath} as {name} under {parentId}.")
		return this._node(payload, RemoteTransferError)

	def OverwriteContent(this, nodeId, filePath):
		with MultipartStream(filePath) as body:
			payload = this._request(
				"PUT",
				this.content_url + f"nodes/{quote(nodeId, safe='')}/content",
				200,
				RemoteTransferError,
				data=body,
				headers={'Content-Type': body.GetContentType(), 'Content-Length': str(body.length)},
				is_upload=True,
			)
		logging.debug(f"Overwrote content of {nodeId} with {filePath}.")
		return this._node(payload, RemoteTransferError)

	def FetchById(this, id):
		payload = this._request(
			"GET",
			this.metadata_url + f"nodes/{quote(id, safe='')}",
			200,
			RemoteTransferError,
		)
		return this._node(payload, RemoteTransferError)

	def FetchRoot(this):
		payload = this._request(
			"GET",
			this.metadata_url + "nodes?filters=" + quote("isRoot:true", safe=''),
			200,
			RemoteTransferError,
		)
		data = payload.get('data') if isinstance(payload, dict) else None
		if (not data):
			raise RemoteTransferError("Remote store reported no root node", payload=payload)
		return this._node(data[0], RemoteTransferError)
