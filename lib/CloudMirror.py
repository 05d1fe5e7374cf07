"""
lib/CloudMirror.py

Purpose:
Implements the CloudMirror executor, which wires the node cache, authorization, remote connection and tree / upload layers together.

Place in Architecture:
The entry point for applications. It owns every shared resource (SQL engine, Redis client, HTTP connection) and exposes the operations of the layers below.

Interface:

	Inherits from eons.Executor.
	Sets up required and optional arguments (metadata_url, content_url, renewer, sql_url, redis_host, renew_after, etc.).
	Prebuilt resources may be passed in as engine, redis_client and remote; anything not given is built from the other arguments.
	Methods include:
		ValidateArgs(): Checks and converts arguments (e.g. lifetimes, timeouts).
		BeforeFunction(): Builds the engine, Redis client, connection and layers.
		Function(): Bootstraps the root node.
		Bootstrap(), PathOf(node), ResolvePath(path), Children(path), EnsurePath(path), CheckExists(path, localContentHash=None)
		UploadFile(src, dest, overwrite=False), UploadDirectory(src, destRoot, overwrite=False)
		GetDatabaseSession(), GetSourceConnection()

TODOs/FIXMEs:
None.
"""

import eons
import os
import logging
import sqlalchemy
import redis

from .Utils import parse_lifetime
from .auth.Authorization import Authorization
from .db.NodeCache import NodeCache
from .remote.CloudDriveConnection import CloudDriveConnection
from .tree.PathResolver import PathResolver
from .tree.DirectoryEnsurer import DirectoryEnsurer
from .tree.ExistenceChecker import ExistenceChecker
from .upload.UploadOrchestrator import UploadOrchestrator

# NOTE: For thread safety, it is illegal to write to any CloudMirror args after it has been started.
class CloudMirror(eons.Executor):
	def __init__(this, name="CloudMirror"):

		super().__init__(name)

		this.arg.kw.static.append('metadata_url')
		this.arg.kw.static.append('content_url')

		this.arg.kw.optional["renewer"] = None # Callable returning a new access token. Required.
		this.arg.kw.optional["sql_url"] = "sqlite:///.cloudmirror/nodes.db"
		this.arg.kw.optional["redis_host"] = "127.0.0.1"
		this.arg.kw.optional["redis_port"] = 6379
		this.arg.kw.optional["redis_db"] = 0
		this.arg.kw.optional["renew_after"] = "60" # Renew the authorization once it is older than this (seconds).
		this.arg.kw.optional["net_timeout"] = "30" # Network timeout (seconds).
		this.arg.kw.optional["max_connections"] = 10
		this.arg.kw.optional["lock_timeout"] = "30" # Expiry of the renewal lock (seconds). Should only matter if a renewer crashed.

		this.arg.kw.optional["engine"] = None
		this.arg.kw.optional["redis_client"] = None
		this.arg.kw.optional["remote"] = None

		this.nodes = None
		this.source = None

	# ValidateArgs is automatically called before Function, per eons.Functor.
	def ValidateArgs(this):
		super().ValidateArgs()

		for key in ['metadata_url', 'content_url']:
			value = getattr(this, key)
			if (not isinstance(value, str) or not value.startswith(("http://", "https://"))):
				raise eons.MissingArgumentError(f"error: --{key.replace('_', '-')} {value} is not an http(s) url")

		if (not callable(this.renewer)):
			raise eons.MissingArgumentError(f"error: renewer {this.renewer} is not callable")

		for key in ['renew_after', 'lock_timeout']:
			try:
				value = parse_lifetime(getattr(this, key))
				if (value < 0):
					raise ValueError()
			except ValueError:
				raise eons.MissingArgumentError(f"error: --{key.replace('_', '-')} {getattr(this, key)} is not a valid lifetime")
			setattr(this, key, value)

		try:
			this.net_timeout = float(this.net_timeout)
			if not 0 < this.net_timeout < float('inf'):
				raise ValueError()
		except ValueError:
			raise eons.MissingArgumentError(f"error: --net-timeout {this.net_timeout} is not a valid timeout")

		for key in ['redis_port', 'redis_db', 'max_connections']:
			try:
				setattr(this, key, int(getattr(this, key)))
			except (TypeError, ValueError):
				raise eons.MissingArgumentError(f"error: --{key.replace('_', '-')} {getattr(this, key)} is not an integer")

		if (this.max_connections < 1):
			raise eons.MissingArgumentError(f"error: --max-connections {this.max_connections} must be at least 1")


	def BeforeFunction(this):
		if (this.engine is None):
			this.engine = this.CreateEngine(this.sql_url)
		if (this.redis_client is None):
			this.redis_client = redis.Redis(host=this.redis_host, port=this.redis_port, db=this.redis_db)

		this.nodes = NodeCache(this.engine)
		this.authorization = Authorization(this.redis_client, this.renewer, lock_timeout=this.lock_timeout)

		if (this.remote is None):
			this.remote = CloudDriveConnection(
				this.metadata_url,
				this.content_url,
				this.authorization,
				this.net_timeout,
				max_connections=this.max_connections,
			)
		this.source = this.remote

		this.resolver = PathResolver(this.nodes, this.GetSourceConnection())
		this.ensurer = DirectoryEnsurer(this.nodes, this.resolver, this.GetSourceConnection())
		this.checker = ExistenceChecker(this.nodes, this.resolver)
		this.uploader = UploadOrchestrator(
			this.nodes,
			this.ensurer,
			this.checker,
			this.GetSourceConnection(),
			authorization=this.authorization,
			renew_after=this.renew_after,
		)

	def Function(this):
		return this.Bootstrap()


	# Make sure the directory holding a sqlite database exists.
	@staticmethod
	def CreateEngine(sql_url):
		url = sqlalchemy.engine.make_url(sql_url)
		if (url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:"):
			directory = os.path.dirname(os.path.abspath(url.database))
			os.makedirs(directory, exist_ok=True)
		return sqlalchemy.create_engine(url)

	def GetDatabaseSession(this):
		return this.nodes.GetDatabaseSession()

	def GetSourceConnection(this):
		return this.source

	def Bootstrap(this):
		root = this.resolver.GetRoot()
		logging.info(f"Root node is {root.id}; {this.nodes.Count()} nodes cached.")
		return root

	def PathOf(this, node):
		return this.resolver.PathOf(node)

	def ResolvePath(this, path):
		return this.resolver.ResolvePath(path)

	def Children(this, path):
		return this.resolver.Children(path)

	def EnsurePath(this, path):
		return this.ensurer.EnsurePath(path)

	def CheckExists(this, path, localContentHash=None):
		return this.checker.CheckExists(path, localContentHash)

	def UploadFile(this, src, dest, overwrite=False):
		return this.uploader.UploadFile(src, dest, overwrite)

	def UploadDirectory(this, src, destRoot, overwrite=False):
		return this.uploader.UploadDirectory(src, destRoot, overwrite)
