import itertools

from libcloudmirror import Node, NodeKind, NodeCache, ContentHash
from libcloudmirror import RemoteCreateError, RemoteTransferError


# Stands in for the remote store. Keeps its own records, independent of any NodeCache.
class FakeRemote(object):
	def __init__(this, rootId="root-id"):
		this.ids = itertools.count(1)
		this.nodes = {}
		this.calls = []
		this.rejectNames = set() # Creates of these names are refused.
		this.rejectUploads = set() # Uploads from these local paths are refused.

		this.root = this.Store(Node(rootId, "root", NodeKind.FOLDER, isRoot=True))

	def Store(this, node):
		this.nodes[node.id] = node
		return node

	def NextId(this):
		return f"node-{next(this.ids)}"

	def Add(this, name, kind, parentId, contentHash=None, id=None):
		return this.Store(Node(id or this.NextId(), name, kind, [parentId], contentHash=contentHash))

	def CreateNode(this, name, kind, parentId):
		this.calls.append(('CreateNode', name, parentId))
		if (name in this.rejectNames):
			raise RemoteCreateError("POST nodes failed", 409, {"message": f"Conflict on {name}"})
		return this.Add(name, NodeKind.Parse(kind), parentId)

	def CreateNodeWithContent(this, name, parentId, filePath):
		this.calls.append(('CreateNodeWithContent', name, parentId))
		if (filePath in this.rejectUploads):
			raise RemoteTransferError("POST nodes failed", 500, {"message": "Internal error"})
		return this.Add(name, NodeKind.FILE, parentId, contentHash=ContentHash(filePath))

	def OverwriteContent(this, nodeId, filePath):
		this.calls.append(('OverwriteContent', nodeId))
		old = this.nodes[nodeId]
		return this.Store(Node(old.id, old.name, old.kind, old.parents, contentHash=ContentHash(filePath)))

	def FetchById(this, id):
		this.calls.append(('FetchById', id))
		if (id not in this.nodes):
			raise RemoteTransferError(f"GET nodes/{id} failed", 404, {"message": "Not found"})
		return this.nodes[id]

	def FetchRoot(this):
		this.calls.append(('FetchRoot',))
		return this.root

	def Count(this, call):
		return len([c for c in this.calls if c[0] == call])


# Just enough of redis.Redis for Authorization.
class FakeRedis(object):
	def __init__(this):
		this.data = {}

	def get(this, key):
		return this.data.get(key)

	def set(this, key, value, ex=None, nx=False):
		if (nx and key in this.data):
			return None
		this.data[key] = str(value).encode('utf-8')
		return True

	def delete(this, *keys):
		count = 0
		for key in keys:
			if (this.data.pop(key, None) is not None):
				count += 1
		return count

	# Only the compare-and-set script Authorization.SetValue runs.
	def eval(this, script, numkeys, key, expected, value):
		if (this.get(key) != str(expected).encode('utf-8')):
			return 0
		this.set(key, value)
		return 1


# A cache that already knows the remote's root.
def MakeCache(remote=None):
	cache = NodeCache("sqlite://")
	if (remote is not None):
		cache.Upsert(remote.root)
	return cache
