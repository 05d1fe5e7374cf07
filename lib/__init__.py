from .Errors import *
from .Upath import UniversalPath, udirname, ubasename, usplit, ujoin
from .Utils import ContentHash, ConfigureLogging
from .node.Node import Node
from .node.NodeKind import NodeKind
from .db.NodeCache import NodeCache
from .auth.Authorization import Authorization
from .remote.CloudDriveConnection import CloudDriveConnection
from .tree.PathResolver import PathResolver
from .tree.DirectoryEnsurer import DirectoryEnsurer
from .tree.ExistenceChecker import ExistenceChecker
from .tree.Outcome import PathMatch, HashMatch, NoMatch
from .upload.UploadStates import UploadState
from .upload.UploadResult import UploadResult
from .upload.UploadOrchestrator import UploadOrchestrator
from .CloudMirror import CloudMirror
