"""
lib/Upath.py

Purpose:
Implements a universal path class that normalizes remote paths (upaths) in a consistent manner.

Place in Architecture:
Used by the tree layer so that "a/b", "/a/b/" and "a//b" all name the same remote node. Remote paths never have a leading slash; the root is the empty upath.

Interface:

	__init__(path=""): Constructs a UniversalPath from a string, a list of segments or another UniversalPath.
	__str__(): Returns the upath as a string.
	FromPath(path): Normalizes a path string typed by a user.
	FromSegments(names): Takes names as they are, one segment each (e.g. local file names).
	GetSegments(): Returns the list of names from the root down.
	GetParent(): Returns the parent upath.
	GetName(): Returns the last segment.
	Join(*names): Returns a new upath with the names appended, each as one segment.
	udirname(), ubasename(), usplit(), ujoin(): string helpers.

TODOs/FIXMEs:
None noted.
"""

class UniversalPath:
	def __init__(this, path=""):
		if (isinstance(path, UniversalPath)):
			this.segments = list(path.segments)
		elif (isinstance(path, (list, tuple))):
			this.FromSegments(path)
		else:
			this.FromPath(path)
		this.upath = "/".join(this.segments)

	def __str__(this):
		return this.upath

	def __repr__(this):
		return f"UniversalPath({this.upath!r})"

	def __eq__(this, other):
		if (isinstance(other, UniversalPath)):
			return this.segments == other.segments
		if (isinstance(other, str)):
			return this.segments == UniversalPath(other).segments
		return NotImplemented

	def __hash__(this):
		return hash(tuple(this.segments))

	def __bool__(this):
		return bool(this.segments)

	# Backslashes count as separators here, since users type both.
	def FromPath(this, path):
		if (not isinstance(path, str)):
			raise TypeError(f"Cannot make a upath from {type(path).__name__}")

		segments = [segment for segment in path.replace("\\", "/").split("/") if segment]
		for segment in segments:
			if (segment in (".", "..")):
				raise ValueError(f"Relative segment '{segment}' not allowed in remote path {path!r}")
		this.segments = segments

	# Each name is kept verbatim. A local file named "a\b.jpg" stays one node.
	def FromSegments(this, names):
		segments = [str(name) for name in names]
		for segment in segments:
			if (not segment or "/" in segment or segment in (".", "..")):
				raise ValueError(f"{segment!r} is not a valid remote name")
		this.segments = segments

	def GetSegments(this):
		return list(this.segments)

	def GetParent(this):
		return UniversalPath(this.segments[:-1])

	def GetName(this):
		if (not this.segments):
			return ""
		return this.segments[-1]

	def Join(this, *names):
		return UniversalPath(this.segments + list(names))


def udirname(upath):
	return "/".join(str(upath).split("/")[:-1])


def ubasename(upath):
	return str(upath).split("/")[-1]


def usplit(upath):
	return UniversalPath(upath).GetSegments()


def ujoin(*parts):
	segments = []
	for part in parts:
		segments.extend(usplit(part))
	return "/".join(segments)
