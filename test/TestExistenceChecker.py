from StandardTestFixture import StandardTestFixture
from Fakes import FakeRemote, MakeCache

from libcloudmirror import NodeKind, PathResolver, ExistenceChecker
from libcloudmirror import PathMatch, HashMatch, NoMatch


class TestExistenceChecker(StandardTestFixture):

	def MakeChecker(this):
		remote = FakeRemote()
		cache = MakeCache(remote)
		docs = cache.Upsert(remote.Add("docs", NodeKind.FOLDER, remote.root.id))
		cache.Upsert(remote.Add("a.txt", NodeKind.FILE, docs.id, contentHash="hash-a"))
		cache.Upsert(remote.Add("unhashed.txt", NodeKind.FILE, docs.id))
		return cache, ExistenceChecker(cache, PathResolver(cache, remote))

	def test_path_match_identical(this):
		cache, checker = this.MakeChecker()
		outcome = checker.CheckExists("docs/a.txt", "hash-a")
		assert isinstance(outcome, PathMatch)
		this.assert_equal(outcome.node.name, "a.txt")
		this.assert_equal(outcome.contentIdentical, True)

	def test_path_match_different_content(this):
		cache, checker = this.MakeChecker()
		outcome = checker.CheckExists("/docs/a.txt", "hash-b")
		assert isinstance(outcome, PathMatch)
		this.assert_equal(outcome.contentIdentical, False)

	def test_missing_remote_hash_is_not_identical(this):
		cache, checker = this.MakeChecker()
		outcome = checker.CheckExists("docs/unhashed.txt", "hash-a")
		assert isinstance(outcome, PathMatch)
		this.assert_equal(outcome.contentIdentical, False)

	def test_path_match_without_local_hash(this):
		cache, checker = this.MakeChecker()
		outcome = checker.CheckExists("docs/a.txt")
		assert isinstance(outcome, PathMatch)
		this.assert_equal(outcome.contentIdentical, None)

	def test_hash_match_elsewhere(this):
		cache, checker = this.MakeChecker()
		outcome = checker.CheckExists("other/copy.txt", "hash-a")
		assert isinstance(outcome, HashMatch)
		this.assert_equal(outcome.node.name, "a.txt")
		this.assert_equal(outcome.existingPath, "docs/a.txt")

	def test_no_match(this):
		cache, checker = this.MakeChecker()
		assert isinstance(checker.CheckExists("docs/b.txt", "hash-b"), NoMatch)
		assert isinstance(checker.CheckExists("docs/b.txt"), NoMatch)
