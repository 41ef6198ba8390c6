"""Tests for repository detection helpers."""

from gitwrap.git.utils import find_git_root, is_git_repository


def _make_bare_layout(path, head=True):
    for name in ("info", "objects", "refs"):
        (path / name).mkdir()
    if head:
        (path / "HEAD").write_text("ref: refs/heads/main\n")


class TestIsGitRepository:
    """Tests for is_git_repository function."""

    def test_dot_git_directory(self, tmp_path):
        """Test returns True when .git directory exists."""
        (tmp_path / ".git").mkdir()
        assert is_git_repository(tmp_path) is True

    def test_bare_layout(self, tmp_path):
        """Test returns True for info/, objects/, refs/ and HEAD."""
        _make_bare_layout(tmp_path)
        assert is_git_repository(tmp_path) is True

    def test_bare_layout_missing_head(self, tmp_path):
        """Test all four markers are required."""
        _make_bare_layout(tmp_path, head=False)
        assert is_git_repository(tmp_path) is False

    def test_bare_layout_missing_refs(self, tmp_path):
        (tmp_path / "info").mkdir()
        (tmp_path / "objects").mkdir()
        (tmp_path / "HEAD").write_text("ref: refs/heads/main\n")
        assert is_git_repository(tmp_path) is False

    def test_plain_directory(self, tmp_path):
        """Test returns False for an ordinary directory."""
        (tmp_path / "src").mkdir()
        assert is_git_repository(tmp_path) is False

    def test_git_file_is_not_a_directory(self, tmp_path):
        """Test a .git file (worktree pointer) does not count."""
        (tmp_path / ".git").write_text("gitdir: /elsewhere")
        assert is_git_repository(tmp_path) is False


class TestFindGitRoot:
    """Tests for find_git_root function."""

    def test_find_from_subdirectory(self, tmp_path):
        """Test finding git root from a nested directory."""
        (tmp_path / ".git").mkdir()
        subdir = tmp_path / "src" / "lib"
        subdir.mkdir(parents=True)

        assert find_git_root(subdir) == tmp_path.resolve()

    def test_find_from_root(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert find_git_root(tmp_path) == tmp_path.resolve()

    def test_find_bare_repository(self, tmp_path):
        bare = tmp_path / "project.git"
        bare.mkdir()
        _make_bare_layout(bare)

        assert find_git_root(bare / "refs") == bare.resolve()
