"""
Tests for the GitPython backed repository reader.
"""

import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
from git import Repo

from repoinfo.collectors import collect_source_modify_time
from repoinfo.collectors import format_timestamp
from repoinfo.errors import NotAVersionControlledTree
from repoinfo.vcs import GitBackend

REMOTE_URL = "https://example.com/repo.git"


@pytest.mark.integration
class TestGitBackend:
    """Test GitBackend against real repositories."""

    def test_probe(self, git_repo: Repo, untracked_tree: Path) -> None:
        assert GitBackend.probe(Path(git_repo.working_tree_dir))
        assert not GitBackend.probe(untracked_tree)

    def test_probe_finds_repository_from_subdirectory(self, git_repo: Repo) -> None:
        subdir = Path(git_repo.working_tree_dir) / "sub" / "dir"
        subdir.mkdir(parents=True)

        backend = GitBackend(subdir)

        assert GitBackend.probe(subdir)
        assert backend.work_tree == Path(git_repo.working_tree_dir)

    def test_not_a_repository_raises(self, untracked_tree: Path) -> None:
        with pytest.raises(NotAVersionControlledTree):
            GitBackend(untracked_tree)

    def test_revision_is_head_hexsha(self, git_repo: Repo) -> None:
        backend = GitBackend(Path(git_repo.working_tree_dir))

        assert backend.revision() == git_repo.head.commit.hexsha
        assert len(backend.revision()) == 40

    def test_revision_abbreviated(self, git_repo: Repo) -> None:
        backend = GitBackend(Path(git_repo.working_tree_dir))

        assert backend.revision(7) == git_repo.head.commit.hexsha[:7]

    def test_remote_url_prefers_origin(self, make_git_repo: Callable[..., Repo]) -> None:
        repo = make_git_repo(remote=None)
        repo.create_remote("mirror", "https://mirror.example.com/repo.git")
        repo.create_remote("origin", REMOTE_URL)

        assert GitBackend(Path(repo.working_tree_dir)).remote_url() == REMOTE_URL

    def test_remote_url_falls_back_to_other_remote(self, make_git_repo: Callable[..., Repo]) -> None:
        repo = make_git_repo(remote=None)
        repo.create_remote("upstream", "git@example.com:team/repo.git")

        assert GitBackend(Path(repo.working_tree_dir)).remote_url() == "git@example.com:team/repo.git"

    def test_remote_url_none_without_remotes(self, make_git_repo: Callable[..., Repo]) -> None:
        repo = make_git_repo(remote=None)

        assert GitBackend(Path(repo.working_tree_dir)).remote_url() is None

    def test_repository_without_commits(self, make_git_repo: Callable[..., Repo]) -> None:
        repo = make_git_repo(commit=False)
        backend = GitBackend(Path(repo.working_tree_dir))

        assert backend.revision() is None
        assert backend.last_change() is None
        assert sorted(p.name for p in backend.modified_files()) == ["main.c", "util.c"]

    def test_last_change_is_commit_time(self, git_repo: Repo) -> None:
        backend = GitBackend(Path(git_repo.working_tree_dir))

        last_change = backend.last_change()

        assert last_change == git_repo.head.commit.committed_datetime
        assert last_change.tzinfo is not None

    def test_clean_tree_has_no_modified_files(self, git_repo: Repo) -> None:
        assert GitBackend(Path(git_repo.working_tree_dir)).modified_files() == []

    def test_modified_files_include_staged_and_unstaged(self, git_repo: Repo) -> None:
        root = Path(git_repo.working_tree_dir)
        (root / "main.c").write_text("int main(void) { return 2; }\n")
        (root / "util.c").write_text("int util(void) { return 3; }\n")
        git_repo.index.add(["util.c"])
        (root / "untracked.c").write_text("/* not tracked */\n")

        modified = GitBackend(root).modified_files()

        assert sorted(modified) == [root / "main.c", root / "util.c"]

    def test_author_from_git_config(self, git_repo: Repo) -> None:
        backend = GitBackend(Path(git_repo.working_tree_dir))

        assert backend.author() == ("Build Bot", "bot@example.com")

    def test_deleted_file_is_listed(self, git_repo: Repo) -> None:
        root = Path(git_repo.working_tree_dir)
        os.remove(root / "util.c")

        assert GitBackend(root).modified_files() == [root / "util.c"]

    def test_non_ascii_file_name(self, git_repo: Repo) -> None:
        root = Path(git_repo.working_tree_dir)
        (root / "café.c").write_text("int cafe(void) { return 0; }\n")
        git_repo.index.add(["café.c"])
        git_repo.index.commit("add café.c")
        (root / "café.c").write_text("int cafe(void) { return 1; }\n")
        later = git_repo.head.commit.committed_date + 30 * 86400
        os.utime(root / "café.c", (later, later))

        backend = GitBackend(root)

        assert backend.modified_files() == [root / "café.c"]
        assert collect_source_modify_time(root, backend) == format_timestamp(datetime.fromtimestamp(later))

    def test_backend_closes_repository(self, git_repo: Repo, monkeypatch: pytest.MonkeyPatch) -> None:
        closed = []
        monkeypatch.setattr(Repo, "close", lambda self: closed.append(self.working_tree_dir))

        with GitBackend(Path(git_repo.working_tree_dir)) as backend:
            assert backend.revision() == git_repo.head.commit.hexsha

        assert closed == [git_repo.working_tree_dir]
