"""
Shared pytest fixtures for the repoinfo test suite.

Provides fixtures for:
- Environment isolation (no REPOINFO_* variables, no stray .env)
- Real git repositories built with GitPython
- Unversioned source trees
- Sample metadata records and a fixed clock
"""

import os
from collections.abc import Callable
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from pathlib import Path

import pytest
from git import Actor
from git import Repo

from repoinfo.models import BuildMetadataRecord

REMOTE_URL = "https://example.com/repo.git"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty directory with no REPOINFO_ variables set."""
    for key in list(os.environ):
        if key.upper().startswith("REPOINFO_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def untracked_tree(tmp_path: Path) -> Path:
    """Unversioned source tree with a couple of files.

    Returns:
        Path to the tree root
    """
    root = tmp_path / "plain"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.c").write_text("int main(void) { return 0; }\n")
    (root / "README").write_text("plain tree\n")
    return root


@pytest.fixture
def make_git_repo(tmp_path: Path) -> Callable[..., Repo]:
    """Factory for git repositories with one commit.

    Example:
        >>> def test_repo(make_git_repo):
        ...     repo = make_git_repo(remote=None)
        ...     assert not repo.remotes
    """

    def _make(name: str = "repo", remote: str | None = REMOTE_URL, commit: bool = True) -> Repo:
        root = tmp_path / name
        root.mkdir()
        repo = Repo.init(root)
        with repo.config_writer() as writer:
            writer.set_value("user", "name", "Build Bot")
            writer.set_value("user", "email", "bot@example.com")

        (root / "main.c").write_text("int main(void) { return 0; }\n")
        (root / "util.c").write_text("int util(void) { return 1; }\n")
        repo.index.add(["main.c", "util.c"])
        if commit:
            actor = Actor("Build Bot", "bot@example.com")
            repo.index.commit("initial commit", author=actor, committer=actor)
        if remote:
            repo.create_remote("origin", remote)
        return repo

    return _make


@pytest.fixture
def git_repo(make_git_repo: Callable[..., Repo]) -> Repo:
    """Git repository with one commit and origin set to REMOTE_URL."""
    return make_git_repo()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at 2018-01-30 10:20:30 +0800."""
    moment = datetime(2018, 1, 30, 10, 20, 30, tzinfo=timezone(timedelta(hours=8)))
    return lambda: moment


@pytest.fixture
def sample_record() -> BuildMetadataRecord:
    """Record matching a typical generated RepoInfo header."""
    return BuildMetadataRecord(
        host_name="host name",
        host_user="user name",
        host_os_nv="Ubuntu 14.04",
        build_user="user-name <email@demo.com>",
        build_time="2018-01-30 10:20:30 +0800",
        modify_time="2019-01-30 20:50:59 +0800",
        repo_hash="615",
        repo_url="svn://addr/app/trunk/mta",
    )
