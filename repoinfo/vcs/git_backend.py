"""Git backend built on GitPython."""

import logging
from datetime import datetime
from pathlib import Path

from git import InvalidGitRepositoryError
from git import NoSuchPathError
from git import Repo
from git.exc import GitError

from ..errors import NotAVersionControlledTree
from .base import VcsBackend

logger = logging.getLogger(__name__)


class GitBackend(VcsBackend):
    """Reads revision, origin and change times from a Git working tree.

    The repository may live above ``source_root``; parent directories are
    searched the same way ``git`` itself does.
    """

    name = "git"

    def __init__(self, source_root: Path) -> None:
        super().__init__(source_root)
        try:
            self.repo = Repo(self.source_root, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotAVersionControlledTree(self.source_root, "no git repository found") from e
        self.work_tree = Path(self.repo.working_tree_dir or self.source_root)
        logger.debug(f"Opened git repository at {self.work_tree}")

    @classmethod
    def probe(cls, source_root: Path) -> bool:
        try:
            with Repo(Path(source_root), search_parent_directories=True):
                pass
        except (InvalidGitRepositoryError, NoSuchPathError):
            return False
        return True

    def _head_commit(self):
        try:
            return self.repo.head.commit
        except ValueError:
            # Unborn branch: repository has no commits yet
            logger.debug(f"Repository at {self.work_tree} has no commits")
            return None
        except GitError as e:
            raise NotAVersionControlledTree(self.source_root, f"git failed: {e}") from e

    def revision(self, hash_length: int | None = None) -> str | None:
        commit = self._head_commit()
        if commit is None:
            return None
        hexsha = commit.hexsha
        return hexsha[:hash_length] if hash_length else hexsha

    def remote_url(self) -> str | None:
        remotes = {remote.name: remote for remote in self.repo.remotes}
        if not remotes:
            return None
        remote = remotes.get("origin") or next(iter(remotes.values()))
        try:
            return remote.url
        except GitError as e:
            logger.warning(f"Cannot read url of git remote '{remote.name}': {e}")
            return None

    def last_change(self) -> datetime | None:
        commit = self._head_commit()
        return commit.committed_datetime if commit is not None else None

    def modified_files(self) -> list[Path]:
        """Tracked files with staged or unstaged changes against HEAD."""
        if self._head_commit() is None:
            names = [entry[0] for entry in self.repo.index.entries]
        else:
            try:
                # -z output is never C-quoted
                output = self.repo.git.diff("HEAD", "--name-only", "-z")
            except GitError as e:
                raise NotAVersionControlledTree(self.source_root, f"git diff failed: {e}") from e
            names = output.split("\0")
        return [self.work_tree / name for name in names if name]

    def author(self) -> tuple[str | None, str | None]:
        reader = self.repo.config_reader()
        name = reader.get_value("user", "name", default="")
        email = reader.get_value("user", "email", default="")
        return (str(name) or None, str(email) or None)

    def close(self) -> None:
        self.repo.close()
