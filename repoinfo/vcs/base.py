"""Version control backend interface."""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from datetime import datetime
from pathlib import Path


class VcsBackend(ABC):
    """Read-only view of the version control state of a source tree.

    Backends return None for values that are legitimately absent in a
    versioned tree (no commits yet, no remote configured) and raise
    NotAVersionControlledTree when the tree cannot be queried at all.
    """

    name: str = "none"

    def __init__(self, source_root: Path) -> None:
        self.source_root = Path(source_root).resolve()

    @classmethod
    @abstractmethod
    def probe(cls, source_root: Path) -> bool:
        """Return True if this backend manages ``source_root``."""

    @abstractmethod
    def revision(self, hash_length: int | None = None) -> str | None:
        """Current checked-out revision identifier."""

    @abstractmethod
    def remote_url(self) -> str | None:
        """Remote origin URL."""

    @abstractmethod
    def last_change(self) -> datetime | None:
        """Timestamp of the last committed change, timezone-aware."""

    @abstractmethod
    def modified_files(self) -> list[Path]:
        """Absolute paths of files changed since the last commit."""

    def author(self) -> tuple[str | None, str | None]:
        """Configured or last-seen (name, email) of the committer."""
        return None, None

    def close(self) -> None:
        """Release handles held on the working copy."""

    def __enter__(self) -> VcsBackend:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.source_root)!r})"
