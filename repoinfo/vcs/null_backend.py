"""Backend for source trees that are not under version control."""

import logging
import os
from datetime import datetime
from pathlib import Path

from ..errors import NotAVersionControlledTree
from .base import VcsBackend

logger = logging.getLogger(__name__)


class NullBackend(VcsBackend):
    """Stand-in for an unversioned tree.

    Repository identity is unavailable; every regular file under the root
    counts as a source file, skipping hidden directories.
    """

    name = "none"

    @classmethod
    def probe(cls, source_root: Path) -> bool:
        return Path(source_root).is_dir()

    def revision(self, hash_length: int | None = None) -> str | None:
        raise NotAVersionControlledTree(self.source_root)

    def remote_url(self) -> str | None:
        raise NotAVersionControlledTree(self.source_root)

    def last_change(self) -> datetime | None:
        return None

    def modified_files(self) -> list[Path]:
        files = []
        for dirpath, dirnames, filenames in os.walk(self.source_root):
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            files.extend(Path(dirpath) / name for name in filenames)
        logger.debug(f"Found {len(files)} files under {self.source_root}")
        return files
