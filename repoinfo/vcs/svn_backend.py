"""Subversion backend driven by the ``svn`` command line client.

Contract:
- Inputs: A working copy path
- Outputs: Revision, URL, last-changed date and locally modified files
- Side Effects: Runs ``svn info --xml`` and ``svn status --xml``
"""

from __future__ import annotations

import logging
import subprocess
import xml.etree.ElementTree as ET
from collections.abc import Callable
from datetime import datetime
from functools import cached_property
from pathlib import Path

from ..errors import NotAVersionControlledTree
from .base import VcsBackend

logger = logging.getLogger(__name__)

CommandRunner = Callable[[list[str], Path], str]

# svn status item values that mean the working file differs from BASE
MODIFIED_ITEMS = frozenset({"modified", "added", "replaced", "conflicted", "merged"})


def run_svn(args: list[str], cwd: Path) -> str:
    """Run ``svn`` and return its standard output.

    Raises:
        NotAVersionControlledTree: If svn is missing or exits non-zero
    """
    try:
        result = subprocess.run(
            ["svn", "--non-interactive", *args],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise NotAVersionControlledTree(cwd, "svn executable not found") from e
    except subprocess.CalledProcessError as e:
        raise NotAVersionControlledTree(cwd, f"svn {args[0]} failed: {e.stderr.strip()}") from e
    return result.stdout


class SubversionBackend(VcsBackend):
    """Reads working copy state through ``svn info`` and ``svn status``.

    Subversion has no configured user identity, so ``author`` reports the
    author of the last committed change with no email.
    """

    name = "svn"

    def __init__(self, source_root: Path, runner: CommandRunner | None = None) -> None:
        super().__init__(source_root)
        self.runner = runner or run_svn

    @classmethod
    def probe(cls, source_root: Path) -> bool:
        # Subversion 1.7+ keeps a single .svn directory at the working copy root
        root = Path(source_root).resolve()
        return any((directory / ".svn").is_dir() for directory in (root, *root.parents))

    def _parse(self, output: str, command: str) -> ET.Element:
        try:
            return ET.fromstring(output)
        except ET.ParseError as e:
            raise NotAVersionControlledTree(self.source_root, f"unreadable svn {command} output") from e

    @cached_property
    def _info(self) -> ET.Element:
        root = self._parse(self.runner(["info", "--xml", "."], self.source_root), "info")
        entry = root.find("entry")
        if entry is None:
            raise NotAVersionControlledTree(self.source_root, "svn info returned no entry")
        return entry

    def revision(self, hash_length: int | None = None) -> str | None:
        # Revision numbers are never abbreviated
        return self._info.get("revision")

    def remote_url(self) -> str | None:
        url = self._info.findtext("url")
        return url.strip() if url else None

    def working_copy_root(self) -> Path:
        wcroot = self._info.findtext("wc-info/wcroot-abspath")
        return Path(wcroot) if wcroot else self.source_root

    def last_change(self) -> datetime | None:
        date = self._info.findtext("commit/date")
        if not date:
            return None
        # svn reports UTC with a trailing Z and microseconds
        return datetime.fromisoformat(date.strip().replace("Z", "+00:00"))

    def modified_files(self) -> list[Path]:
        root = self._parse(self.runner(["status", "--xml", "."], self.source_root), "status")
        files = []
        for entry in root.iter("entry"):
            status = entry.find("wc-status")
            if status is None or status.get("item") not in MODIFIED_ITEMS:
                continue
            path = Path(entry.get("path", ""))
            files.append(path if path.is_absolute() else self.source_root / path)
        return files

    def author(self) -> tuple[str | None, str | None]:
        name = self._info.findtext("commit/author")
        return (name.strip() if name else None, None)
