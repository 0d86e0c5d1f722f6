"""Latest modification time of the tracked source tree."""

import logging
from datetime import datetime
from pathlib import Path

from ..errors import NotAVersionControlledTree
from ..vcs import NullBackend
from ..vcs import VcsBackend
from ..vcs import detect_backend
from .timestamps import format_timestamp

logger = logging.getLogger(__name__)


def _latest_mtime(paths: list[Path]) -> datetime | None:
    latest = None
    for path in paths:
        try:
            mtime = path.stat().st_mtime
        except OSError:
            # Deleted in the working tree, or unreadable
            continue
        if latest is None or mtime > latest:
            latest = mtime
    return datetime.fromtimestamp(latest).astimezone() if latest is not None else None


def latest_modification(backend: VcsBackend, ignore: frozenset[Path] = frozenset()) -> datetime | None:
    """Max of the last committed change and local edits, or None for an empty tree."""
    files = [path for path in backend.modified_files() if path.resolve() not in ignore]
    candidates = [backend.last_change(), _latest_mtime(files)]
    candidates = [c for c in candidates if c is not None]
    return max(candidates) if candidates else None


def collect_source_modify_time(
    source_root: Path,
    backend: VcsBackend | None = None,
    placeholder: str = "unknown",
    ignore: frozenset[Path] = frozenset(),
) -> str:
    """Determine the most recent modification across the tracked source tree.

    For Git and Subversion this is the later of the last commit and the
    mtimes of locally modified tracked files. For an unversioned tree every
    file under ``source_root`` counts.

    Args:
        source_root: Root of the source tree
        backend: Backend to query (default: probed from source_root)
        placeholder: Value returned when no timestamp can be found
        ignore: Resolved paths to leave out, such as the generated artifact itself

    Returns:
        Timestamp formatted ``YYYY-MM-DD HH:MM:SS +HHMM``
    """
    if backend is None:
        with detect_backend(source_root) as owned:
            return collect_source_modify_time(source_root, owned, placeholder, ignore)

    try:
        latest = latest_modification(backend, ignore)
    except NotAVersionControlledTree as e:
        logger.warning(f"{e}; using file modification times")
        latest = latest_modification(NullBackend(source_root), ignore)

    if latest is None:
        logger.warning(f"No source files found under {source_root}; using '{placeholder}'")
        return placeholder
    return format_timestamp(latest)
