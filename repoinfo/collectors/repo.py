"""Repository revision and remote URL."""

import logging
from pathlib import Path
from typing import NamedTuple

from ..vcs import VcsBackend
from ..vcs import detect_backend

logger = logging.getLogger(__name__)


class RepoIdentity(NamedTuple):
    repo_hash: str
    repo_url: str


def collect_repo_identity(
    source_root: Path,
    backend: VcsBackend | None = None,
    hash_length: int | None = None,
    placeholder: str = "unknown",
) -> RepoIdentity:
    """Query the current revision and the remote origin URL.

    A versioned tree without commits or without a remote reports the
    placeholder for the missing value.

    Args:
        source_root: Root of the source tree
        backend: Backend to query (default: probed from source_root)
        hash_length: Abbreviate Git hashes to this many characters
        placeholder: Value for missing revision or URL

    Returns:
        RepoIdentity tuple

    Raises:
        NotAVersionControlledTree: If the tree is not a Git or Subversion working copy
    """
    if backend is None:
        with detect_backend(source_root) as owned:
            return collect_repo_identity(source_root, owned, hash_length, placeholder)

    revision = backend.revision(hash_length)
    url = backend.remote_url()

    if revision is None:
        logger.warning(f"No revision found in {source_root}; using '{placeholder}'")
    if url is None:
        logger.warning(f"No remote configured for {source_root}; using '{placeholder}'")

    logger.debug(f"{backend.name} revision={revision} url={url}")
    return RepoIdentity(repo_hash=revision or placeholder, repo_url=url or placeholder)
