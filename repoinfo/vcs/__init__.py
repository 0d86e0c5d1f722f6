"""Version control backends for repoinfo.

Public Interface:
    - VcsBackend: Backend interface
    - GitBackend, SubversionBackend, NullBackend: Implementations
    - detect_backend: Select a backend by probing the source root
"""

import logging
from pathlib import Path

from ..errors import ConfigurationError
from ..errors import NotAVersionControlledTree
from .base import VcsBackend
from .git_backend import GitBackend
from .null_backend import NullBackend
from .svn_backend import SubversionBackend

logger = logging.getLogger(__name__)

BACKENDS: dict[str, type[VcsBackend]] = {
    "git": GitBackend,
    "svn": SubversionBackend,
    "none": NullBackend,
}

# Probe order for "auto"
PROBE_ORDER = ("git", "svn")


def detect_backend(source_root: Path, preference: str = "auto") -> VcsBackend:
    """Select the version control backend for a source tree.

    Args:
        source_root: Root of the source tree
        preference: "auto" to probe Git then Subversion, or a backend name

    Returns:
        Backend instance; NullBackend when nothing matches under "auto"

    Raises:
        NotAVersionControlledTree: If a forced backend does not manage the tree
        ConfigurationError: If the preference names no backend
    """
    source_root = Path(source_root)

    if preference == "auto":
        for name in PROBE_ORDER:
            backend_cls = BACKENDS[name]
            if backend_cls.probe(source_root):
                logger.debug(f"Detected {name} working copy at {source_root}")
                return backend_cls(source_root)
        logger.debug(f"No version control detected at {source_root}")
        return NullBackend(source_root)

    backend_cls = BACKENDS.get(preference)
    if backend_cls is None:
        raise ConfigurationError(f"Unknown version control backend '{preference}'")
    if not backend_cls.probe(source_root):
        raise NotAVersionControlledTree(source_root, f"not a {preference} working copy")
    return backend_cls(source_root)


__all__ = [
    "VcsBackend",
    "GitBackend",
    "SubversionBackend",
    "NullBackend",
    "detect_backend",
    "BACKENDS",
]
