"""Error types for repoinfo.

Contract:
- EnvironmentUnavailable and NotAVersionControlledTree are recoverable:
  the generator substitutes a placeholder and keeps going.
- ConfigurationError is fatal: the CLI reports it and exits non-zero.
"""

from pathlib import Path


class RepoInfoError(Exception):
    """Base class for all repoinfo errors."""


class EnvironmentUnavailable(RepoInfoError):
    """Raised when a host identity field cannot be determined."""

    def __init__(self, field: str, reason: str = "") -> None:
        self.field = field
        message = f"Host field '{field}' is unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotAVersionControlledTree(RepoInfoError):
    """Raised when the source root is not a Git or Subversion working copy."""

    def __init__(self, source_root: Path, reason: str = "") -> None:
        self.source_root = source_root
        message = f"Not a version controlled tree: {source_root}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ConfigurationError(RepoInfoError):
    """Raised for invalid settings, formats or sync targets."""
