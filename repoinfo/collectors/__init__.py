"""Collectors that read build and repository provenance.

Public Interface:
    - collect_host_info: Host name, host user, OS name/version
    - collect_build_identity: Build user and build time
    - collect_source_modify_time: Latest source modification
    - collect_repo_identity: Revision and remote URL
    - format_timestamp: Shared timestamp format
"""

from .host import HostInfo
from .host import collect_host_info
from .identity import BuildIdentity
from .identity import collect_build_identity
from .repo import RepoIdentity
from .repo import collect_repo_identity
from .source import collect_source_modify_time
from .timestamps import TIMESTAMP_PATTERN
from .timestamps import format_timestamp

__all__ = [
    "HostInfo",
    "BuildIdentity",
    "RepoIdentity",
    "collect_host_info",
    "collect_build_identity",
    "collect_source_modify_time",
    "collect_repo_identity",
    "format_timestamp",
    "TIMESTAMP_PATTERN",
]
