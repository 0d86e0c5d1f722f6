"""Metadata snapshot generator.

Collects host, build and repository provenance into a BuildMetadataRecord
and emits it. Missing provenance never fails the build: host fields that
cannot be read and repository fields of an unversioned tree are replaced
with the configured placeholder.

Contract:
- Inputs: Source root, GeneratorSettings
- Outputs: BuildMetadataRecord
- Side Effects: generate() writes the output artifact
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .collectors import collect_build_identity
from .collectors import collect_host_info
from .collectors import collect_repo_identity
from .collectors import collect_source_modify_time
from .collectors.repo import RepoIdentity
from .collectors.timestamps import now_local
from .config.settings import GeneratorSettings
from .emitters import emit
from .emitters.writer import temp_path_for
from .errors import NotAVersionControlledTree
from .models import BuildMetadataRecord
from .vcs import NullBackend
from .vcs import VcsBackend
from .vcs import detect_backend

logger = logging.getLogger(__name__)


def select_backend(source_root: Path, preference: str = "auto") -> VcsBackend:
    """Probe the source root, falling back to NullBackend when a forced backend does not apply."""
    try:
        return detect_backend(source_root, preference)
    except NotAVersionControlledTree as e:
        logger.warning(f"{e}; repository fields will be placeholders")
        return NullBackend(source_root)


def generate_record(
    source_root: Path,
    settings: GeneratorSettings | None = None,
    backend: VcsBackend | None = None,
    clock: Callable[[], datetime] = now_local,
    ignore: frozenset[Path] = frozenset(),
) -> BuildMetadataRecord:
    """Collect a complete BuildMetadataRecord for ``source_root``.

    Args:
        source_root: Root of the source tree
        settings: Generator settings (default: GeneratorSettings())
        backend: Version control backend (default: probed per settings.vcs)
        clock: Source of the build time
        ignore: Files left out of the modification time scan

    Returns:
        Frozen metadata record
    """
    settings = settings or GeneratorSettings()
    source_root = Path(source_root).resolve()
    placeholder = settings.placeholder

    if backend is None:
        with select_backend(source_root, settings.vcs) as owned:
            return generate_record(source_root, settings, owned, clock, ignore)
    logger.debug(f"Using {backend.name} backend for {source_root}")

    host = collect_host_info(placeholder)

    try:
        repo = collect_repo_identity(source_root, backend, settings.hash_length, placeholder)
    except NotAVersionControlledTree as e:
        logger.warning(f"{e}; using '{placeholder}' for repoHash and repoUrl")
        repo = RepoIdentity(repo_hash=placeholder, repo_url=placeholder)

    modify_time = collect_source_modify_time(source_root, backend, placeholder, ignore)

    fallback_user = host.host_user if host.host_user != placeholder else None
    identity = collect_build_identity(settings, backend, fallback_user, clock)

    return BuildMetadataRecord(
        host_name=host.host_name,
        host_user=host.host_user,
        host_os_nv=host.host_os_nv,
        build_user=identity.build_user,
        build_time=identity.build_time,
        modify_time=modify_time,
        repo_hash=repo.repo_hash,
        repo_url=repo.repo_url,
    )


def generate(
    source_root: Path,
    output_path: Path,
    settings: GeneratorSettings | None = None,
    fmt: str | None = None,
    clock: Callable[[], datetime] = now_local,
) -> BuildMetadataRecord:
    """Collect metadata for ``source_root`` and write it to ``output_path``.

    Args:
        source_root: Root of the source tree
        output_path: Generated artifact path, overwritten atomically
        settings: Generator settings (default: GeneratorSettings())
        fmt: Output format (default: settings.output_format, then the file suffix)
        clock: Source of the build time

    Returns:
        The emitted record

    Raises:
        ConfigurationError: If the output format is unknown
    """
    settings = settings or GeneratorSettings()
    output_path = Path(output_path).resolve()
    # The artifact must not feed its own modifyTime on the next run
    ignore = frozenset({output_path, temp_path_for(output_path)})
    record = generate_record(source_root, settings, clock=clock, ignore=ignore)
    emit(record, output_path, fmt or settings.output_format)
    return record
