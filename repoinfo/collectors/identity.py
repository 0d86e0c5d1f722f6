"""Build user and build time."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import NamedTuple

from ..config.settings import GeneratorSettings
from ..errors import NotAVersionControlledTree
from ..vcs.base import VcsBackend
from .timestamps import format_timestamp
from .timestamps import now_local

logger = logging.getLogger(__name__)


class BuildIdentity(NamedTuple):
    build_user: str
    build_time: str


def format_build_user(name: str, email: str | None) -> str:
    """``NAME <EMAIL>``, or just ``NAME`` when there is no email."""
    return f"{name} <{email}>" if email else name


def collect_build_identity(
    settings: GeneratorSettings,
    backend: VcsBackend | None = None,
    fallback_user: str | None = None,
    clock: Callable[[], datetime] = now_local,
) -> BuildIdentity:
    """Resolve the credited build user and stamp the build time.

    Configured ``user_name``/``user_email`` win. Missing parts come from the
    version control system (Git user config, or the last Subversion commit
    author), then ``fallback_user``, then the placeholder.

    Args:
        settings: Generator settings
        backend: Version control backend of the source tree
        fallback_user: Name to use when neither config nor VCS has one
        clock: Source of the current time

    Returns:
        BuildIdentity tuple
    """
    name = settings.user_name
    email = settings.user_email

    if backend is not None and (name is None or email is None):
        try:
            vcs_name, vcs_email = backend.author()
        except NotAVersionControlledTree as e:
            logger.debug(f"No VCS author available: {e}")
        else:
            name = name or vcs_name
            email = email or vcs_email

    if not name:
        name = fallback_user or settings.placeholder
        logger.debug(f"No build user configured, using '{name}'")

    return BuildIdentity(
        build_user=format_build_user(name, email),
        build_time=format_timestamp(clock()),
    )
