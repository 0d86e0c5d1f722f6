"""Build host identity: machine name, account and operating system.

Contract:
- Inputs: Local system state (hostname, process owner, OS release files)
- Outputs: HostInfo with placeholders for anything unreadable
- Side Effects: None
"""

import getpass
import logging
import platform
import socket
from typing import NamedTuple

import psutil

from ..errors import EnvironmentUnavailable

logger = logging.getLogger(__name__)


class HostInfo(NamedTuple):
    host_name: str
    host_user: str
    host_os_nv: str


def read_host_name() -> str:
    try:
        name = socket.gethostname()
    except OSError as e:
        raise EnvironmentUnavailable("hostName", str(e)) from e
    if not name:
        raise EnvironmentUnavailable("hostName", "empty hostname")
    return name


def read_host_user() -> str:
    """Login name of the build account.

    getpass consults LOGNAME/USER and the password database; containers often
    have neither, so fall back to the owner of the current process.
    """
    try:
        return getpass.getuser()
    except (OSError, KeyError) as e:
        logger.debug(f"getpass could not determine user: {e}")

    try:
        username = psutil.Process().username()
    except (psutil.Error, KeyError) as e:
        raise EnvironmentUnavailable("hostUser", str(e)) from e
    # Windows reports DOMAIN\user
    return username.rsplit("\\", 1)[-1]


def read_host_os_nv() -> str:
    """Operating system name and version, e.g. ``Ubuntu 22.04``."""
    system = platform.system()
    if not system:
        raise EnvironmentUnavailable("hostOsNV", "platform.system() is empty")

    if system == "Linux":
        try:
            release = platform.freedesktop_os_release()
        except OSError:
            logger.debug("No os-release file, falling back to kernel release")
        else:
            name = release.get("NAME") or release.get("ID") or system
            version = release.get("VERSION_ID", "")
            return f"{name} {version}".strip()
    elif system == "Darwin":
        version = platform.mac_ver()[0]
        if version:
            return f"macOS {version}"
    elif system == "Windows":
        return f"Windows {platform.release()}".strip()

    return f"{system} {platform.release()}".strip()


def collect_host_info(placeholder: str = "unknown") -> HostInfo:
    """Read host name, host user and OS name/version.

    Each field is probed independently; one that cannot be read is replaced
    with ``placeholder`` and logged.

    Args:
        placeholder: Value used for unavailable fields

    Returns:
        HostInfo tuple
    """
    values = []
    for probe in (read_host_name, read_host_user, read_host_os_nv):
        try:
            values.append(probe())
        except EnvironmentUnavailable as e:
            logger.warning(f"{e}; using '{placeholder}'")
            values.append(placeholder)
    return HostInfo(*values)
