"""Data models for repoinfo.

Contract:
- Inputs: Values gathered by the collectors
- Outputs: Immutable, validated model instances
- Side Effects: None (pure data structures)
"""

from __future__ import annotations

import re
from typing import ClassVar
from typing import NamedTuple

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel

from .errors import ConfigurationError

SEMVER_PATTERN = re.compile(r"^(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)(?:-(?P<tweak>[a-z0-9.-]+))?$")


class CamelCaseModel(BaseModel):
    """Base model serialized with camelCase names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class BuildMetadataRecord(CamelCaseModel):
    """Snapshot of build and repository provenance.

    Every field is a plain string so that both numeric Subversion revisions
    and Git content hashes fit in ``repo_hash``. The record is frozen: it is
    built once per generator run and replaced wholesale on the next one.

    Attributes:
        host_name: Name of the machine performing the build
        host_user: Account name performing the build
        host_os_nv: Operating system name and version of the build host
        build_user: Identity credited for the build, ``NAME <EMAIL>``
        build_time: Build timestamp, ``YYYY-MM-DD HH:MM:SS +HHMM``
        modify_time: Latest source modification, same format
        repo_hash: Revision identifier (SVN revision or Git commit hash)
        repo_url: Remote repository URL

    Example:
        >>> record = BuildMetadataRecord(
        ...     host_name="builder",
        ...     host_user="ci",
        ...     host_os_nv="Ubuntu 22.04",
        ...     build_user="ci <ci@example.com>",
        ...     build_time="2024-01-30 10:20:30 +0800",
        ...     modify_time="2024-01-29 20:50:59 +0800",
        ...     repo_hash="615",
        ...     repo_url="svn://addr/app/trunk/mta",
        ... )
        >>> record.constants()["repoHash"]
        '615'
    """

    FIELD_NAMES: ClassVar[tuple[str, ...]] = (
        "hostName",
        "hostUser",
        "hostOsNV",
        "buildUser",
        "buildTime",
        "modifyTime",
        "repoHash",
        "repoUrl",
    )

    host_name: str = Field(..., description="Build host name")
    host_user: str = Field(..., description="Build host account")
    host_os_nv: str = Field(..., alias="hostOsNV", description="Build host OS name and version")
    build_user: str = Field(..., description="Build user identity")
    build_time: str = Field(..., description="Build timestamp with UTC offset")
    modify_time: str = Field(..., description="Source modification timestamp with UTC offset")
    repo_hash: str = Field(..., description="Revision identifier")
    repo_url: str = Field(..., description="Remote repository URL")

    def constants(self) -> dict[str, str]:
        """Return the eight constants keyed by their serialized names, in table order."""
        data = self.model_dump(by_alias=True)
        return {name: data[name] for name in self.FIELD_NAMES}


class SemanticVersion(NamedTuple):
    """MAJOR.MINOR.PATCH with an optional pre-release TWEAK."""

    major: str
    minor: str
    patch: str
    tweak: str = ""

    @classmethod
    def parse(cls, value: str) -> SemanticVersion:
        """Parse ``MAJOR.MINOR.PATCH[-TWEAK]``.

        Raises:
            ConfigurationError: If the version is malformed
        """
        match = SEMVER_PATTERN.match(value.strip())
        if match is None:
            raise ConfigurationError(
                f"Invalid semantic version '{value}': expected MAJOR.MINOR.PATCH[-TWEAK] "
                "with numeric parts and a TWEAK of [a-z0-9.-]"
            )
        return cls(
            major=match.group("major"),
            minor=match.group("minor"),
            patch=match.group("patch"),
            tweak=match.group("tweak") or "",
        )

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.tweak}" if self.tweak else base
