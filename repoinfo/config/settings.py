"""Settings model for the repoinfo generator.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

import re
from typing import Literal

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from ..errors import ConfigurationError
from ..models import SemanticVersion

IDENTITY_PATTERN = re.compile(r"^[0-9A-Za-z@. -]*$")

OUTPUT_FORMATS = ("cpp", "c", "python", "json")


class GeneratorSettings(BaseSettings):
    """Configuration for the metadata snapshot generator.

    Attributes:
        user_name: Build user name (default: detected from the VCS)
        user_email: Build user email (default: detected from the VCS)
        placeholder: Sentinel for values that cannot be determined
        vcs: Version control backend, or "auto" to probe the source root
        hash_length: Abbreviate Git hashes to this many characters
        output_format: Force an emitter format instead of using the file suffix
        version: Semantic version written by sync mode
        sync_declarations: Declaration prefix overrides for sync mode
        log_level: Logging level (default: info)

    Example:
        >>> settings = GeneratorSettings()
        >>> assert settings.placeholder == "unknown"
        >>> assert settings.vcs == "auto"
    """

    model_config = SettingsConfigDict(
        env_prefix="REPOINFO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    user_name: str | None = None
    user_email: str | None = None
    placeholder: str = "unknown"
    vcs: Literal["auto", "git", "svn", "none"] = "auto"
    hash_length: int | None = None
    output_format: str | None = None
    version: str | None = None
    sync_declarations: dict[str, str] = Field(default_factory=dict)
    log_level: str = "info"

    @field_validator("user_name", "user_email")
    @classmethod
    def check_identity_chars(cls, v: str | None) -> str | None:
        """User name and email must consist of [0-9A-Za-z@.- ]."""
        if v is None:
            return v
        v = v.strip()
        if not IDENTITY_PATTERN.match(v):
            raise ValueError(f"'{v}' may only contain letters, digits, spaces and '@', '.', '-'")
        return v or None

    @field_validator("hash_length")
    @classmethod
    def check_hash_length(cls, v: int | None) -> int | None:
        if v is not None and not 4 <= v <= 40:
            raise ValueError("hash_length must be between 4 and 40")
        return v

    @field_validator("output_format")
    @classmethod
    def check_output_format(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.lower()
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        return v

    @field_validator("version")
    @classmethod
    def check_version(cls, v: str | None) -> str | None:
        if v is None:
            return v
        # pydantic only reports ValueError/AssertionError as validation errors
        try:
            return str(SemanticVersion.parse(v))
        except ConfigurationError as e:
            raise ValueError(str(e)) from e

    @property
    def semantic_version(self) -> SemanticVersion | None:
        """Parsed form of ``version``."""
        return SemanticVersion.parse(self.version) if self.version else None
