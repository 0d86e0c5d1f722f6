"""Configuration loading for the repoinfo generator.

This module handles loading generator configuration from a YAML file
kept in the source tree and from environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: GeneratorSettings objects
- Side Effects: create_default_config writes repoinfo.yaml
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .settings import GeneratorSettings

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "repoinfo.yaml"

DEFAULT_CONFIG = """# repoinfo generator configuration
# Every setting can be overridden with a REPOINFO_ environment variable
# (e.g. REPOINFO_USER_NAME).

# Build user credited in buildUser, as "USER_NAME <USER_EMAIL>".
# Allowed characters: [0-9A-Za-z@.- ]
# If not set:
#   - Git: taken from 'git config user.name' / 'git config user.email'
#   - SVN: user name taken from the last 'svn log' author, email left empty
# user_name: "my name"
# user_email: "email@my.com"

# Value emitted when a field cannot be determined
placeholder: "unknown"

# Version control backend: auto, git, svn, none
vcs: "auto"

# Abbreviate Git commit hashes (e.g. 7); full hash when unset
# hash_length: 7

# Force output format (cpp, c, python, json); inferred from the suffix when unset
# output_format: "cpp"

# Semantic version used by 'repoinfo sync': MAJOR.MINOR.PATCH[-TWEAK]
# version: "0.1.0"

log_level: "info"
"""


def get_config_path(source_root: Path | None = None) -> Path:
    """Get path to config file.

    Args:
        source_root: Source tree root (default: current directory)

    Returns:
        Path from REPOINFO_CONFIG, or repoinfo.yaml in the source root

    Example:
        >>> config_path = get_config_path(Path("/src/app"))
        >>> assert config_path.name == "repoinfo.yaml"
    """
    env_override = os.environ.get("REPOINFO_CONFIG")
    if env_override:
        return Path(env_override).expanduser().resolve()
    return (source_root or Path.cwd()) / CONFIG_FILENAME


def create_default_config(config_path: Path) -> bool:
    """Create default config file if it doesn't exist.

    Returns:
        True if the file was written, False if it already existed
    """
    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")
    return True


def load_config(config_path: Path | None = None, source_root: Path | None = None) -> GeneratorSettings:
    """Load generator configuration from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables should be prefixed with REPOINFO_ (e.g., REPOINFO_PLACEHOLDER).
    A missing config file is not an error; an unreadable one is logged and
    ignored.

    Args:
        config_path: Optional config file path (default: repoinfo.yaml in source root)
        source_root: Source tree root used to locate the default config file

    Returns:
        Validated generator settings

    Raises:
        ConfigurationError: If the merged settings fail validation
    """
    if config_path is None:
        config_path = get_config_path(source_root)

    yaml_settings = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
            if not isinstance(yaml_settings, dict):
                raise ValueError("top level must be a mapping")
            logger.debug(f"Loaded config from {config_path}")
        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default settings and environment variables")
            yaml_settings = {}
    else:
        logger.debug(f"No config file at {config_path}, using defaults")

    # Only pass YAML values that don't have corresponding env vars
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"REPOINFO_{str(key).upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    try:
        settings = GeneratorSettings(**filtered_yaml)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid repoinfo configuration:\n{e}") from e

    logger.debug(f"Generator configuration loaded: vcs={settings.vcs}, placeholder={settings.placeholder!r}")
    return settings
