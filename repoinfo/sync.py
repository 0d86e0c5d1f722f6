"""In-place update of metadata declarations in an existing source file.

Instead of generating a whole artifact, sync mode keeps a hand-maintained
file and only rewrites the string literal that follows each known
declaration, e.g.::

    static const char repo_hash[] = "615";

Contract:
- Inputs: Target file, BuildMetadataRecord, declaration prefixes, optional version
- Outputs: Names of the declarations that were found
- Side Effects: Rewrites the target file atomically when its content changes
"""

import logging
import re
from pathlib import Path

from .emitters.formats import c_string
from .emitters.writer import atomic_write_text
from .errors import ConfigurationError
from .models import BuildMetadataRecord
from .models import SemanticVersion

logger = logging.getLogger(__name__)

DEFAULT_DECLARATIONS = {
    "repoUrl": "static const char repo_url[] =",
    "repoHash": "static const char repo_hash[] =",
    "modifyTime": "static const char modify_time[] =",
    "buildUser": "static const char build_user[] =",
    "buildTime": "static const char build_time[] =",
    "hostName": "static const char host_name[] =",
    "hostUser": "static const char host_user[] =",
    "hostOsNV": "static const char host_osnv[] =",
}

SEMVER_DECLARATIONS = {
    "semverMajor": "static const char semver_major[] =",
    "semverMinor": "static const char semver_minor[] =",
    "semverPatch": "static const char semver_patch[] =",
    "semverTweak": "static const char semver_tweak[] =",
    "semverVersion": "static const char semver_version[] =",
}

STRING_LITERAL = r'"(?:[^"\\\n]|\\.)*"'


def declaration_pattern(prefix: str) -> re.Pattern[str]:
    """Compile a prefix into a line pattern capturing everything up to the literal.

    Whitespace in the prefix matches any run of whitespace; every other
    character is matched literally.
    """
    tokens = prefix.split()
    if not tokens:
        raise ConfigurationError("Empty declaration prefix")
    body = re.escape(tokens[0])
    for token in tokens[1:]:
        # "x[]=" and "x[] =" are the same declaration
        separator = r"\s*" if token.startswith("=") else r"\s+"
        body += separator + re.escape(token)
    return re.compile(rf"^(?P<lead>[ \t]*{body}[ \t]*){STRING_LITERAL}", re.MULTILINE)


def sync_values(record: BuildMetadataRecord, version: SemanticVersion | None = None) -> dict[str, str]:
    """Values keyed like DEFAULT_DECLARATIONS and SEMVER_DECLARATIONS."""
    values = record.constants()
    if version is not None:
        values.update(
            semverMajor=version.major,
            semverMinor=version.minor,
            semverPatch=version.patch,
            semverTweak=version.tweak,
            semverVersion=str(version),
        )
    return values


def sync_text(text: str, values: dict[str, str], declarations: dict[str, str]) -> tuple[str, list[str]]:
    """Replace declared literals in ``text``.

    Returns:
        Tuple of (new text, names whose declaration was found)
    """
    found = []
    for name, prefix in declarations.items():
        if name not in values:
            continue
        literal = c_string(values[name])
        text, count = declaration_pattern(prefix).subn(lambda m, lit=literal: m.group("lead") + lit, text)
        if count:
            found.append(name)
        else:
            logger.debug(f"Declaration for {name} not found: {prefix!r}")
    return text, found


def sync_file(
    path: Path,
    record: BuildMetadataRecord,
    declarations: dict[str, str] | None = None,
    version: SemanticVersion | None = None,
) -> list[str]:
    """Update metadata declarations in ``path``.

    Args:
        path: Existing source file to update
        record: Metadata to write
        declarations: Field name to declaration prefix overrides, merged over the defaults
        version: Semantic version for the semver declarations; they are left
            untouched when None

    Returns:
        Names of the declarations found in the file

    Raises:
        ConfigurationError: If the file does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Sync target does not exist: {path}")

    merged = {**DEFAULT_DECLARATIONS, **SEMVER_DECLARATIONS, **(declarations or {})}
    # Bytes that are not UTF-8 round-trip unchanged
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
        original = f.read()
    updated, found = sync_text(original, sync_values(record, version), merged)

    if not found:
        logger.warning(f"No metadata declarations found in {path}")
    if updated != original:
        atomic_write_text(path, updated, errors="surrogateescape")
        logger.info(f"Synced {len(found)} declarations in {path}")
    else:
        logger.info(f"{path} is already up to date")
    return found
