"""Emit a BuildMetadataRecord as a generated source artifact.

Public Interface:
    - emit: Render and atomically write the artifact
    - render: Render to text without writing
    - infer_format: Pick a format from the output file suffix
"""

import logging
from pathlib import Path

from ..errors import ConfigurationError
from ..models import BuildMetadataRecord
from .formats import RENDERERS
from .formats import SUFFIX_FORMATS
from .writer import atomic_write_text

logger = logging.getLogger(__name__)


def infer_format(output_path: Path) -> str:
    """Map the output suffix to a format name.

    Raises:
        ConfigurationError: If the suffix is not recognised
    """
    fmt = SUFFIX_FORMATS.get(output_path.suffix.lower())
    if fmt is None:
        raise ConfigurationError(
            f"Cannot infer output format from '{output_path.name}'; "
            f"use one of {', '.join(sorted(SUFFIX_FORMATS))} or pass a format explicitly"
        )
    return fmt


def render(record: BuildMetadataRecord, output_path: Path, fmt: str | None = None) -> str:
    output_path = Path(output_path)
    fmt = fmt or infer_format(output_path)
    renderer = RENDERERS.get(fmt)
    if renderer is None:
        raise ConfigurationError(f"Unknown output format '{fmt}'; expected one of {', '.join(RENDERERS)}")
    return renderer(record, output_path)


def emit(record: BuildMetadataRecord, output_path: Path, fmt: str | None = None) -> Path:
    """Write the record's constants to ``output_path``, replacing any existing file.

    Args:
        record: Metadata to write
        output_path: Artifact path
        fmt: Output format (default: inferred from the suffix)

    Returns:
        The written path

    Raises:
        ConfigurationError: If the format is unknown
        OSError: If the file cannot be written
    """
    output_path = Path(output_path)
    content = render(record, output_path, fmt)
    atomic_write_text(output_path, content)
    logger.info(f"Wrote build metadata to {output_path}")
    return output_path


__all__ = ["emit", "render", "infer_format", "atomic_write_text"]
