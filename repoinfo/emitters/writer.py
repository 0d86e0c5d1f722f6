"""Atomic file writes."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def temp_path_for(path: Path) -> Path:
    return path.with_name(f"{path.name}.tmp")


def atomic_write_text(path: Path, content: str, errors: str = "strict") -> None:
    """Write text to ``path`` through a temporary sibling and an atomic rename.

    An interrupted write leaves at most a stale ``.tmp`` file; the target is
    either the previous content or the complete new content.

    Args:
        path: Target file path
        content: Text to write (UTF-8)
        errors: Encoding error handler, as for open()

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = temp_path_for(path)
    try:
        with open(temp_path, "w", encoding="utf-8", errors=errors, newline="\n") as f:
            f.write(content)
        # Atomic rename, replacing any existing file
        temp_path.replace(path)
        logger.debug(f"Wrote {path}")
    except Exception:
        # Clean up temp file on error
        if temp_path.exists():
            temp_path.unlink()
        raise
