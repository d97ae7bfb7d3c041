"""Line scanner: turns a file on disk into an immutable SourceUnit."""

from pathlib import Path
from typing import Iterator, Optional

from ..exceptions import FileAccessError
from ..logging_config import get_logger
from .models import Line, SourceUnit

logger = get_logger(__name__)


def split_lines(content: str) -> tuple[list[str], bool]:
    """Split on ``\\n`` keeping trailing whitespace; a ``\\r`` terminator is dropped.

    Returns:
        (lines, ends_with_newline)
    """
    if not content:
        return [], True
    raw = content.split("\n")
    ends_with_newline = content.endswith("\n")
    if ends_with_newline:
        raw.pop()
    return [r[:-1] if r.endswith("\r") else r for r in raw], ends_with_newline


def source_unit_from_text(content: str, path: str) -> SourceUnit:
    """Build a SourceUnit from in-memory text."""
    texts, ends_with_newline = split_lines(content)
    lines = tuple(Line(number=i, text=t) for i, t in enumerate(texts, start=1))
    return SourceUnit(path=path, lines=lines, ends_with_newline=ends_with_newline)


def read_source_unit(
    filepath: Path, display_path: Optional[str] = None, max_bytes: Optional[int] = None
) -> SourceUnit:
    """
    Read a source file into a SourceUnit.

    Args:
        filepath: File to read
        display_path: Path shown in violations (defaults to ``filepath``)
        max_bytes: Refuse files larger than this

    Returns:
        The file's lines, original text preserved

    Raises:
        FileAccessError: If the file cannot be read or is too large
    """
    try:
        if max_bytes is not None:
            size = filepath.stat().st_size
            if size > max_bytes:
                raise FileAccessError(filepath, f"File too large ({size} bytes > {max_bytes})")
        with open(filepath, encoding="utf-8", errors="replace", newline="") as f:
            content = f.read()
    except OSError as e:
        raise FileAccessError(filepath, f"Cannot read file: {e}")

    unit = source_unit_from_text(content, display_path or str(filepath))
    logger.debug(f"Read {unit.path}: {len(unit)} lines")
    return unit


def iter_lines(filepath: Path) -> Iterator[Line]:
    """Lazily yield the lines of a file; each call restarts from the first line."""
    yield from read_source_unit(filepath)
