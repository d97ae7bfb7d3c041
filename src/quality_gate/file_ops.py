"""
File selection helpers for the quality gate.

Patterns are globs matched from the right, the way ``Path.match`` does, so
``target/*`` excludes ``target/Foo.java`` as well as ``module/target/x/Foo.java``.
"""

from pathlib import Path, PurePath
from typing import Iterable


def should_skip_file(filepath: PurePath, exclude_patterns: Iterable[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    Args:
        filepath: File to check, relative to the scan root
        exclude_patterns: Glob patterns to exclude

    Returns:
        True if the file or one of its parent directories matches a pattern
    """
    candidates = [filepath, *list(filepath.parents)[:-1]]
    for pattern in exclude_patterns:
        for candidate in candidates:
            if candidate.match(pattern):
                return True
    return False


def is_test_file(filepath: PurePath, test_patterns: Iterable[str]) -> bool:
    """True when the file name matches one of the test source patterns."""
    name = PurePath(filepath.name)
    return any(name.match(pattern) for pattern in test_patterns)


def has_extension(filepath: Path, extensions: Iterable[str]) -> bool:
    suffix = filepath.suffix.lower()
    return any(suffix == ext.lower() for ext in extensions)
