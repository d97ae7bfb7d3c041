"""Source scanner: discovers files and runs every structural check on them.

Per file, the span detector, the documentation associator and the line
checks each make their own pass over the same immutable SourceUnit. Files
are independent, so larger batches are scanned on a thread pool; results
land in a ViolationCollector whose snapshot is sorted, which makes the
concurrent and sequential scans indistinguishable.
"""

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from threading import Event
from typing import Optional

from ..config import GateConfig
from ..exceptions import FileAccessError, InvalidPathError
from ..file_ops import has_extension, is_test_file, should_skip_file
from ..logging_config import get_logger
from ..models import Violation
from .checks import build_language_checks, run_checks
from .collector import ViolationCollector
from .docs import DocumentationAssociator
from .languages import detect_language
from .lines import read_source_unit
from .models import SourceUnit
from .spans import MethodSpanDetector

logger = get_logger(__name__)

# Default worker count: use CPU count, capped at 8 to avoid overwhelming I/O
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

# Below this many files the pool overhead is not worth it
_PARALLEL_MIN_FILES = 10


@dataclass
class ScanResult:
    """Outcome of the structural half of the gate."""

    violations: list[Violation] = field(default_factory=list)
    files_scanned: int = 0
    files_failed: int = 0
    notices: list[str] = field(default_factory=list)
    cancelled: bool = False


class SourceScanner:
    """Runs the structural checks over a file or a directory tree."""

    def __init__(self, config: Optional[GateConfig] = None):
        self.config = config or GateConfig()
        self._spans = MethodSpanDetector(max_lines=self.config.max_method_lines)
        self._docs = DocumentationAssociator(
            window=self.config.doc_window,
            scan_limit=self.config.doc_scan_limit,
            exempt_patterns=self.config.doc_exempt_patterns,
        )
        # Compiled once; shared read-only by every worker thread
        self._checks = build_language_checks(self.config)
        self._cancelled = Event()

    def cancel(self) -> None:
        """Stop a running scan; files already being scanned still finish."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def discover(self, root: Path) -> list[tuple[Path, str]]:
        """
        List the files to scan under ``root``.

        Args:
            root: A source file or a directory

        Returns:
            Sorted (path, display_path) pairs; display paths are relative to ``root``

        Raises:
            InvalidPathError: If root does not exist
        """
        if not root.exists():
            raise InvalidPathError(root, "Path does not exist")

        if root.is_file():
            return [(root, str(root))]

        found = []
        for path in root.rglob("*"):
            if not path.is_file() or path.is_symlink():
                continue
            if not has_extension(path, self.config.include_extensions):
                continue
            relative = path.relative_to(root)
            if should_skip_file(relative, self.config.exclude_patterns):
                continue
            found.append((path, relative.as_posix()))

        found.sort(key=lambda item: item[1])
        logger.debug(f"Discovered {len(found)} source files under {root}")
        return found

    def check_unit(self, unit: SourceUnit) -> list[Violation]:
        """All structural violations of one source unit, unsorted."""
        violations: list[Violation] = []
        structural = self.config.check_test_structure or not is_test_file(
            Path(unit.path), self.config.test_file_patterns
        )
        if structural:
            violations.extend(self._spans.detect(unit))
            violations.extend(self._docs.check(unit))
        violations.extend(run_checks(unit, self._checks[detect_language(unit.path)]))
        return violations

    def scan_file(self, path: Path, display_path: Optional[str] = None) -> list[Violation]:
        """
        Scan a single file.

        Raises:
            FileAccessError: If the file cannot be read or is too large
        """
        unit = read_source_unit(
            path, display_path=display_path, max_bytes=self.config.max_file_size_bytes
        )
        return sorted(self.check_unit(unit), key=lambda v: v.sort_key)

    def scan(self, root: Path, parallel: bool = True) -> ScanResult:
        """
        Scan every discovered file under ``root``.

        Args:
            root: A source file or a directory
            parallel: Use a thread pool for batches of 10 files or more

        Returns:
            ScanResult with violations sorted by (path, line, kind, rule, message)

        Raises:
            InvalidPathError: If root does not exist
        """
        files = self.discover(root)
        collector = ViolationCollector()

        def _scan_one(path: Path, display: str) -> None:
            if self._cancelled.is_set():
                return
            try:
                collector.extend(self.scan_file(path, display))
            except FileAccessError as e:
                logger.warning(f"Skipping {display}: {e.notice()}")
                collector.fail(f"{display}: {e.notice()}")

        if not parallel or len(files) < _PARALLEL_MIN_FILES:
            for path, display in files:
                if self._cancelled.is_set():
                    break
                _scan_one(path, display)
        else:
            workers = self.config.workers or _DEFAULT_WORKERS
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(_scan_one, path, display): display for path, display in files
                }
                for future in as_completed(futures):
                    # Unexpected errors are bugs; surface them rather than lose a file
                    future.result()

        if self._cancelled.is_set():
            logger.warning("Scan cancelled before all files were processed")

        return ScanResult(
            violations=collector.snapshot(),
            files_scanned=collector.files_scanned,
            files_failed=collector.files_failed,
            notices=collector.notices(),
            cancelled=self._cancelled.is_set(),
        )
