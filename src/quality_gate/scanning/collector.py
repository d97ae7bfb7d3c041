"""Thread-safe accumulation of scan results."""

from threading import Lock
from typing import Iterable

from ..models import Violation


class ViolationCollector:
    """Append-only store shared by the scan workers.

    Workers append in completion order; ``snapshot`` sorts by
    ``Violation.sort_key`` so the result does not depend on scheduling.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._violations: list[Violation] = []
        self._notices: list[str] = []
        self.files_scanned = 0
        self.files_failed = 0

    def extend(self, violations: Iterable[Violation]) -> None:
        """Record the violations of one successfully scanned file."""
        batch = list(violations)
        with self._lock:
            self._violations.extend(batch)
            self.files_scanned += 1

    def fail(self, notice: str) -> None:
        """Record a file that could not be scanned."""
        with self._lock:
            self._notices.append(notice)
            self.files_failed += 1

    def snapshot(self) -> list[Violation]:
        with self._lock:
            return sorted(self._violations, key=lambda v: v.sort_key)

    def notices(self) -> list[str]:
        with self._lock:
            return sorted(self._notices)
