"""Analysis-related exceptions: source access, coverage reports, gate flow."""

from pathlib import Path

from .base import QualityGateError


class AnalysisError(QualityGateError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class CoverageError(AnalysisError):
    """Base class for errors that disable the coverage half of the gate."""

    def __init__(self, message: str, path: Path, reason: str):
        super().__init__(message, details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class ReportAccessError(CoverageError):
    """Raised when the coverage report is missing or unreadable."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot read coverage report: {path}", path, reason)


class ReportFormatError(CoverageError):
    """Raised when the coverage report is malformed or carries no root counters."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Malformed coverage report: {path}", path, reason)


class GateStateError(AnalysisError):
    """Raised on an illegal gate state transition."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Illegal gate transition: {current} -> {target}",
            details={"current": current, "target": target},
        )
        self.current = current
        self.target = target
