"""Exception hierarchy for the quality gate."""

from .analysis import (
    AnalysisError,
    CoverageError,
    FileAccessError,
    GateStateError,
    ReportAccessError,
    ReportFormatError,
)
from .base import QualityGateError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "QualityGateError",
    "AnalysisError",
    "FileAccessError",
    "CoverageError",
    "ReportAccessError",
    "ReportFormatError",
    "GateStateError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
