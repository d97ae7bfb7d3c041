"""Gate orchestration."""

from .gate import (
    COVERAGE_OK,
    COVERAGE_SKIPPED,
    COVERAGE_UNAVAILABLE,
    GateReporter,
    GateResult,
    GateState,
)

__all__ = [
    "GateReporter",
    "GateResult",
    "GateState",
    "COVERAGE_OK",
    "COVERAGE_SKIPPED",
    "COVERAGE_UNAVAILABLE",
]
