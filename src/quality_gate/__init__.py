"""
Quality Gate - structural and coverage checks for Java-family sources.

Scans sources line by line for long methods, missing Javadoc, banned debug
output, hardcoded string comparisons and style smells, evaluates a JaCoCo
coverage report against per-metric thresholds, and merges both into one
pass/fail verdict.
"""

__version__ = "0.1.0"

from .config import GateConfig, ThresholdPolicy, load_config
from .core import GateReporter, GateResult, GateState
from .coverage import CoverageReport, MetricType, ThresholdEvaluator, parse_report
from .exceptions import QualityGateError
from .models import Severity, Violation, ViolationKind
from .scanning import SourceScanner

__all__ = [
    "__version__",
    "GateConfig",
    "ThresholdPolicy",
    "load_config",
    "GateReporter",
    "GateResult",
    "GateState",
    "CoverageReport",
    "MetricType",
    "ThresholdEvaluator",
    "parse_report",
    "QualityGateError",
    "Severity",
    "Violation",
    "ViolationKind",
    "SourceScanner",
]
