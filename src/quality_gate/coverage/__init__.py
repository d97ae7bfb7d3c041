"""Coverage report parsing and threshold evaluation."""

from .evaluator import CoverageEvaluation, MetricResult, ThresholdEvaluator, UnitCoverage
from .models import CounterNode, CoverageReport, CoverageUnit, MetricType, coverage_percentage
from .parser import UNIT_SCOPES, parse_report, parse_report_text

__all__ = [
    "MetricType",
    "CounterNode",
    "CoverageUnit",
    "CoverageReport",
    "coverage_percentage",
    "parse_report",
    "parse_report_text",
    "UNIT_SCOPES",
    "MetricResult",
    "UnitCoverage",
    "CoverageEvaluation",
    "ThresholdEvaluator",
]
