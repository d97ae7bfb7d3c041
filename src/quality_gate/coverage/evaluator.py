"""Threshold evaluation of a parsed coverage report."""

from dataclasses import dataclass, field
from typing import Optional

from ..config import ThresholdPolicy
from ..logging_config import get_logger
from .models import CoverageReport, MetricType

logger = get_logger(__name__)


@dataclass(frozen=True)
class MetricResult:
    """One metric's totals against its threshold.

    A threshold of 0 is informational: ``gating`` is False and the metric
    always passes.
    """

    metric: MetricType
    covered: int
    missed: int
    total: int
    percentage: int
    threshold: int

    @property
    def gating(self) -> bool:
        return self.threshold > 0

    @property
    def passed(self) -> bool:
        return self.percentage >= self.threshold

    @property
    def status(self) -> str:
        if not self.gating:
            return "INFO"
        return "PASS" if self.passed else "FAIL"

    def to_dict(self) -> dict:
        return {
            "metric": self.metric.value,
            "covered": self.covered,
            "missed": self.missed,
            "total": self.total,
            "percentage": self.percentage,
            "threshold": self.threshold,
            "status": self.status,
        }


@dataclass(frozen=True)
class UnitCoverage:
    """A unit whose line coverage is below the LINE threshold."""

    name: str
    covered: int
    total: int
    percentage: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "covered": self.covered,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class CoverageEvaluation:
    metrics: dict[MetricType, MetricResult] = field(default_factory=dict)
    sub_threshold_units: tuple[UnitCoverage, ...] = ()

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.metrics.values())

    @property
    def failed_metrics(self) -> list[MetricResult]:
        return [r for r in self.metrics.values() if not r.passed]


class ThresholdEvaluator:
    """Applies a ThresholdPolicy to a CoverageReport.

    Evaluation is a pure function of (policy, report).
    """

    def __init__(self, policy: Optional[ThresholdPolicy] = None):
        self.policy = policy or ThresholdPolicy()

    def evaluate(self, report: CoverageReport) -> CoverageEvaluation:
        metrics = {}
        for metric in MetricType:
            node = report.total(metric)
            metrics[metric] = MetricResult(
                metric=metric,
                covered=node.covered,
                missed=node.missed,
                total=node.total,
                percentage=node.percentage,
                threshold=self.policy.minimum_for(metric),
            )

        line_threshold = self.policy.minimum_for(MetricType.LINE)
        below = []
        for unit in report.units:
            lines = unit.counter(MetricType.LINE)
            if lines.total > 0 and lines.percentage < line_threshold:
                below.append(
                    UnitCoverage(
                        name=unit.name,
                        covered=lines.covered,
                        total=lines.total,
                        percentage=lines.percentage,
                    )
                )
        below.sort(key=lambda u: (u.percentage, u.name))

        evaluation = CoverageEvaluation(metrics=metrics, sub_threshold_units=tuple(below))
        for result in evaluation.failed_metrics:
            logger.info(
                f"{result.metric.value} coverage {result.percentage}% "
                f"below threshold {result.threshold}%"
            )
        return evaluation
