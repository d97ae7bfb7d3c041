"""Coverage report data model."""

from dataclasses import dataclass, field
from enum import Enum


class MetricType(Enum):
    """Counter types the gate evaluates; other JaCoCo types are ignored."""

    LINE = "LINE"
    BRANCH = "BRANCH"
    METHOD = "METHOD"
    CLASS = "CLASS"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def coverage_percentage(covered: int, total: int) -> int:
    """Integer percentage rounded down; 0 when there is nothing to cover."""
    if total <= 0:
        return 0
    return covered * 100 // total


@dataclass(frozen=True)
class CounterNode:
    metric: MetricType
    missed: int
    covered: int

    @property
    def total(self) -> int:
        return self.missed + self.covered

    @property
    def percentage(self) -> int:
        return coverage_percentage(self.covered, self.total)


@dataclass(frozen=True)
class CoverageUnit:
    """A class, source file or package and its own counters."""

    name: str
    scope: str
    counters: dict[MetricType, CounterNode] = field(default_factory=dict)

    def counter(self, metric: MetricType) -> CounterNode:
        return self.counters.get(metric, CounterNode(metric, 0, 0))


@dataclass(frozen=True)
class CoverageReport:
    """A parsed report: root-scope totals plus the units at the chosen scope."""

    source: str
    name: str
    totals: dict[MetricType, CounterNode]
    units: tuple[CoverageUnit, ...] = ()

    def total(self, metric: MetricType) -> CounterNode:
        return self.totals.get(metric, CounterNode(metric, 0, 0))
