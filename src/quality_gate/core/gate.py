"""Gate reporter: runs both halves of the gate and merges their verdicts.

States advance IDLE -> SCANNING -> PARSING -> EVALUATING -> REPORTED.
SCANNING is skipped when there is nothing to scan; PARSING and EVALUATING
are skipped when no coverage report is given. A coverage error in PARSING
goes straight to REPORTED with coverage marked unavailable, so a broken
report never hides the structural results.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from ..config import GateConfig
from ..coverage import (
    CoverageEvaluation,
    MetricResult,
    MetricType,
    ThresholdEvaluator,
    UnitCoverage,
    parse_report,
)
from ..exceptions import CoverageError, GateStateError
from ..logging_config import get_logger
from ..models import Severity, Violation, ViolationKind
from ..scanning import ScanResult, SourceScanner

logger = get_logger(__name__)


class GateState(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    PARSING = "parsing"
    EVALUATING = "evaluating"
    REPORTED = "reported"


_TRANSITIONS: dict[GateState, frozenset[GateState]] = {
    GateState.IDLE: frozenset({GateState.SCANNING, GateState.PARSING, GateState.REPORTED}),
    GateState.SCANNING: frozenset({GateState.PARSING, GateState.REPORTED}),
    GateState.PARSING: frozenset({GateState.EVALUATING, GateState.REPORTED}),
    GateState.EVALUATING: frozenset({GateState.REPORTED}),
    GateState.REPORTED: frozenset(),
}

COVERAGE_OK = "ok"
COVERAGE_UNAVAILABLE = "unavailable"
COVERAGE_SKIPPED = "skipped"


@dataclass
class GateResult:
    """Everything one gate run found. Built in memory, never persisted."""

    violations: list[Violation] = field(default_factory=list)
    metrics: dict[MetricType, MetricResult] = field(default_factory=dict)
    sub_threshold_units: list[UnitCoverage] = field(default_factory=list)
    coverage_status: str = COVERAGE_SKIPPED
    coverage_error: Optional[str] = None
    files_scanned: int = 0
    files_failed: int = 0
    notices: list[str] = field(default_factory=list)
    state: GateState = GateState.IDLE
    fail_on: Severity = Severity.ERROR
    require_coverage: bool = False

    @property
    def blocking_violations(self) -> list[Violation]:
        return [v for v in self.violations if v.severity.at_least(self.fail_on)]

    @property
    def structural_passed(self) -> bool:
        return not self.blocking_violations

    @property
    def coverage_evaluated(self) -> bool:
        return self.coverage_status == COVERAGE_OK

    @property
    def coverage_passed(self) -> bool:
        """Every gating metric met its threshold; true when nothing was evaluated."""
        return all(r.passed for r in self.metrics.values())

    @property
    def passed(self) -> bool:
        if self.require_coverage and not self.coverage_evaluated:
            return False
        return self.structural_passed and self.coverage_passed

    def counts_by_severity(self) -> dict[Severity, int]:
        counts = Counter(v.severity for v in self.violations)
        return {s: counts.get(s, 0) for s in Severity}

    def counts_by_kind(self) -> dict[ViolationKind, int]:
        counts = Counter(v.kind for v in self.violations)
        return {k: counts.get(k, 0) for k in ViolationKind}

    def failure_reasons(self) -> list[str]:
        """Human-readable reasons the gate failed, empty when it passed."""
        reasons = []
        blocking = self.blocking_violations
        if blocking:
            reasons.append(
                f"{len(blocking)} violation(s) at or above {self.fail_on.value} severity"
            )
        for result in self.metrics.values():
            if not result.passed:
                reasons.append(
                    f"{result.metric.label} coverage {result.percentage}% "
                    f"is below the {result.threshold}% threshold"
                )
        if self.require_coverage and not self.coverage_evaluated:
            detail = f": {self.coverage_error}" if self.coverage_error else ""
            reasons.append(f"coverage was required but is {self.coverage_status}{detail}")
        return reasons

    def to_dict(self) -> dict:
        return {
            "passed": self.passed,
            "structural_passed": self.structural_passed,
            "coverage_passed": self.coverage_passed,
            "coverage_status": self.coverage_status,
            "coverage_error": self.coverage_error,
            "files_scanned": self.files_scanned,
            "files_failed": self.files_failed,
            "counts_by_severity": {s.value: n for s, n in self.counts_by_severity().items()},
            "counts_by_kind": {k.value: n for k, n in self.counts_by_kind().items()},
            "violations": [v.to_dict() for v in self.violations],
            "coverage": [r.to_dict() for r in self.metrics.values()],
            "sub_threshold_units": [u.to_dict() for u in self.sub_threshold_units],
            "notices": list(self.notices),
            "failure_reasons": self.failure_reasons(),
        }


class GateReporter:
    """Drives one gate run through its states. Single use."""

    def __init__(self, config: Optional[GateConfig] = None):
        self.config = config or GateConfig()
        self.scanner = SourceScanner(self.config)
        self._state = GateState.IDLE

    @property
    def state(self) -> GateState:
        return self._state

    def _advance(self, target: GateState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise GateStateError(self._state.value, target.value)
        logger.debug(f"Gate state {self._state.value} -> {target.value}")
        self._state = target

    def cancel(self) -> None:
        self.scanner.cancel()

    def run(self, root: Optional[Path] = None, report_path: Optional[Path] = None) -> GateResult:
        """
        Run the gate.

        Args:
            root: Source file or directory to scan (None skips the structural half)
            report_path: JaCoCo XML report (None skips the coverage half)

        Returns:
            GateResult in state REPORTED

        Raises:
            InvalidPathError: If root does not exist
            GateStateError: If the reporter was already used
        """
        if self._state is not GateState.IDLE:
            raise GateStateError(self._state.value, GateState.SCANNING.value)

        result = GateResult(
            fail_on=Severity(self.config.fail_on),
            require_coverage=self.config.require_coverage,
        )

        if root is not None:
            self._advance(GateState.SCANNING)
            self._apply_scan(result, self.scanner.scan(root))

        if report_path is not None:
            self._advance(GateState.PARSING)
            evaluation = self._evaluate_coverage(result, report_path)
            if evaluation is not None:
                result.metrics = dict(evaluation.metrics)
                result.sub_threshold_units = list(evaluation.sub_threshold_units)
                result.coverage_status = COVERAGE_OK

        self._advance(GateState.REPORTED)
        result.state = self._state
        logger.info(f"Gate {'passed' if result.passed else 'failed'}")
        return result

    def _apply_scan(self, result: GateResult, scan: ScanResult) -> None:
        result.violations = scan.violations
        result.files_scanned = scan.files_scanned
        result.files_failed = scan.files_failed
        result.notices.extend(scan.notices)
        if scan.cancelled:
            result.notices.append("scan cancelled before all files were processed")

    def _evaluate_coverage(
        self, result: GateResult, report_path: Path
    ) -> Optional[CoverageEvaluation]:
        try:
            report = parse_report(report_path, unit_scope=self.config.unit_scope)
        except CoverageError as e:
            logger.warning(f"Coverage unavailable: {e}")
            result.coverage_status = COVERAGE_UNAVAILABLE
            result.coverage_error = str(e)
            result.notices.append(f"coverage unavailable: {e.path}: {e.notice()}")
            return None

        self._advance(GateState.EVALUATING)
        return ThresholdEvaluator(self.config.thresholds).evaluate(report)
