"""Tests for the gate reporter and its verdict."""

import pytest

from quality_gate.config import GateConfig, ThresholdPolicy
from quality_gate.core import GateReporter, GateResult, GateState
from quality_gate.core.gate import COVERAGE_OK, COVERAGE_SKIPPED, COVERAGE_UNAVAILABLE
from quality_gate.coverage import MetricType
from quality_gate.exceptions import GateStateError, InvalidPathError
from quality_gate.models import Severity, Violation, ViolationKind


def _violation(severity: Severity) -> Violation:
    return Violation(ViolationKind.STYLE_SMELL, severity, "A.java", 1, "m", rule="r")


class TestScenarios:
    def test_long_method_fails_structural_half(self, tmp_path, write_file, java_class, java_method):
        write_file("Service.java", java_class(java_method("process", 35)))
        result = GateReporter().run(root=tmp_path)

        long_methods = [v for v in result.violations if v.kind is ViolationKind.LONG_METHOD]
        assert len(long_methods) == 1
        assert long_methods[0].severity is Severity.ERROR
        assert long_methods[0].line == 5
        assert not result.structural_passed
        assert not result.passed

    def test_clean_source_and_good_coverage_pass(
        self, tmp_path, write_file, java_class, java_method, jacoco_report
    ):
        write_file("src/Service.java", java_class(java_method("process", 10, public=True)))
        report = write_file("jacoco.xml", jacoco_report({"LINE": (20, 80), "BRANCH": (3, 7)}))

        result = GateReporter().run(root=tmp_path / "src", report_path=report)

        assert result.coverage_status == COVERAGE_OK
        assert result.metrics[MetricType.LINE].percentage == 80
        assert result.passed
        assert result.failure_reasons() == []

    def test_low_coverage_fails(self, tmp_path, write_file, jacoco_report):
        report = write_file("jacoco.xml", jacoco_report({"LINE": (0, 0)}))
        result = GateReporter().run(report_path=report)

        assert result.metrics[MetricType.LINE].percentage == 0
        assert not result.coverage_passed
        assert not result.passed
        assert any("Line coverage 0%" in r for r in result.failure_reasons())


class TestCoverageUnavailable:
    def test_missing_report_keeps_structural_verdict(self, tmp_path, write_file, java_class):
        write_file("src/A.java", java_class())
        result = GateReporter().run(root=tmp_path / "src", report_path=tmp_path / "none.xml")

        assert result.coverage_status == COVERAGE_UNAVAILABLE
        assert "none.xml" in result.coverage_error
        assert result.metrics == {}
        assert result.files_scanned == 1
        assert result.passed
        assert result.state is GateState.REPORTED

    @pytest.mark.parametrize(
        "content, reason",
        [
            ("<report><package name=", "XML parse error"),
            ('<report name="empty"></report>', "No LINE, BRANCH, METHOD or CLASS counters"),
        ],
    )
    def test_malformed_report_keeps_structural_verdict(
        self, tmp_path, write_file, java_class, content, reason
    ):
        write_file("src/A.java", java_class())
        bad = write_file("jacoco.xml", content)
        result = GateReporter().run(root=tmp_path / "src", report_path=bad)

        assert result.coverage_status == COVERAGE_UNAVAILABLE
        assert result.coverage_error.startswith("Malformed coverage report")
        assert result.metrics == {}
        assert result.files_scanned == 1
        assert result.passed
        assert result.state is GateState.REPORTED
        assert any(n.startswith("coverage unavailable:") and reason in n for n in result.notices)

    def test_required_coverage_fails(self, tmp_path, write_file):
        bad = write_file("jacoco.xml", "<report>")
        reporter = GateReporter(GateConfig(require_coverage=True))
        result = reporter.run(report_path=bad)

        assert result.coverage_status == COVERAGE_UNAVAILABLE
        assert not result.passed
        assert any("coverage was required" in r for r in result.failure_reasons())

    def test_skipped_when_no_report(self, tmp_path, write_file, java_class):
        write_file("A.java", java_class())
        result = GateReporter().run(root=tmp_path)
        assert result.coverage_status == COVERAGE_SKIPPED
        assert result.coverage_passed


class TestVerdict:
    def test_warnings_pass_by_default(self):
        result = GateResult(violations=[_violation(Severity.WARNING)])
        assert result.passed

    def test_fail_on_warning(self):
        result = GateResult(violations=[_violation(Severity.WARNING)], fail_on=Severity.WARNING)
        assert not result.passed
        assert len(result.blocking_violations) == 1

    def test_info_never_blocks_at_warning(self):
        result = GateResult(violations=[_violation(Severity.INFO)], fail_on=Severity.WARNING)
        assert result.passed

    def test_counts(self):
        result = GateResult(
            violations=[_violation(Severity.ERROR), _violation(Severity.INFO), _violation(Severity.INFO)]
        )
        assert result.counts_by_severity() == {
            Severity.ERROR: 1,
            Severity.WARNING: 0,
            Severity.INFO: 2,
        }
        assert result.counts_by_kind()[ViolationKind.STYLE_SMELL] == 3
        assert result.counts_by_kind()[ViolationKind.LONG_METHOD] == 0

    def test_fail_on_from_config(self, tmp_path, write_file):
        write_file("A.java", "class A {}\n\n\nclass B {}\n    import java.util.*;\n")
        assert GateReporter().run(root=tmp_path).passed
        assert not GateReporter(GateConfig(fail_on="warning")).run(root=tmp_path).passed

    def test_to_dict_shape(self, tmp_path, write_file, jacoco_report):
        report = write_file("jacoco.xml", jacoco_report({"LINE": (1, 9)}))
        config = GateConfig(thresholds=ThresholdPolicy(branch_threshold=0))
        data = GateReporter(config).run(report_path=report).to_dict()

        assert data["passed"] is True
        assert data["coverage_status"] == "ok"
        assert data["counts_by_severity"] == {"error": 0, "warning": 0, "info": 0}
        assert data["coverage"][0]["metric"] == "LINE"
        assert data["coverage"][0]["percentage"] == 90


class TestStateMachine:
    def test_initial_state(self):
        assert GateReporter().state is GateState.IDLE

    def test_reporter_is_single_use(self, tmp_path, write_file, java_class):
        write_file("A.java", java_class())
        reporter = GateReporter()
        reporter.run(root=tmp_path)

        assert reporter.state is GateState.REPORTED
        with pytest.raises(GateStateError):
            reporter.run(root=tmp_path)

    def test_nothing_to_do_goes_straight_to_reported(self):
        result = GateReporter().run()
        assert result.state is GateState.REPORTED
        assert result.passed

    def test_illegal_transition(self):
        reporter = GateReporter()
        with pytest.raises(GateStateError) as exc_info:
            reporter._advance(GateState.EVALUATING)
        assert exc_info.value.current == "idle"
        assert exc_info.value.target == "evaluating"

    def test_invalid_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            GateReporter().run(root=tmp_path / "missing")
