"""GitHub Actions formatter: workflow annotations plus a summary line."""

from ..core.gate import GateResult
from ..models import Severity
from .base import BaseFormatter

_LEVELS = {Severity.ERROR: "error", Severity.WARNING: "warning", Severity.INFO: "notice"}


def _escape(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(BaseFormatter):
    """Output ``::error`` / ``::warning`` / ``::notice`` annotations."""

    def render(self, result: GateResult) -> None:
        print(self.format(result))

    def format(self, result: GateResult) -> str:
        lines: list[str] = []
        for v in result.violations:
            level = _LEVELS[v.severity]
            lines.append(
                f"::{level} file={v.path},line={v.line},title={v.kind.label}::"
                f"{_escape(v.message)}"
            )

        for r in result.metrics.values():
            if r.gating and not r.passed:
                lines.append(
                    f"::error title=coverage::{r.metric.label} coverage {r.percentage}% "
                    f"is below the {r.threshold}% threshold"
                )
        if result.coverage_error:
            level = "error" if result.require_coverage else "warning"
            lines.append(f"::{level} title=coverage::{_escape(result.coverage_error)}")

        lines.append(f"Quality gate {'PASSED' if result.passed else 'FAILED'}")
        return "\n".join(lines)
