"""Rich terminal formatter for the gate result."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.gate import COVERAGE_SKIPPED, COVERAGE_UNAVAILABLE, GateResult
from ..models import Severity, Violation
from .base import BaseFormatter

console = Console(stderr=True)

_SEVERITY_STYLE = {
    Severity.ERROR: "red bold",
    Severity.WARNING: "yellow",
    Severity.INFO: "dim",
}

_STATUS_STYLE = {"PASS": "green", "FAIL": "red bold", "INFO": "dim"}


def _violation_line(v: Violation) -> Text:
    line = Text()
    line.append(f"{v.severity.value.upper():7s} ", style=_SEVERITY_STYLE[v.severity])
    line.append(f"[{v.kind.label}] ", style="cyan")
    line.append(f"{v.location}: ", style="bold")
    line.append(v.message)
    return line


class RichFormatter(BaseFormatter):
    """Rich terminal output: violations, coverage table, summary and verdict."""

    def __init__(self, output: Console = None):
        self.console = output or console

    def render(self, result: GateResult) -> None:
        self._print_violations(result)
        self._print_coverage(result)
        self._print_summary(result)

    def format(self, result: GateResult) -> str:
        # Rich output goes directly to console; return empty string
        self.render(result)
        return ""

    def _print_violations(self, result: GateResult) -> None:
        if not result.violations:
            return
        self.console.print("[bold]Violations[/bold]")
        for v in result.violations:
            self.console.print(_violation_line(v))
            if v.hint:
                self.console.print(Text(f"        {v.hint}", style="dim"))
        self.console.print()

    def _print_coverage(self, result: GateResult) -> None:
        if result.coverage_status == COVERAGE_UNAVAILABLE:
            line = Text("Coverage unavailable: ", style="yellow")
            line.append(result.coverage_error or "")
            self.console.print(line)
            self.console.print()
            return
        if result.coverage_status == COVERAGE_SKIPPED:
            return

        table = Table(title="Coverage", show_lines=False)
        table.add_column("Metric", style="bold")
        table.add_column("Covered", justify="right")
        table.add_column("Missed", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Coverage", justify="right")
        table.add_column("Threshold", justify="right")
        table.add_column("Status", justify="center")
        for r in result.metrics.values():
            threshold = f"{r.threshold}%" if r.gating else "-"
            table.add_row(
                r.metric.label,
                str(r.covered),
                str(r.missed),
                str(r.total),
                f"{r.percentage}%",
                threshold,
                Text(r.status, style=_STATUS_STYLE[r.status]),
            )
        self.console.print(table)

        if result.sub_threshold_units:
            self.console.print("[bold]Units below the line threshold[/bold]")
            for u in result.sub_threshold_units:
                self.console.print(
                    Text(f"  {u.percentage:3d}%  {u.name}  ({u.covered}/{u.total} lines)")
                )
        self.console.print()

    def _print_summary(self, result: GateResult) -> None:
        counts = result.counts_by_severity()
        summary = Text()
        summary.append(f"Files scanned: {result.files_scanned}")
        if result.files_failed:
            summary.append(f"  (failed: {result.files_failed})", style="yellow")
        summary.append("\n")
        summary.append(f"Errors: {counts[Severity.ERROR]}  ", style=_SEVERITY_STYLE[Severity.ERROR])
        summary.append(f"Warnings: {counts[Severity.WARNING]}  ", style="yellow")
        summary.append(f"Info: {counts[Severity.INFO]}", style="dim")
        for notice in result.notices:
            summary.append(f"\n{notice}", style="yellow")
        for reason in result.failure_reasons():
            summary.append(f"\n- {reason}", style="red")
        if result.coverage_status == COVERAGE_UNAVAILABLE:
            summary.append("\nCoverage unavailable: verdict is structural only", style="yellow")

        verdict = "GATE PASSED" if result.passed else "GATE FAILED"
        style = "green" if result.passed else "red"
        self.console.print(
            Panel(summary, title=f"[bold {style}]{verdict}[/bold {style}]", expand=False)
        )
        # Plain verdict line so the outcome survives non-terminal output
        self.console.print(Text(verdict, style=f"bold {style}"))
