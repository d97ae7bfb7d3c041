"""Full gate command: structural scan plus coverage thresholds."""

from pathlib import Path
from typing import List, Optional

import typer

from . import app
from ._common import (
    BranchThreshold,
    ClassThreshold,
    ConfigFile,
    DocWindow,
    Exclude,
    FailOn,
    FormatChoice,
    Include,
    LineThreshold,
    MaxLineLength,
    MaxMethodLines,
    MethodThreshold,
    OutputFormat,
    Quiet,
    RequireCoverage,
    ScopeChoice,
    SeverityChoice,
    UnitScope,
    Verbose,
    Workers,
    run_gate,
)


@app.command()
def check(
    path: Path = typer.Argument(Path("."), help="Source file or directory to scan"),
    coverage_report: Optional[Path] = typer.Option(
        None, "-r", "--coverage-report", help="JaCoCo XML coverage report"
    ),
    max_method_lines: Optional[int] = MaxMethodLines,
    doc_window: Optional[int] = DocWindow,
    max_line_length: Optional[int] = MaxLineLength,
    line_threshold: Optional[int] = LineThreshold,
    branch_threshold: Optional[int] = BranchThreshold,
    method_threshold: Optional[int] = MethodThreshold,
    class_threshold: Optional[int] = ClassThreshold,
    include: Optional[List[str]] = Include,
    exclude: Optional[List[str]] = Exclude,
    unit_scope: Optional[ScopeChoice] = UnitScope,
    fail_on: Optional[SeverityChoice] = FailOn,
    require_coverage: bool = RequireCoverage,
    output_format: FormatChoice = OutputFormat,
    workers: Optional[int] = Workers,
    config: Optional[Path] = ConfigFile,
    verbose: bool = Verbose,
    quiet: bool = Quiet,
):
    """
    Run the full quality gate.

    Scans PATH for structural violations and, when a coverage report is
    given, checks coverage against the thresholds. Exits 0 when the gate
    passes and 1 when it fails.

    [bold cyan]Examples:[/bold cyan]

      quality-gate check src/main/java

      quality-gate check . -r target/site/jacoco/jacoco.xml

      quality-gate check . -r jacoco.xml --line-threshold 90 --format json
    """
    options = dict(
        config=config,
        include=include,
        exclude=exclude,
        max_method_lines=max_method_lines,
        doc_window=doc_window,
        max_line_length=max_line_length,
        line_threshold=line_threshold,
        branch_threshold=branch_threshold,
        method_threshold=method_threshold,
        class_threshold=class_threshold,
        unit_scope=unit_scope,
        fail_on=fail_on,
        require_coverage=require_coverage,
        workers=workers,
    )
    run_gate(
        options,
        root=path,
        report=coverage_report,
        output_format=output_format,
        verbose=verbose,
        quiet=quiet,
    )
