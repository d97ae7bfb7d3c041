"""Coverage half of the gate only."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import (
    BranchThreshold,
    ClassThreshold,
    ConfigFile,
    FormatChoice,
    LineThreshold,
    MethodThreshold,
    OutputFormat,
    Quiet,
    ScopeChoice,
    UnitScope,
    Verbose,
    run_gate,
)


@app.command()
def coverage(
    report: Path = typer.Argument(..., help="JaCoCo XML coverage report"),
    line_threshold: Optional[int] = LineThreshold,
    branch_threshold: Optional[int] = BranchThreshold,
    method_threshold: Optional[int] = MethodThreshold,
    class_threshold: Optional[int] = ClassThreshold,
    unit_scope: Optional[ScopeChoice] = UnitScope,
    output_format: FormatChoice = OutputFormat,
    config: Optional[Path] = ConfigFile,
    verbose: bool = Verbose,
    quiet: bool = Quiet,
):
    """
    Check a coverage report against the thresholds.

    A missing or malformed report fails this command.

    [bold cyan]Examples:[/bold cyan]

      quality-gate coverage target/site/jacoco/jacoco.xml

      quality-gate coverage jacoco.xml --line-threshold 90 --unit-scope sourcefile
    """
    options = dict(
        config=config,
        line_threshold=line_threshold,
        branch_threshold=branch_threshold,
        method_threshold=method_threshold,
        class_threshold=class_threshold,
        unit_scope=unit_scope,
        require_coverage=True,
    )
    run_gate(options, report=report, output_format=output_format, verbose=verbose, quiet=quiet)
