"""Structural half of the gate only."""

from pathlib import Path
from typing import List, Optional

import typer

from . import app
from ._common import (
    ConfigFile,
    DocWindow,
    Exclude,
    FailOn,
    FormatChoice,
    Include,
    MaxLineLength,
    MaxMethodLines,
    OutputFormat,
    Quiet,
    SeverityChoice,
    Verbose,
    Workers,
    run_gate,
)


@app.command()
def scan(
    path: Path = typer.Argument(..., help="Source file or directory to scan"),
    max_method_lines: Optional[int] = MaxMethodLines,
    doc_window: Optional[int] = DocWindow,
    max_line_length: Optional[int] = MaxLineLength,
    include: Optional[List[str]] = Include,
    exclude: Optional[List[str]] = Exclude,
    fail_on: Optional[SeverityChoice] = FailOn,
    output_format: FormatChoice = OutputFormat,
    workers: Optional[int] = Workers,
    config: Optional[Path] = ConfigFile,
    verbose: bool = Verbose,
    quiet: bool = Quiet,
):
    """
    Scan sources for structural violations.

    Reports long methods, missing Javadoc, banned debug output, hardcoded
    string comparisons and style smells. Coverage is not evaluated.

    [bold cyan]Examples:[/bold cyan]

      quality-gate scan src/main/java

      quality-gate scan src --fail-on warning --format github
    """
    options = dict(
        config=config,
        include=include,
        exclude=exclude,
        max_method_lines=max_method_lines,
        doc_window=doc_window,
        max_line_length=max_line_length,
        fail_on=fail_on,
        workers=workers,
    )
    run_gate(options, root=path, output_format=output_format, verbose=verbose, quiet=quiet)
