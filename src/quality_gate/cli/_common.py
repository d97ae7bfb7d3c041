"""Shared CLI helpers: console, exit codes, option definitions and the gate runner."""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import GateConfig, load_config
from ..core import GateReporter, GateResult
from ..exceptions import QualityGateError
from ..formatters import get_formatter
from ..logging_config import get_logger, setup_logging

console = Console(stderr=True)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


# -- Choices (typer validates these and rejects anything else with exit 2) --


class FormatChoice(str, Enum):
    GITHUB = "github"
    JSON = "json"
    RICH = "rich"


class SeverityChoice(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ScopeChoice(str, Enum):
    CLASS = "class"
    SOURCEFILE = "sourcefile"
    PACKAGE = "package"


# -- Options shared by every command ---------------------------------------

MaxMethodLines = typer.Option(
    None, "--max-method-lines", help="Longest allowed method body in lines [default: 30]", min=1
)
DocWindow = typer.Option(
    None, "--doc-window", help="Blank lines allowed between Javadoc and declaration [default: 5]",
    min=0,
)
MaxLineLength = typer.Option(
    None, "--max-line-length", help="Longest allowed line in characters [default: 120]", min=1
)
LineThreshold = typer.Option(
    None, "--line-threshold", help="Minimum LINE coverage % [default: 80]", min=0, max=100
)
BranchThreshold = typer.Option(
    None, "--branch-threshold", help="Minimum BRANCH coverage % [default: 70]", min=0, max=100
)
MethodThreshold = typer.Option(
    None, "--method-threshold", help="Minimum METHOD coverage %, 0 = informational", min=0,
    max=100,
)
ClassThreshold = typer.Option(
    None, "--class-threshold", help="Minimum CLASS coverage %, 0 = informational", min=0,
    max=100,
)
Include = typer.Option(
    None, "--include", help="Source extension to scan, e.g. .java (repeatable)"
)
Exclude = typer.Option(
    None, "--exclude", help="Glob pattern to exclude, e.g. 'generated/*' (repeatable)"
)
UnitScope = typer.Option(
    None,
    "--unit-scope",
    help="Report element listed when below the line threshold",
    case_sensitive=False,
)
FailOn = typer.Option(
    None,
    "--fail-on",
    help="Lowest violation severity that fails the gate [default: error]",
    case_sensitive=False,
)
RequireCoverage = typer.Option(
    False, "--require-coverage", help="Fail when coverage cannot be evaluated"
)
OutputFormat = typer.Option(
    FormatChoice.RICH,
    "--format",
    "-f",
    help="Output format",
    case_sensitive=False,
)
Workers = typer.Option(
    None, "-w", "--workers", help="Parallel workers (default: auto-detect)", min=1, max=32
)
ConfigFile = typer.Option(
    None,
    "-c",
    "--config",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
Verbose = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
Quiet = typer.Option(False, "--quiet", "-q", help="Only log errors")


def resolve_config(
    config: Optional[Path] = None,
    include: Optional[list[str]] = None,
    exclude: Optional[list[str]] = None,
    **overrides,
) -> GateConfig:
    """Build the gate configuration from CLI options.

    Unset options are passed as None and keep the value from config files,
    environment or defaults. Extensions are normalized to a leading dot.
    """
    if include:
        overrides["include_extensions"] = [e if e.startswith(".") else f".{e}" for e in include]
    if exclude:
        overrides["exclude_patterns"] = list(exclude)
    for key in ("fail_on", "unit_scope"):
        if isinstance(overrides.get(key), Enum):
            overrides[key] = overrides[key].value
    if not overrides.get("require_coverage"):
        overrides.pop("require_coverage", None)
    return load_config(config_file=config, **overrides)


def run_gate(
    options: dict,
    root: Optional[Path] = None,
    report: Optional[Path] = None,
    output_format: str = FormatChoice.RICH.value,
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure, run the gate, render the result and exit with the verdict.

    Raises:
        typer.Exit: Always; the code is the gate's exit status
    """
    output_format = FormatChoice(output_format)
    setup_logging(
        verbose=verbose, quiet=quiet, annotations=output_format is FormatChoice.GITHUB
    )
    logger = get_logger(__name__)

    try:
        config = resolve_config(verbose=verbose, quiet=quiet, **options)
        reporter = GateReporter(config)
        try:
            result = reporter.run(root=root, report_path=report)
        except KeyboardInterrupt:
            reporter.cancel()
            raise
        get_formatter(output_format.value).render(result)

    except QualityGateError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(e.exit_code)

    except KeyboardInterrupt:
        logger.info("Gate interrupted by user")
        console.print("\n[yellow]Gate interrupted[/yellow]")
        raise typer.Exit(EXIT_INTERRUPTED)

    except Exception as e:
        logger.exception("Unexpected error during gate run")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(EXIT_FAILED)

    raise typer.Exit(exit_code(result))


def exit_code(result: GateResult) -> int:
    return EXIT_PASSED if result.passed else EXIT_FAILED
