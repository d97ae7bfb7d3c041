"""
Logging configuration for the quality gate.

Log records go to stderr through rich, so the gate report on stdout stays
machine-readable. Under ``--format github`` the scanner's warnings (files
skipped as unreadable or oversized) are also written to stdout as workflow
commands; they then show up beside the violation annotations of the run.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Warnings from here concern single files, not the gate as a whole
_ANNOTATED_LOGGER = "quality_gate.scanning"


class GithubAnnotationHandler(logging.Handler):
    """Writes each record as a ``::warning`` or ``::error`` workflow command."""

    def __init__(self, level: int = logging.WARNING):
        super().__init__(level=level)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            command = "error" if record.levelno >= logging.ERROR else "warning"
            message = self.format(record)
            message = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
            # resolved per record so redirected stdout is honoured
            print(f"::{command} title=quality-gate::{message}", file=sys.stdout)
        except Exception:
            self.handleError(record)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    annotations: bool = False,
) -> logging.Logger:
    """
    Configure logging for one gate run.

    Args:
        verbose: Enable DEBUG level logging, with timestamps and source paths
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append logs to
        annotations: Also emit scanner warnings as GitHub Actions annotations

    Returns:
        Configured logger instance for quality_gate
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # file paths and XML snippets in messages are not rich markup
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        # scans run on worker threads; keep the thread so per-file lines can be told apart
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    logger = logging.getLogger("quality_gate")
    logger.setLevel(level)

    scanning = logging.getLogger(_ANNOTATED_LOGGER)
    for handler in list(scanning.handlers):
        if isinstance(handler, GithubAnnotationHandler):
            scanning.removeHandler(handler)
    if annotations:
        scanning.addHandler(GithubAnnotationHandler())

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'quality_gate.scanning.spans')
              If None, returns the root quality_gate logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("quality_gate")

    if not name.startswith("quality_gate"):
        name = f"quality_gate.{name}"

    return logging.getLogger(name)
