"""JaCoCo XML report parsing.

The document element's direct ``counter`` children are the project totals.
Per-unit counters are the direct ``counter`` children of every element whose
tag is the configured unit scope (``class``, ``sourcefile`` or ``package``).
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from ..exceptions import ReportAccessError, ReportFormatError
from ..logging_config import get_logger
from .models import CounterNode, CoverageReport, CoverageUnit, MetricType

logger = get_logger(__name__)

_METRICS = {m.value: m for m in MetricType}
UNIT_SCOPES = ("class", "sourcefile", "package")


def _read_counters(element: ET.Element, source: str) -> dict[MetricType, CounterNode]:
    """Direct counter children of ``element``; a repeated type keeps the last one."""
    counters: dict[MetricType, CounterNode] = {}
    for counter in element.findall("counter"):
        metric = _METRICS.get(counter.get("type", ""))
        if metric is None:
            continue
        try:
            missed = int(counter.get("missed", ""))
            covered = int(counter.get("covered", ""))
        except ValueError:
            raise ReportFormatError(
                source, f"{metric.value} counter has non-integer missed/covered"
            )
        if missed < 0 or covered < 0:
            raise ReportFormatError(source, f"{metric.value} counter is negative")
        counters[metric] = CounterNode(metric, missed, covered)
    return counters


def _unit_name(element: ET.Element, scope: str, package: Optional[str]) -> str:
    name = element.get("name", "")
    if scope == "sourcefile" and package:
        return f"{package}/{name}".replace("/", ".")
    return name.replace("/", ".")


def _collect_units(root: ET.Element, scope: str, source: str) -> list[CoverageUnit]:
    units: list[CoverageUnit] = []

    def walk(element: ET.Element, package: Optional[str]) -> None:
        for child in element:
            if child.tag == "counter":
                continue
            child_package = child.get("name") if child.tag == "package" else package
            if child.tag == scope:
                units.append(
                    CoverageUnit(
                        name=_unit_name(child, scope, package),
                        scope=scope,
                        counters=_read_counters(child, source),
                    )
                )
            walk(child, child_package)

    walk(root, None)
    return units


def parse_report_text(text: str, unit_scope: str = "class", source: str = "<string>") -> CoverageReport:
    """
    Parse JaCoCo XML held in memory.

    Args:
        text: XML document
        unit_scope: Element tag treated as a coverage unit
        source: Name used in errors and in the report

    Returns:
        CoverageReport with totals for all four metric types

    Raises:
        ReportFormatError: If the XML is malformed or has no root-scope counters
    """
    if unit_scope not in UNIT_SCOPES:
        raise ValueError(f"Unknown unit scope: {unit_scope}")

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ReportFormatError(source, f"XML parse error: {e}")

    totals = _read_counters(root, source)
    if not totals:
        raise ReportFormatError(source, "No LINE, BRANCH, METHOD or CLASS counters at report root")

    for metric in MetricType:
        if metric not in totals:
            logger.debug(f"{source}: no {metric.value} counter at root, recorded as 0/0")
            totals[metric] = CounterNode(metric, 0, 0)

    units = _collect_units(root, unit_scope, source)
    logger.debug(f"{source}: {len(units)} {unit_scope} units")
    return CoverageReport(
        source=source,
        name=root.get("name", ""),
        totals=totals,
        units=tuple(units),
    )


def parse_report(path: Path, unit_scope: str = "class") -> CoverageReport:
    """
    Parse a JaCoCo XML report file.

    Raises:
        ReportAccessError: If the file is missing or unreadable
        ReportFormatError: If the content is not a usable report
    """
    if not path.is_file():
        raise ReportAccessError(path, "File not found")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReportAccessError(path, f"Cannot read file: {e}")
    return parse_report_text(text, unit_scope=unit_scope, source=str(path))
