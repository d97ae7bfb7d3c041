"""Shared test fixtures: Java source and JaCoCo report builders."""

from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def method_source(name: str, total_lines: int, public: bool = False, doc: bool = True) -> str:
    """A method whose span (signature through closing brace) is ``total_lines`` long."""
    lines = []
    if doc:
        lines.append("    /** Does the work. */")
    modifier = "public" if public else "private"
    lines.append(f"    {modifier} void {name}() {{")
    for i in range(total_lines - 2):
        lines.append(f"        int v{i} = {i};")
    lines.append("    }")
    return "\n".join(lines)


def class_source(*members: str, name: str = "Sample") -> str:
    """A documented public class wrapping the given member sources."""
    body = "\n\n".join(members)
    return f"/** Sample class. */\npublic class {name} {{\n\n{body}\n}}\n"


def counter_xml(kind: str, missed: int, covered: int) -> str:
    return f'<counter type="{kind}" missed="{missed}" covered="{covered}"/>'


def jacoco_xml(totals: dict, classes: dict = None, package: str = "com/example") -> str:
    """JaCoCo-style report.

    Args:
        totals: metric -> (missed, covered) for the root counters
        classes: class simple name -> (missed, covered) LINE counters
    """
    classes = classes or {}
    class_parts = []
    for cls, (missed, covered) in classes.items():
        class_parts.append(
            f'<class name="{package}/{cls}" sourcefilename="{cls}.java">'
            f"{counter_xml('LINE', missed, covered)}</class>"
            f'<sourcefile name="{cls}.java">{counter_xml("LINE", missed, covered)}</sourcefile>'
        )
    root_counters = "".join(counter_xml(k, m, c) for k, (m, c) in totals.items())
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<report name="demo">'
        f'<package name="{package}">{"".join(class_parts)}'
        f"{counter_xml('LINE', 1, 1)}</package>"
        f"{root_counters}"
        "</report>"
    )


@pytest.fixture
def write_file(tmp_path):
    """Write ``content`` to ``tmp_path / relative`` and return the path."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def java_method():
    return method_source


@pytest.fixture
def java_class():
    return class_source


@pytest.fixture
def jacoco_report():
    return jacoco_xml
