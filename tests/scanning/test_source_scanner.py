"""Tests for file discovery and the concurrent scan."""

import logging
from pathlib import Path, PurePath

import pytest

from quality_gate.config import GateConfig
from quality_gate.exceptions import InvalidPathError
from quality_gate.file_ops import is_test_file, should_skip_file
from quality_gate.models import Severity, Violation, ViolationKind
from quality_gate.scanning import checks as checks_module
from quality_gate.scanning.collector import ViolationCollector
from quality_gate.scanning.languages import LANGUAGES
from quality_gate.scanning.scanner import SourceScanner

BAD_SOURCE = (
    "public class Bad {\n"
    "    public void run() {\n"
    '        System.out.println("x");\n'
    "    }\n"
    "}\n"
)


class TestDiscover:
    def test_finds_included_extensions(self, tmp_path, write_file, java_class):
        write_file("src/main/java/A.java", java_class())
        write_file("src/main/groovy/B.groovy", java_class())
        write_file("README.md", "# readme\n")

        found = SourceScanner().discover(tmp_path)
        assert [display for _, display in found] == [
            "src/main/groovy/B.groovy",
            "src/main/java/A.java",
        ]

    def test_excluded_directories_skipped(self, tmp_path, write_file, java_class):
        write_file("src/A.java", java_class())
        write_file("target/generated/B.java", java_class())
        write_file("module/build/C.java", java_class())

        found = SourceScanner().discover(tmp_path)
        assert [display for _, display in found] == ["src/A.java"]

    def test_include_restricts_extensions(self, tmp_path, write_file, java_class):
        write_file("A.java", java_class())
        write_file("B.groovy", java_class())

        found = SourceScanner(GateConfig(include_extensions=[".groovy"])).discover(tmp_path)
        assert [display for _, display in found] == ["B.groovy"]

    def test_single_file_root(self, write_file, java_class):
        path = write_file("A.java", java_class())
        assert SourceScanner().discover(path) == [(path, str(path))]

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(InvalidPathError):
            SourceScanner().discover(tmp_path / "nope")


class TestScan:
    def test_clean_tree_has_no_violations(self, tmp_path, write_file, java_class, java_method):
        write_file("A.java", java_class(java_method("run", 10, public=True)))
        result = SourceScanner().scan(tmp_path)

        assert result.violations == []
        assert result.files_scanned == 1
        assert result.files_failed == 0

    def test_violations_carry_display_path(self, tmp_path, write_file):
        write_file("pkg/Bad.java", BAD_SOURCE)
        result = SourceScanner().scan(tmp_path)

        assert {v.path for v in result.violations} == {"pkg/Bad.java"}
        assert {v.kind for v in result.violations} == {
            ViolationKind.MISSING_DOC,
            ViolationKind.BANNED_CALL,
        }

    def test_violations_sorted(self, tmp_path, write_file):
        write_file("b/Bad.java", BAD_SOURCE)
        write_file("a/Bad.java", BAD_SOURCE)
        violations = SourceScanner().scan(tmp_path).violations

        assert violations == sorted(violations, key=lambda v: v.sort_key)
        assert violations[0].path == "a/Bad.java"

    def test_test_sources_skip_structural_checks(self, tmp_path, write_file):
        write_file("BadTest.java", BAD_SOURCE)
        kinds = {v.kind for v in SourceScanner().scan(tmp_path).violations}
        assert kinds == {ViolationKind.BANNED_CALL}

    def test_test_sources_checked_when_configured(self, tmp_path, write_file):
        write_file("BadTest.java", BAD_SOURCE)
        config = GateConfig(check_test_structure=True)
        kinds = {v.kind for v in SourceScanner(config).scan(tmp_path).violations}
        assert ViolationKind.MISSING_DOC in kinds

    def test_oversized_file_skipped_with_notice(self, tmp_path, write_file, java_class):
        write_file("Small.java", "class A {}\n")
        write_file("Large.java", java_class(*["    // filler line"] * 50))
        config = GateConfig(max_file_size_mb=0.0001)
        result = SourceScanner(config).scan(tmp_path)

        assert result.files_scanned == 1
        assert result.files_failed == 1
        assert len(result.notices) == 1
        assert result.notices[0].startswith("Large.java")

    def test_unreadable_file_skipped_with_notice(self, tmp_path, write_file, monkeypatch, caplog):
        write_file("Bad.java", BAD_SOURCE)
        write_file("Locked.java", BAD_SOURCE)
        real_open = open

        def guarded_open(path, *args, **kwargs):
            if Path(path).name == "Locked.java":
                raise PermissionError(13, "Permission denied", str(path))
            return real_open(path, *args, **kwargs)

        monkeypatch.setattr("quality_gate.scanning.lines.open", guarded_open, raising=False)
        caplog.set_level(logging.WARNING, logger="quality_gate")
        result = SourceScanner().scan(tmp_path)

        assert result.files_scanned == 1
        assert result.files_failed == 1
        assert {v.path for v in result.violations} == {"Bad.java"}
        assert len(result.notices) == 1
        assert result.notices[0].startswith("Locked.java: Cannot read file")
        assert "Permission denied" in result.notices[0]
        assert "Skipping Locked.java" in caplog.text

    def test_checks_built_once_per_language(self, tmp_path, write_file, monkeypatch):
        built = []
        real_build = checks_module.build_checks

        def counting_build(config, rules):
            built.append(rules.name)
            return real_build(config, rules)

        monkeypatch.setattr(checks_module, "build_checks", counting_build)
        for i in range(12):
            write_file(f"Bad{i}.java", BAD_SOURCE)
        write_file("Build.groovy", "println \"x\"\n")
        result = SourceScanner().scan(tmp_path)

        assert result.files_scanned == 13
        assert sorted(built) == sorted(LANGUAGES)

    def test_cancelled_scan_processes_nothing(self, tmp_path, write_file):
        write_file("Bad.java", BAD_SOURCE)
        scanner = SourceScanner()
        scanner.cancel()
        result = scanner.scan(tmp_path)

        assert result.cancelled
        assert result.files_scanned == 0
        assert result.violations == []


class TestConcurrentScan:
    """Parallel and sequential scans agree."""

    def test_parallel_equals_sequential(self, tmp_path, write_file, java_class, java_method):
        for i in range(25):
            if i % 3 == 0:
                write_file(f"pkg{i % 4}/Bad{i}.java", BAD_SOURCE)
            else:
                write_file(
                    f"pkg{i % 4}/Long{i}.java",
                    java_class(java_method("work", 30 + i), name=f"Long{i}"),
                )

        config = GateConfig(workers=4)
        sequential = SourceScanner(config).scan(tmp_path, parallel=False)
        parallel = SourceScanner(config).scan(tmp_path, parallel=True)

        assert parallel.violations == sequential.violations
        assert parallel.files_scanned == sequential.files_scanned == 25
        assert len(sequential.violations) > 0


class TestCollector:
    def test_snapshot_is_sorted_and_counts_files(self):
        collector = ViolationCollector()
        late = Violation(ViolationKind.STYLE_SMELL, Severity.INFO, "b.java", 1, "m")
        early = Violation(ViolationKind.STYLE_SMELL, Severity.INFO, "a.java", 9, "m")
        collector.extend([late])
        collector.extend([early])
        collector.fail("c.java: unreadable")

        assert collector.snapshot() == [early, late]
        assert collector.files_scanned == 2
        assert collector.files_failed == 1
        assert collector.notices() == ["c.java: unreadable"]


class TestFileOps:
    @pytest.mark.parametrize(
        "path, skipped",
        [
            ("target/A.java", True),
            ("module/target/classes/A.java", True),
            ("src/main/java/A.java", False),
            ("src/Foo.generated.java", True),
        ],
    )
    def test_should_skip_file(self, path, skipped):
        patterns = GateConfig().exclude_patterns
        assert should_skip_file(PurePath(path), patterns) is skipped

    @pytest.mark.parametrize(
        "name, is_test",
        [
            ("src/test/java/FooTest.java", True),
            ("FooTests.java", True),
            ("FooIT.java", True),
            ("FooSpec.groovy", True),
            ("Foo.java", False),
            ("TestFoo.java", False),
        ],
    )
    def test_is_test_file(self, name, is_test):
        assert is_test_file(PurePath(name), GateConfig().test_file_patterns) is is_test
