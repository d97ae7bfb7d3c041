"""Tests for documentation association."""

from quality_gate.models import Severity, ViolationKind
from quality_gate.scanning.docs import DocumentationAssociator, start_states
from quality_gate.scanning.lexer import LexState
from quality_gate.scanning.lines import source_unit_from_text


def _check(text: str, **kwargs):
    unit = source_unit_from_text(text, "Sample.java")
    return DocumentationAssociator(**kwargs).check(unit)


def _wrap(*lines: str) -> str:
    return "class Sample {\n" + "\n".join(lines) + "\n}\n"


class TestDocumented:
    """Javadoc that counts as documentation."""

    def test_javadoc_directly_above(self):
        text = _wrap(
            "    /**",
            "     * Runs it.",
            "     */",
            "    public void run() {",
            "    }",
        )
        assert _check(text) == []

    def test_single_line_javadoc(self):
        assert _check(_wrap("    /** Runs it. */", "    public void run() {", "    }")) == []

    def test_annotations_between_doc_and_declaration(self):
        text = _wrap(
            "    /** Runs it. */",
            "    @Override",
            '    @SuppressWarnings("unchecked")',
            "    public void run() {",
            "    }",
        )
        assert _check(text) == []

    def test_blank_lines_within_window(self):
        text = _wrap("    /** Runs it. */", *[""] * 5, "    public void run() {", "    }")
        assert _check(text, window=5) == []

    def test_annotations_do_not_count_against_window(self):
        text = _wrap(
            "    /** Runs it. */",
            "",
            "    @A",
            "    @B",
            "    @C",
            "",
            "    public void run() {",
            "    }",
        )
        assert _check(text, window=2) == []

    def test_comment_opener_inside_javadoc_body(self):
        text = _wrap(
            "    /**",
            "     * Scans every src/*.java file.",
            "     */",
            "    public void scan() {",
            "    }",
        )
        assert _check(text) == []

    def test_comment_opener_on_closing_line(self):
        text = _wrap(
            "    /**",
            "     * Scans sources.",
            "     * Matches src/*.java */",
            "    public void scan() {",
            "    }",
        )
        assert _check(text) == []

    def test_javadoc_after_code_on_same_line(self):
        text = _wrap("    int x; /* a */ /** Runs it. */", "    public void run() {", "    }")
        assert _check(text) == []


class TestUndocumented:
    """Lookback failures."""

    def test_code_directly_above(self):
        text = _wrap(
            "    /** Field doc. */",
            "    private int size;",
            "    public void run() {",
            "    }",
        )
        violations = _check(text)

        assert len(violations) == 1
        v = violations[0]
        assert v.kind is ViolationKind.MISSING_DOC
        assert v.severity is Severity.ERROR
        assert v.line == 4
        assert "'run'" in v.message

    def test_no_comment_at_all(self):
        assert len(_check(_wrap("    public int size() {", "        return 0;", "    }"))) == 1

    def test_too_many_blank_lines(self):
        text = _wrap("    /** Runs it. */", *[""] * 6, "    public void run() {", "    }")
        assert len(_check(text, window=5)) == 1

    def test_plain_block_comment_is_not_javadoc(self):
        text = _wrap("    /* Not javadoc. */", "    public void run() {", "    }")
        assert len(_check(text)) == 1

    def test_multi_line_plain_block_comment_is_not_javadoc(self):
        text = _wrap("    /*", "     * Not javadoc.", "     */", "    public void run() {", "    }")
        assert len(_check(text)) == 1

    def test_line_comment_is_not_javadoc(self):
        text = _wrap("    // Runs it.", "    public void run() {", "    }")
        assert len(_check(text)) == 1

    def test_scan_limit_caps_lookback(self):
        text = _wrap("    /** Runs it. */", *[""] * 4, "    public void run() {", "    }")
        assert _check(text, window=10, scan_limit=3) != []
        assert _check(text, window=10, scan_limit=5) == []

    def test_declaration_on_first_line(self):
        assert len(_check("public void run() {\n}\n")) == 1


class TestScope:
    """Which declarations need documentation."""

    def test_non_public_members_skipped(self):
        text = _wrap(
            "    private void a() {",
            "    }",
            "    protected void b() {",
            "    }",
            "    void c() {",
            "    }",
        )
        assert _check(text) == []

    def test_types_and_constants_skipped(self):
        text = _wrap(
            '    public static final String NAME = "x";',
            "    public enum Color { RED }",
            "    public interface Shape {",
            "    }",
        )
        assert _check(text) == []

    def test_constructor_checked(self):
        violations = _check(_wrap("    public Sample(int size) {", "    }"))
        assert len(violations) == 1
        assert "'Sample'" in violations[0].message

    def test_declaration_inside_block_comment_skipped(self):
        text = _wrap("    /*", "    public void old() {", "    }", "    */")
        assert _check(text) == []

    def test_exempt_patterns(self):
        text = _wrap(
            "    public int getSize() {",
            "        return 0;",
            "    }",
            "    public void run() {",
            "    }",
        )
        violations = _check(text, exempt_patterns=[r"get[A-Z]\w*"])
        assert [v.line for v in violations] == [5]


class TestFindDocumentation:
    def test_returns_closing_line(self):
        unit = source_unit_from_text(
            _wrap("    /**", "     * Doc.", "     */", "", "    public void run() {", "    }"),
            "Sample.java",
        )
        assert DocumentationAssociator().find_documentation(unit, 5) == 4

    def test_returns_none_when_undocumented(self):
        unit = source_unit_from_text(_wrap("    public void run() {", "    }"), "Sample.java")
        assert DocumentationAssociator().find_documentation(unit, 1) is None


class TestStartStates:
    def test_lines_inside_comment_start_in_comment(self):
        unit = source_unit_from_text("/**\n * a /* b\n */\nint x;\n", "Sample.java")
        assert start_states(unit.lines) == [
            LexState.CODE,
            LexState.BLOCK_COMMENT,
            LexState.BLOCK_COMMENT,
            LexState.CODE,
        ]
