"""End-to-end tests for the analyzer pipeline."""

import pytest

from src.analyzer.analyzer import Analyzer
from src.analyzer.core import DiagnosticCode, TextFix
from src.analyzer.lines import split_lines

KEYWORDS = {"show": {}, "len": {}}


def analyze(source: str):
    return Analyzer(KEYWORDS).analyze(source)


def codes(source: str) -> list[str]:
    return [d.code.value for d in analyze(source).diagnostics]


def apply_fix(source: str, fix: TextFix) -> str:
    lines = split_lines(source)

    def offset(line: int, character: int) -> int:
        return sum(len(l) + 1 for l in lines[:line]) + character

    start = offset(fix.start_line, fix.start_character)
    end = offset(fix.end_line, fix.end_character)
    return source[:start] + fix.new_text + source[end:]


SAMPLE = """\
-- totals
const LIMIT: int = 10
let items = [1, 2, 3]

fn total(values: list) -> int {
    let sum = 0
    let i = 0
    while i < len(values) {
        sum = sum + values[i]
        i = i + 1
    }
    return sum
}

let result = total(items)
if result > LIMIT {
    show("over the limit")
}
"""


class TestPipeline:
    def test_unclosed_function(self):
        assert codes("fn foo(") == ["unclosed-bracket", "incomplete-function"]

    def test_checker_order(self):
        src = 'let x = 1\nlet x = (2\nshow("a\n# c'
        assert codes(src) == [
            "unclosed-bracket",
            "unclosed-bracket",
            "unclosed-string",
            "invalid-comment",
            "invalid-syntax",
            "duplicate-var",
            "unused-var",
        ]

    def test_clean_program(self):
        result = analyze(SAMPLE)
        assert result.diagnostics == []
        assert list(result.symbols) == [
            "LIMIT", "items", "total", "values", "sum", "i", "result",
        ]

    def test_inferred_from_function_return(self):
        assert analyze(SAMPLE).symbols["result"].type == "int"


class TestDeterminism:
    def test_same_text_same_output(self):
        first = analyze(SAMPLE + "let y = 1\n# bad\nshow(q")
        second = analyze(SAMPLE + "let y = 1\n# bad\nshow(q")
        assert first.diagnostics == second.diagnostics
        assert first.symbols == second.symbols

    def test_reused_analyzer_starts_fresh(self):
        analyzer = Analyzer(KEYWORDS)
        first = analyzer.analyze("let a = 1")
        second = analyzer.analyze("show(2)")
        assert [d.code for d in first.diagnostics] == [DiagnosticCode.UNUSED_VAR]
        assert "a" in first.symbols
        assert second.symbols == {}
        assert second.diagnostics == []


class TestResilience:
    @pytest.mark.parametrize("source", [
        "",
        "\n\n\n",
        "\x00\xff}{)(\"'",
        "fn (((\n))) = = =\nlet\nconst : =",
        "\\\\\\\"",
        "let = 1\n= 2\n==\n->",
        "fn f(,,:,) -> {",
        "\r\n\r\n",
    ])
    def test_never_raises(self, source):
        result = analyze(source)
        assert isinstance(result.diagnostics, list)

    def test_crlf_line_endings(self):
        assert codes("let a = 1\r\nshow(a)\r\n") == []


class TestQuickFixRoundTrip:
    def test_unused_var_fix_removes_line(self):
        src = "let y = 5"
        (diag,) = analyze(src).diagnostics
        fixed = apply_fix(src, diag.fix)
        assert fixed == ""
        assert "unused-var" not in codes(fixed)

    def test_unused_var_fix_in_larger_document(self):
        src = "show(1)\nlet y = 5\nshow(2)"
        (diag,) = analyze(src).diagnostics
        fixed = apply_fix(src, diag.fix)
        assert fixed == "show(1)\nshow(2)"
        assert codes(fixed) == []

    def test_duplicate_fix_turns_into_assignment(self):
        src = "let x = 1\nlet x = 2\nshow(x)"
        dup = [d for d in analyze(src).diagnostics if d.code == DiagnosticCode.DUPLICATE_VAR]
        fixed = apply_fix(src, dup[0].fix)
        assert fixed == "let x = 1\nx = 2\nshow(x)"
        assert codes(fixed) == []

    def test_print_fix(self):
        src = 'print("hi")'
        (diag,) = analyze(src).diagnostics
        assert apply_fix(src, diag.fix) == 'show("hi")'
