"""Tests for the line scanner and unterminated string detection."""

from src.analyzer.analyzer import Analyzer
from src.analyzer.core import DiagnosticCode
from src.analyzer.lines import scan_line, split_lines


def string_diags(source: str):
    diags = Analyzer({"show": {}}).analyze(source).diagnostics
    return [d for d in diags if d.code == DiagnosticCode.UNCLOSED_STRING]


class TestScanLine:
    def test_masks_string_contents(self):
        scanned = scan_line('show("a(b")')
        assert scanned.masked == 'show("   ")'
        assert scanned.unclosed_quote is None

    def test_mid_line_double_dash_is_kept(self):
        assert scan_line("x = 1 -- note").masked == "x = 1 -- note"

    def test_comment_marker_inside_string_is_text(self):
        assert scan_line('show("--")').masked == 'show("  ")'

    def test_reports_unclosed_quote(self):
        scanned = scan_line("let s = 'abc")
        assert scanned.unclosed_quote == "'"
        assert scanned.unclosed_column == 8

    def test_masked_line_keeps_length(self):
        line = 'let s = "a\\"b" -- c'
        assert len(scan_line(line).masked) == len(line)

    def test_split_lines_accepts_crlf(self):
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]


class TestUnclosedStrings:
    def test_unclosed_double_quote(self):
        (diag,) = string_diags('show("hi)')
        assert (diag.line, diag.start, diag.end) == (0, 5, 9)
        assert "double" in diag.message

    def test_unclosed_single_quote(self):
        (diag,) = string_diags("let c = 'x")
        assert diag.start == 8
        assert "single" in diag.message

    def test_closed_strings(self):
        assert string_diags('let s = "hello"\nlet t = \'world\'') == []

    def test_escaped_quote_does_not_terminate(self):
        assert string_diags('let s = "a\\"b"') == []
        assert len(string_diags('let s = "a\\"')) == 1

    def test_other_quote_inside_string(self):
        assert string_diags('show("it\'s")') == []

    def test_one_diagnostic_per_line(self):
        diags = string_diags('show("a" "b\nshow("c')
        assert [(d.line, d.start) for d in diags] == [(0, 9), (1, 5)]

    def test_comment_lines_are_not_scanned(self):
        assert string_diags("-- don't") == []

    def test_quote_after_mid_line_double_dash(self):
        (diag,) = string_diags("show(1) -- it's")
        assert diag.start == 13
