"""Tests for LSP diagnostic conversion and the document store."""

from lsprotocol import types as lsp

from src.devex.lsp.builtins import DocEntry
from src.devex.lsp.diagnostics import (
    AnalysisResult,
    DocumentStore,
    compute_diagnostics,
    to_lsp_diagnostic,
)

URI = "file:///tmp/main.orn"
KEYWORDS = {"show": DocEntry(syntax="show(value)")}


def first(source: str) -> lsp.Diagnostic:
    result = compute_diagnostics(URI, source, KEYWORDS)
    return result.lsp_diagnostics[0]


class TestConversion:
    def test_syntax_error(self):
        diag = first("fn foo(")
        assert diag.severity == lsp.DiagnosticSeverity.Error
        assert diag.source == "orion-syntax"
        assert diag.code == "unclosed-bracket"
        assert diag.range == lsp.Range(
            start=lsp.Position(line=0, character=6),
            end=lsp.Position(line=0, character=7),
        )
        assert diag.tags is None

    def test_semantic_warning(self):
        diag = first("show(y)")
        assert diag.severity == lsp.DiagnosticSeverity.Warning
        assert diag.source == "orion-semantic"
        assert diag.message == "'y' is not defined"

    def test_unused_is_tagged_unnecessary(self):
        diag = first("let y = 5")
        assert diag.code == "unused-var"
        assert diag.tags == [lsp.DiagnosticTag.Unnecessary]

    def test_invalid_comment_is_tagged_unnecessary(self):
        diag = first("# note")
        assert diag.code == "invalid-comment"
        assert diag.tags == [lsp.DiagnosticTag.Unnecessary]

    def test_to_lsp_diagnostic_keeps_message(self):
        result = compute_diagnostics(URI, "let y = 5", KEYWORDS)
        (diag,) = result.diagnostics
        assert to_lsp_diagnostic(diag).message == diag.message


class TestComputeDiagnostics:
    def test_snapshot_fields(self):
        result = compute_diagnostics(URI, "let a = 1\nshow(a)", KEYWORDS)
        assert isinstance(result, AnalysisResult)
        assert result.uri == URI
        assert result.diagnostics == ()
        assert set(result.symbols) == {"a"}
        assert result.keywords is KEYWORDS

    def test_without_keywords_every_word_is_checked(self):
        result = compute_diagnostics(URI, "show(1)")
        assert result.keywords == {}
        assert result.lsp_diagnostics == []


class TestDocumentStore:
    def test_update_and_get(self):
        store = DocumentStore(KEYWORDS)
        result = store.update(URI, "let y = 5")
        assert store.get(URI) is result
        assert URI in store
        assert len(store) == 1

    def test_update_replaces_snapshot(self):
        store = DocumentStore(KEYWORDS)
        old = store.update(URI, "let y = 5")
        new = store.update(URI, "let y = 5\nshow(y)")
        assert store.get(URI) is new
        assert old.diagnostics != new.diagnostics
        assert new.diagnostics == ()
        assert len(store) == 1

    def test_close_evicts(self):
        store = DocumentStore(KEYWORDS)
        store.update(URI, "show(1)")
        store.close(URI)
        assert store.get(URI) is None
        assert URI not in store

    def test_close_unknown_document(self):
        store = DocumentStore()
        store.close(URI)
        assert len(store) == 0

    def test_documents_are_independent(self):
        store = DocumentStore(KEYWORDS)
        store.update(URI, "show(zz)")
        store.update("file:///tmp/other.orn", "show(1)")
        assert len(store.get(URI).diagnostics) == 1
        assert store.get("file:///tmp/other.orn").diagnostics == ()

    def test_uses_current_keywords(self):
        store = DocumentStore()
        assert len(store.update(URI, "show y").diagnostics) == 2
        store.keywords = KEYWORDS
        assert store.update(URI, "show y").diagnostics[0].subject == "y"
