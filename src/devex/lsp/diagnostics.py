"""Diagnostic computation for Orion documents.

Runs the analyzer over the full source text, converts its diagnostics into
LSP Diagnostic objects, and keeps the latest result per document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from lsprotocol import types as lsp

from src.analyzer import Analyzer
from src.analyzer.core import (
    Category,
    Diagnostic,
    DiagnosticCode,
    Severity,
    SymbolTable,
)
from src.devex.lsp.builtins import DocsTable

logger = logging.getLogger(__name__)

_SOURCES = {
    Category.SYNTAX: "orion-syntax",
    Category.SEMANTIC: "orion-semantic",
}

_SEVERITIES = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
}

# Code that is dead weight rather than wrong: rendered faded by the editor.
_UNNECESSARY = {DiagnosticCode.INVALID_COMMENT, DiagnosticCode.UNUSED_VAR}


@dataclass(frozen=True)
class AnalysisResult:
    """Snapshot of one analysis pass over a document.

    Replaced as a whole on every pass and never mutated afterwards, so a
    request handler always sees one consistent pass.
    """

    uri: str
    source: str
    diagnostics: tuple[Diagnostic, ...] = ()
    symbols: SymbolTable = field(default_factory=dict)
    keywords: DocsTable = field(default_factory=dict)

    @property
    def lsp_diagnostics(self) -> list[lsp.Diagnostic]:
        return [to_lsp_diagnostic(d) for d in self.diagnostics]


def diagnostic_range(diag: Diagnostic) -> lsp.Range:
    return lsp.Range(
        start=lsp.Position(line=diag.line, character=diag.start),
        end=lsp.Position(line=diag.line, character=diag.end),
    )


def to_lsp_diagnostic(diag: Diagnostic) -> lsp.Diagnostic:
    return lsp.Diagnostic(
        range=diagnostic_range(diag),
        message=diag.message,
        severity=_SEVERITIES[diag.severity],
        code=diag.code.value,
        source=_SOURCES[diag.category],
        tags=[lsp.DiagnosticTag.Unnecessary] if diag.code in _UNNECESSARY else None,
    )


def compute_diagnostics(
    uri: str, source: str, keywords: Optional[DocsTable] = None
) -> AnalysisResult:
    """Run the analyzer and return a fresh snapshot."""
    keywords = keywords if keywords is not None else {}
    analyzed = Analyzer(keywords).analyze(source)
    return AnalysisResult(
        uri=uri,
        source=source,
        diagnostics=tuple(analyzed.diagnostics),
        symbols=analyzed.symbols,
        keywords=keywords,
    )


class DocumentStore:
    """Latest analysis snapshot per open document.

    The only writer is ``update``; each write swaps the whole entry. Closing
    a document evicts its snapshot.
    """

    def __init__(self, keywords: Optional[DocsTable] = None):
        self.keywords: DocsTable = keywords if keywords is not None else {}
        self._results: dict[str, AnalysisResult] = {}

    def update(self, uri: str, source: str) -> AnalysisResult:
        result = compute_diagnostics(uri, source, self.keywords)
        self._results[uri] = result
        logger.debug("%s: %d diagnostics, %d symbols",
                     uri, len(result.diagnostics), len(result.symbols))
        return result

    def get(self, uri: str) -> Optional[AnalysisResult]:
        return self._results.get(uri)

    def close(self, uri: str) -> None:
        self._results.pop(uri, None)

    def __contains__(self, uri: str) -> bool:
        return uri in self._results

    def __len__(self) -> int:
        return len(self._results)
