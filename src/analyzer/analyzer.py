"""Analyzer assembly: combines all checker mixins into the final Analyzer class."""

import logging

from .core import (
    AnalyzerBase, AnalyzedDocument, BracketStackEntry, Category, Diagnostic,
    DiagnosticCode, FunctionSymbol, Parameter, Severity, SymbolTable, TextFix,
    VariableSymbol,
)
from .lines import scan_line, split_lines
from .brackets import BracketsMixin
from .strings import StringsMixin
from .declarations import DeclarationsMixin
from .structure import StructureMixin
from .usage import UsageMixin

logger = logging.getLogger(__name__)


class Analyzer(
    UsageMixin,
    StructureMixin,
    DeclarationsMixin,
    StringsMixin,
    BracketsMixin,
    AnalyzerBase,
):
    """Heuristic line scanner for Orion source.

    ``analyze`` is a pure function of the text and the keyword table: every
    call starts from empty state, and nothing carries over between passes.
    Usage runs last because it needs the finished symbol table.
    """

    def analyze(self, text: str) -> AnalyzedDocument:
        self._reset(split_lines(text))
        self.scanned = [scan_line(line) for line in self.lines]

        self._check_brackets()
        self._check_strings()
        self._collect_declarations()
        self._check_structure()
        self._check_usage()

        logger.debug("analyzed %d lines: %d diagnostics, %d symbols",
                     len(self.lines), len(self.diagnostics), len(self.symbols))
        return AnalyzedDocument(
            diagnostics=self.diagnostics,
            symbols=self.symbols,
        )


__all__ = [
    "Analyzer", "AnalyzedDocument", "BracketStackEntry", "Category",
    "Diagnostic", "DiagnosticCode", "FunctionSymbol", "Parameter", "Severity",
    "SymbolTable", "TextFix", "VariableSymbol",
]
