"""Document symbol provider for Orion.

Renders the analyzer's symbol table for the Outline view. Functions list
their parameters as children.
"""

from __future__ import annotations

from lsprotocol import types as lsp

from src.analyzer.core import FunctionSymbol, VariableSymbol
from src.devex.lsp.diagnostics import AnalysisResult
from src.devex.lsp.utils import (
    symbol_detail,
    symbol_kind,
    symbol_line_range,
    symbol_name_range,
)


def _parameter_symbols(fn: FunctionSymbol) -> list[lsp.DocumentSymbol]:
    children = []
    for param in fn.params:
        rng = lsp.Range(
            start=lsp.Position(line=fn.line, character=param.column),
            end=lsp.Position(line=fn.line, character=param.column + len(param.name)),
        )
        children.append(
            lsp.DocumentSymbol(
                name=param.name,
                kind=lsp.SymbolKind.Variable,
                range=rng,
                selection_range=rng,
                detail=param.type or "any",
            )
        )
    return children


def get_document_symbols(result: AnalysisResult) -> list[lsp.DocumentSymbol]:
    """Extract document symbols from the symbol table, in source order."""
    symbols: list[lsp.DocumentSymbol] = []
    for name, symbol in result.symbols.items():
        if isinstance(symbol, VariableSymbol) and symbol.parameter_of:
            continue
        children = None
        if isinstance(symbol, FunctionSymbol):
            children = _parameter_symbols(symbol) or None
        symbols.append(
            lsp.DocumentSymbol(
                name=name,
                kind=symbol_kind(symbol),
                range=symbol_line_range(symbol, result.source),
                selection_range=symbol_name_range(symbol),
                detail=symbol_detail(symbol),
                children=children,
            )
        )
    symbols.sort(key=lambda s: (s.range.start.line, s.selection_range.start.character))
    return symbols
