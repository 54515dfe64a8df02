"""Shared utility functions for the Orion LSP feature modules."""

from __future__ import annotations

import re

from lsprotocol import types as lsp

from src.analyzer.core import FunctionSymbol, Symbol, SymbolTable
from src.analyzer.lines import split_lines

_WORD_BEFORE_RE = re.compile(r"\w+$")
_WORD_AFTER_RE = re.compile(r"^\w*")


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def get_line_text(source: str, line: int) -> str:
    """Get the text of a specific 0-based line."""
    lines = split_lines(source)
    if 0 <= line < len(lines):
        return lines[line]
    return ""


def get_text_before_cursor(source: str, position: lsp.Position) -> str:
    """Get the text on the current line before the cursor."""
    return get_line_text(source, position.line)[: position.character]


def get_word_at_position(source: str, position: lsp.Position) -> str:
    """Return the identifier touching the cursor, or an empty string."""
    line = get_line_text(source, position.line)
    before = _WORD_BEFORE_RE.search(line[: position.character])
    after = _WORD_AFTER_RE.match(line[position.character:])
    return (before.group(0) if before else "") + (after.group(0) if after else "")


# ---------------------------------------------------------------------------
# Symbol helpers
# ---------------------------------------------------------------------------


def symbol_kind(symbol: Symbol) -> lsp.SymbolKind:
    if isinstance(symbol, FunctionSymbol):
        return lsp.SymbolKind.Function
    return lsp.SymbolKind.Variable


def symbol_name_range(symbol: Symbol) -> lsp.Range:
    """Range covering just the symbol's name at its declaration."""
    return lsp.Range(
        start=lsp.Position(line=symbol.line, character=symbol.column),
        end=lsp.Position(line=symbol.line, character=symbol.column + len(symbol.name)),
    )


def symbol_line_range(symbol: Symbol, source: str) -> lsp.Range:
    """Range covering the whole declaring line."""
    end = len(get_line_text(source, symbol.line))
    return lsp.Range(
        start=lsp.Position(line=symbol.line, character=0),
        end=lsp.Position(line=symbol.line, character=end),
    )


def symbol_detail(symbol: Symbol) -> str:
    """Short description: 'a: int, b -> int' for functions, the type otherwise."""
    if isinstance(symbol, FunctionSymbol):
        params = ", ".join(
            f"{p.name}: {p.type}" if p.type else p.name for p in symbol.params
        )
        return f"{params} -> {symbol.return_type or 'void'}"
    return symbol.type or "any"


def parameter_owners(symbols: SymbolTable, name: str) -> list[str]:
    """Names of the document functions that take a parameter called *name*."""
    return [
        symbol.name
        for symbol in symbols.values()
        if isinstance(symbol, FunctionSymbol)
        and any(p.name == name for p in symbol.params)
    ]
