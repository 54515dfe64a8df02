"""Hover provider for Orion.

Shows the signature of document functions, the type and state of document
variables, and the documentation of built-in words.
"""

from typing import Optional

from lsprotocol import types as lsp

from src.analyzer.core import FunctionSymbol, Symbol, VariableSymbol
from src.devex.lsp.builtins import get_hover_markdown
from src.devex.lsp.diagnostics import AnalysisResult
from src.devex.lsp.utils import get_word_at_position, parameter_owners


def _format_function_info(symbol: FunctionSymbol) -> str:
    return (
        f"**{symbol.name}**\n\n"
        f"```orion\n{symbol.signature}\n```\n\n"
        f"Defined on line {symbol.line + 1}"
    )


def _format_variable_info(symbol: VariableSymbol, owners=()) -> str:
    keyword = symbol.keyword or "let"
    lines = [
        f"**{symbol.name}**\n",
        f"```orion\n{keyword} {symbol.name}: {symbol.type or 'any'}\n```",
    ]
    if symbol.parameter_of:
        names = ", ".join(f"`{o}`" for o in owners or [symbol.parameter_of])
        lines.append(f"Parameter of {names}")
    else:
        state = "Mutable" if symbol.mutable else "Immutable"
        suffix = " (implicit)" if symbol.implicit else ""
        lines.append(f"{state} variable{suffix}")
    lines.append(f"\nDefined on line {symbol.line + 1}")
    if not symbol.used and not symbol.parameter_of:
        lines.append("\n**Warning:** unused variable")
    return "\n".join(lines)


def format_symbol_info(symbol: Symbol, owners=()) -> str:
    if isinstance(symbol, FunctionSymbol):
        return _format_function_info(symbol)
    return _format_variable_info(symbol, owners)


def get_hover_info(
    result: AnalysisResult, position: lsp.Position
) -> Optional[lsp.Hover]:
    """Return hover information for the word at the given position."""
    word = get_word_at_position(result.source, position)
    if not word:
        return None

    content: Optional[str] = None

    # Document symbols shadow built-in words
    symbol = result.symbols.get(word)
    if symbol is not None:
        content = format_symbol_info(symbol, parameter_owners(result.symbols, word))
    elif word in result.keywords:
        content = get_hover_markdown(word, result.keywords[word])

    if content is None:
        return None

    return lsp.Hover(
        contents=lsp.MarkupContent(
            kind=lsp.MarkupKind.Markdown,
            value=content,
        ),
    )
