"""Code completion provider for Orion.

Provides built-in word, document symbol, and snippet completions.
"""

import re

from lsprotocol import types as lsp

from src.analyzer.core import FunctionSymbol, VariableSymbol
from src.devex.lsp.builtins import DocsTable
from src.devex.lsp.diagnostics import AnalysisResult
from src.devex.lsp.utils import get_text_before_cursor, symbol_detail

_MEMBER_RE = re.compile(r"\w+\.\w*$")
_OPEN_CALL_RE = re.compile(r"\w+\([^)]*$")


# ---------------------------------------------------------------------------
# Snippet completions
# ---------------------------------------------------------------------------

_SNIPPETS = [
    (
        "fn",
        "fn ... { ... }",
        "Function declaration",
        "fn ${1:name}(${2:params}) -> ${3:type} {\n\t$0\n}",
    ),
    (
        "if",
        "if ... { ... }",
        "If statement",
        "if ${1:condition} {\n\t$0\n}",
    ),
    (
        "if else",
        "if ... { ... } else { ... }",
        "If/else statement",
        "if ${1:condition} {\n\t$2\n} else {\n\t$0\n}",
    ),
    (
        "while",
        "while ... { ... }",
        "While loop",
        "while ${1:condition} {\n\t$0\n}",
    ),
    (
        "for",
        "for ... in ... { ... }",
        "For-in loop",
        "for ${1:item} in ${2:collection} {\n\t$0\n}",
    ),
    (
        "let",
        "let ... = ...",
        "Variable declaration",
        "let ${1:name} = ${0:value}",
    ),
    (
        "const",
        "const ... = ...",
        "Constant declaration",
        "const ${1:NAME} = ${0:value}",
    ),
    (
        "show",
        'show("...")',
        "Print a value",
        'show(${1:"message"})$0',
    ),
]


# ---------------------------------------------------------------------------
# Completion builders
# ---------------------------------------------------------------------------


def _snippet_completions() -> list[lsp.CompletionItem]:
    items = []
    for label, filter_text, doc, body in _SNIPPETS:
        items.append(
            lsp.CompletionItem(
                label=label,
                kind=lsp.CompletionItemKind.Snippet,
                detail=doc,
                insert_text=body,
                insert_text_format=lsp.InsertTextFormat.Snippet,
                filter_text=filter_text,
            )
        )
    return items


def _builtin_completions(keywords: DocsTable) -> list[lsp.CompletionItem]:
    items = []
    for word, entry in keywords.items():
        if entry.is_callable:
            items.append(
                lsp.CompletionItem(
                    label=word,
                    kind=lsp.CompletionItemKind.Function,
                    detail=entry.syntax or None,
                    documentation=entry.description or None,
                    insert_text=f"{word}($1)$0",
                    insert_text_format=lsp.InsertTextFormat.Snippet,
                )
            )
        else:
            items.append(
                lsp.CompletionItem(
                    label=word,
                    kind=lsp.CompletionItemKind.Keyword,
                    detail=entry.syntax or None,
                    documentation=entry.description or None,
                    insert_text=word,
                )
            )
    return items


def _symbol_completions(result: AnalysisResult) -> list[lsp.CompletionItem]:
    items = []
    for name, symbol in result.symbols.items():
        if isinstance(symbol, FunctionSymbol):
            items.append(
                lsp.CompletionItem(
                    label=name,
                    kind=lsp.CompletionItemKind.Function,
                    detail=symbol.signature,
                    documentation=f"Defined on line {symbol.line + 1}",
                    insert_text=f"{name}($1)$0",
                    insert_text_format=lsp.InsertTextFormat.Snippet,
                )
            )
        elif isinstance(symbol, VariableSymbol):
            kind = (
                lsp.CompletionItemKind.Variable
                if symbol.mutable
                else lsp.CompletionItemKind.Constant
            )
            items.append(
                lsp.CompletionItem(
                    label=name,
                    kind=kind,
                    detail=symbol_detail(symbol),
                    documentation=f"Defined on line {symbol.line + 1}",
                    insert_text=name,
                )
            )
    return items


# ---------------------------------------------------------------------------
# Main completion entry point
# ---------------------------------------------------------------------------


def get_completions(
    result: AnalysisResult,
    position: lsp.Position,
) -> list[lsp.CompletionItem]:
    """Compute completion items for the given cursor position."""
    text_before = get_text_before_cursor(result.source, position)

    # Member access: the analyzer knows nothing about members
    if _MEMBER_RE.search(text_before):
        return []

    # Inside call arguments only values make sense
    if _OPEN_CALL_RE.search(text_before):
        return _symbol_completions(result)

    items: list[lsp.CompletionItem] = []
    items.extend(_builtin_completions(result.keywords))
    items.extend(_symbol_completions(result))
    items.extend(_snippet_completions())
    return items
