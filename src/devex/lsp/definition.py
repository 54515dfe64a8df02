"""Go-to-definition provider for Orion.

Jumps from any occurrence of a function, variable or parameter name to the
line that declared it. The symbol table has one flat scope per document, so
the declaration is unique.
"""

from __future__ import annotations

from typing import Optional

from lsprotocol import types as lsp

from src.devex.lsp.diagnostics import AnalysisResult
from src.devex.lsp.utils import get_word_at_position, symbol_name_range


def get_definition(
    result: AnalysisResult, position: lsp.Position
) -> Optional[lsp.Location]:
    word = get_word_at_position(result.source, position)
    if not word:
        return None
    symbol = result.symbols.get(word)
    if symbol is None:
        return None
    return lsp.Location(uri=result.uri, range=symbol_name_range(symbol))
