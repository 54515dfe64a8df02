"""Definedness and liveness checks against the flat symbol table.

There is one scope per document: a name declared anywhere in the file is
visible on every line, and nested blocks do not shadow. This mirrors the
language's surface syntax, which has no block-scoped declarations.
"""

import re
from collections import defaultdict

from .core import (
    DECLARATION_KEYWORDS,
    RESERVED_WORDS,
    Category,
    DiagnosticCode,
    VariableSymbol,
)
from .lines import has_comment_marker

_WORD_RE = re.compile(r"\b[A-Za-z_]\w*\b")
_FN_HEADER_RE = re.compile(r"^\s*fn\b[^{]*")
_DECLARATION_RE = re.compile(r"^\s*(?:let|var|const)\s+(\w+)(?:\s*:\s*(\w+))?")
_ASSIGN_TARGET_RE = re.compile(r"^\s*([A-Za-z_]\w*)\s*=(?!=)")
_REDECLARATION_RE = re.compile(
    r"^(\s*)(?:let|var|const)\s+(\w+)(?:\s*:\s*\w+)?\s*=(.*)$"
)


class UsageMixin:

    def _check_usage(self):
        duplicates = defaultdict(list)
        for dup in self.duplicates:
            duplicates[dup.line].append(dup)

        for line_no, line in enumerate(self.lines):
            if not line.strip() or has_comment_marker(line):
                continue
            for dup in duplicates.get(line_no, ()):
                self._report_duplicate(dup, line)
            self._check_references(line_no)

        for symbol in self.symbols.values():
            if not isinstance(symbol, VariableSymbol):
                continue
            if symbol.used or symbol.parameter_of is not None:
                continue
            self._warning(
                DiagnosticCode.UNUSED_VAR,
                f"'{symbol.name}' is declared but never used",
                symbol.line, symbol.column, symbol.column + len(symbol.name),
                category=Category.SEMANTIC, subject=symbol.name,
                fix=self._delete_line_fix(symbol.line),
            )

    def _report_duplicate(self, dup, line: str):
        fix = None
        m = _REDECLARATION_RE.match(line)
        if m:
            fix = self._line_fix(dup.line, f"{m.group(1)}{m.group(2)} ={m.group(3)}")
        self._error(
            DiagnosticCode.DUPLICATE_VAR,
            f"'{dup.name}' is already declared",
            dup.line, dup.column, dup.column + len(dup.name),
            category=Category.SEMANTIC, subject=dup.name, fix=fix,
        )

    def _declaration_spans(self, masked: str) -> list[tuple[int, int]]:
        """Column spans holding names or types being declared, not referenced."""
        m = _FN_HEADER_RE.match(masked)
        if m:
            return [(0, m.end())]
        m = _DECLARATION_RE.match(masked)
        if m:
            return [m.span(g) for g in (1, 2) if m.group(g)]
        m = _ASSIGN_TARGET_RE.match(masked)
        if m:
            return [m.span(1)]
        return []

    def _check_references(self, line_no: int):
        masked = self.scanned[line_no].masked
        spans = self._declaration_spans(masked)
        for m in _WORD_RE.finditer(masked):
            word, col = m.group(0), m.start()
            if any(start <= col < end for start, end in spans):
                continue
            if col > 0 and masked[col - 1] == ".":
                continue
            if word in RESERVED_WORDS or word in DECLARATION_KEYWORDS:
                continue
            symbol = self.symbols.get(word)
            if symbol is not None:
                if isinstance(symbol, VariableSymbol):
                    symbol.used = True
                continue
            if word in self.keywords:
                continue
            if masked[m.end():m.end() + 1] == "(":
                continue
            self._warning(
                DiagnosticCode.UNDEFINED_VARIABLE,
                f"'{word}' is not defined",
                line_no, col, m.end(),
                category=Category.SEMANTIC, subject=word,
            )
