"""Bracket balance tracking across the whole document."""

from .core import BracketStackEntry, DiagnosticCode
from .lines import is_comment_line

_PAIRS = {"(": ")", "[": "]", "{": "}"}
_OPENERS = {v: k for k, v in _PAIRS.items()}


class BracketsMixin:

    def _check_brackets(self):
        # One stack for the whole document so multi-line blocks balance.
        stack: list[BracketStackEntry] = []
        for line_no, line in enumerate(self.lines):
            if is_comment_line(line):
                continue
            for col, ch in enumerate(self.scanned[line_no].masked):
                if ch in _PAIRS:
                    stack.append(BracketStackEntry(ch, _PAIRS[ch], line_no, col))
                elif ch in _OPENERS:
                    if not stack:
                        self._error(
                            DiagnosticCode.UNMATCHED_BRACKET,
                            f'Unexpected "{ch}": no matching "{_OPENERS[ch]}"',
                            line_no, col, col + 1, subject=ch,
                        )
                        continue
                    opener = stack.pop()
                    if opener.expected != ch:
                        self._error(
                            DiagnosticCode.MISMATCHED_BRACKET,
                            f'Expected "{opener.expected}" but found "{ch}"',
                            line_no, col, col + 1, subject=ch,
                        )

        for entry in stack:
            self._error(
                DiagnosticCode.UNCLOSED_BRACKET,
                f'"{entry.char}" was never closed',
                entry.line, entry.column, entry.column + 1, subject=entry.char,
            )
