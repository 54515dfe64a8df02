"""Unterminated string detection. Strings never span lines."""

from .core import DiagnosticCode
from .lines import is_comment_line

_QUOTE_NAMES = {'"': "double", "'": "single"}


class StringsMixin:

    def _check_strings(self):
        for line_no, line in enumerate(self.lines):
            if is_comment_line(line):
                continue
            scanned = self.scanned[line_no]
            if scanned.unclosed_quote is None:
                continue
            kind = _QUOTE_NAMES[scanned.unclosed_quote]
            self._error(
                DiagnosticCode.UNCLOSED_STRING,
                f"Unclosed string: missing closing {kind} quote",
                line_no, scanned.unclosed_column, len(line),
                subject=scanned.unclosed_quote,
            )
