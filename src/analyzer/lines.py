"""Line splitting and the per-line string/comment scanner.

Every checker works on raw lines. ``scan_line`` walks one line left to
right, carrying only the open-quote and escape state, and produces a
*masked* copy of the line of the same length in which string contents are
blanked out. Checkers that look for code (brackets, operators, identifiers)
read the masked line so that text inside strings never produces diagnostics.

Only a line that opens with ``--`` is a comment; a ``--`` later in the line
is ordinary code.
"""

import re
from dataclasses import dataclass
from typing import Optional

_LINE_BREAK_RE = re.compile(r"\r?\n")

COMMENT = "--"
# Comment markers from other languages; only "--" is valid in Orion.
FOREIGN_COMMENT_MARKERS = ("#", "//", ";", "%")

QUOTES = ('"', "'")


@dataclass(frozen=True)
class ScannedLine:
    masked: str
    unclosed_quote: Optional[str] = None
    unclosed_column: int = -1


def split_lines(text: str) -> list[str]:
    """Split document text into lines, accepting LF and CRLF."""
    return _LINE_BREAK_RE.split(text)


def is_comment_line(line: str) -> bool:
    return line.lstrip().startswith(COMMENT)


def has_comment_marker(line: str) -> bool:
    """True if the line opens with any comment marker, valid or not."""
    stripped = line.lstrip()
    return stripped.startswith(COMMENT) or stripped.startswith(FOREIGN_COMMENT_MARKERS)


def scan_line(line: str) -> ScannedLine:
    out: list[str] = []
    quote: Optional[str] = None
    quote_col = -1
    escaped = False
    for i, ch in enumerate(line):
        if quote is not None:
            if escaped:
                escaped = False
                out.append(" ")
            elif ch == "\\":
                escaped = True
                out.append(" ")
            elif ch == quote:
                quote = None
                out.append(ch)
            else:
                out.append(" ")
        elif ch in QUOTES:
            quote = ch
            quote_col = i
            out.append(ch)
        else:
            out.append(ch)

    masked = "".join(out)
    if quote is not None:
        return ScannedLine(masked, quote, quote_col)
    return ScannedLine(masked)
