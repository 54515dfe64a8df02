"""Line-local structural and keyword predicates.

Each predicate is independent; several may fire on the same line. They are
evaluated in a fixed order so the diagnostic list is stable for a given
input:

    invalid-comment, incomplete-if/while, incomplete-function,
    incomplete-variable, incomplete-assignment, unnamed-function,
    incomplete-operator, multiple-assignment, invalid-syntax
"""

import re
from typing import Optional

from .core import DiagnosticCode, TextFix
from .lines import is_comment_line

_FOREIGN_COMMENT_RE = re.compile(r"^(#|//|;|%)")
_FOREIGN_COMMENT_PREFIX_RE = re.compile(r"^[#/;%]+\s*")
_INCOMPLETE_CONTROL_RE = re.compile(r"^(if|while)\s*(\{.*)?$")
_INCOMPLETE_FUNCTION_RE = re.compile(r"^fn\s+(\w+)?\s*\([^)]*$")
_INCOMPLETE_VARIABLE_RE = re.compile(r"^(let|var|const)\s*$")
_INCOMPLETE_ASSIGNMENT_RE = re.compile(r"^\w+\s*=\s*$")
_UNNAMED_FUNCTION_RE = re.compile(r"^fn\s*\(")
_TRAILING_OPERATOR_RE = re.compile(r"[+\-*/=<>!&|]+$")
# "=" that is not part of ==, !=, <=, >= or =>
_LONE_EQUALS_RE = re.compile(r"(?<![=!<>])=(?![=>])")
_COUT_RE = re.compile(r"\bcout\s*<<(.*?);?\s*$")

_COMMENT_HINT = "Use -- for comments"
_OUTPUT_HINT = "Use show() in Orion"

# (token, pattern, suggestion, replacement for a show() rewrite)
_BANNED_TOKENS = (
    ("#", re.compile(r"#"), _COMMENT_HINT, None),
    ("//", re.compile(r"//"), _COMMENT_HINT, None),
    (";", re.compile(r";"), _COMMENT_HINT, None),
    ("%", re.compile(r"%"), _COMMENT_HINT, None),
    ("print(", re.compile(r"\bprint\("), _OUTPUT_HINT, "show("),
    ("console.log", re.compile(r"\bconsole\.log\b"), _OUTPUT_HINT, "show"),
    ("cout", re.compile(r"\bcout\b"), _OUTPUT_HINT, None),
    ("printf", re.compile(r"\bprintf\b"), _OUTPUT_HINT, "show"),
)


class StructureMixin:

    def _check_structure(self):
        for line_no, line in enumerate(self.lines):
            if not line.strip() or is_comment_line(line):
                continue
            masked = self.scanned[line_no].masked
            indent = len(line) - len(line.lstrip())
            code = masked.strip()
            end = len(line.rstrip())

            self._check_comment_marker(line, line_no, indent, end)
            self._check_control(code, line_no, indent, end)
            self._check_declarations(code, line_no, indent, end)
            self._check_operators(masked, code, line_no, indent, end)
            self._check_banned_tokens(line, masked, line_no)

    def _check_comment_marker(self, line: str, line_no: int, indent: int, end: int):
        trimmed = line.strip()
        m = _FOREIGN_COMMENT_RE.match(trimmed)
        if not m:
            return
        body = _FOREIGN_COMMENT_PREFIX_RE.sub("", trimmed)
        self._error(
            DiagnosticCode.INVALID_COMMENT,
            f"Only '--' comments are allowed in Orion. Use: -- {body}",
            line_no, indent, end, subject=m.group(1),
        )

    def _check_control(self, code: str, line_no: int, indent: int, end: int):
        m = _INCOMPLETE_CONTROL_RE.match(code)
        if not m:
            return
        if m.group(1) == "if":
            self._error(DiagnosticCode.INCOMPLETE_IF,
                        "Incomplete if statement: missing condition",
                        line_no, indent, end, subject="if")
        else:
            self._error(DiagnosticCode.INCOMPLETE_WHILE,
                        "Incomplete while loop: missing condition",
                        line_no, indent, end, subject="while")

    def _check_declarations(self, code: str, line_no: int, indent: int, end: int):
        if _INCOMPLETE_FUNCTION_RE.match(code):
            self._error(DiagnosticCode.INCOMPLETE_FUNCTION,
                        "Incomplete function declaration: missing closing parenthesis",
                        line_no, indent, end)
        if _INCOMPLETE_VARIABLE_RE.match(code):
            self._error(DiagnosticCode.INCOMPLETE_VARIABLE,
                        "Incomplete variable declaration: missing variable name",
                        line_no, indent, end)
        if _INCOMPLETE_ASSIGNMENT_RE.match(code):
            self._error(DiagnosticCode.INCOMPLETE_ASSIGNMENT,
                        "Incomplete assignment: missing value",
                        line_no, indent, end)
        if _UNNAMED_FUNCTION_RE.match(code):
            self._error(DiagnosticCode.UNNAMED_FUNCTION,
                        "Unnamed function: functions must have an identifier",
                        line_no, indent, end)

    def _check_operators(self, masked: str, code: str, line_no: int,
                         indent: int, end: int):
        m = _TRAILING_OPERATOR_RE.search(code)
        if m:
            op_end = len(masked.rstrip())
            self._error(DiagnosticCode.INCOMPLETE_OPERATOR,
                        "Incomplete operator: missing operand",
                        line_no, op_end - len(m.group(0)), op_end,
                        subject=m.group(0))
        if len(_LONE_EQUALS_RE.findall(code)) > 1:
            self._error(DiagnosticCode.MULTIPLE_ASSIGNMENT,
                        "Multiple assignments on one line are not allowed",
                        line_no, indent, end)

    def _check_banned_tokens(self, line: str, masked: str, line_no: int):
        for token, pattern, hint, replacement in _BANNED_TOKENS:
            m = pattern.search(masked)
            if not m:
                continue
            col = m.start()
            fix = None
            if replacement is not None:
                fix = TextFix(line_no, col, line_no, m.end(), replacement)
            elif token == "cout":
                fix = _cout_fix(line, masked, line_no)
            self._warning(
                DiagnosticCode.INVALID_SYNTAX,
                f'"{token}" is not valid in Orion. {hint}',
                line_no, col, col + len(token), subject=token, fix=fix,
            )


def _cout_fix(line: str, masked: str, line_no: int) -> Optional[TextFix]:
    """Rewrite ``cout << a << b;`` as ``show(a, b)``."""
    m = _COUT_RE.search(masked)
    if not m:
        return None
    args = []
    start = m.start(1)
    for part in masked[start:m.end(1)].split("<<"):
        raw = line[start:start + len(part)].strip()
        start += len(part) + 2
        if raw:
            args.append(raw)
    if not args:
        return None
    end = len(masked.rstrip())
    return TextFix(line_no, m.start(), line_no, end, f"show({', '.join(args)})")
