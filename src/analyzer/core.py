"""Analyzer core: data structures and the shared reporting base."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(Enum):
    SYNTAX = "syntax"
    SEMANTIC = "semantic"


class DiagnosticCode(Enum):
    # Brackets and strings
    UNMATCHED_BRACKET = "unmatched-bracket"
    MISMATCHED_BRACKET = "mismatched-bracket"
    UNCLOSED_BRACKET = "unclosed-bracket"
    UNCLOSED_STRING = "unclosed-string"

    # Structure
    INVALID_COMMENT = "invalid-comment"
    INCOMPLETE_IF = "incomplete-if"
    INCOMPLETE_WHILE = "incomplete-while"
    INCOMPLETE_FUNCTION = "incomplete-function"
    INCOMPLETE_VARIABLE = "incomplete-variable"
    INCOMPLETE_ASSIGNMENT = "incomplete-assignment"
    UNNAMED_FUNCTION = "unnamed-function"
    INCOMPLETE_OPERATOR = "incomplete-operator"
    MULTIPLE_ASSIGNMENT = "multiple-assignment"
    INVALID_SYNTAX = "invalid-syntax"

    # Usage
    UNDEFINED_VARIABLE = "undefined-variable"
    DUPLICATE_VAR = "duplicate-var"
    UNUSED_VAR = "unused-var"


@dataclass(frozen=True)
class TextFix:
    """A replacement of a (possibly multi-line) range with new text."""

    start_line: int
    start_character: int
    end_line: int
    end_character: int
    new_text: str


@dataclass(frozen=True)
class Diagnostic:
    """One problem found in the source. Ranges are 0-based and single-line."""

    code: DiagnosticCode
    severity: Severity
    message: str
    line: int
    start: int
    end: int
    category: Category
    subject: Optional[str] = None  # offending identifier or token
    fix: Optional[TextFix] = None


@dataclass(frozen=True)
class Parameter:
    name: str
    type: Optional[str] = None
    # Column in the declaring header; the line is the function's.
    column: int = field(default=-1, compare=False)


@dataclass(frozen=True)
class FunctionSymbol:
    name: str
    params: tuple[Parameter, ...]
    return_type: Optional[str]
    line: int
    column: int

    @property
    def signature(self) -> str:
        params = ", ".join(
            f"{p.name}: {p.type}" if p.type else p.name for p in self.params
        )
        sig = f"fn {self.name}({params})"
        if self.return_type:
            sig += f" -> {self.return_type}"
        return sig


@dataclass
class VariableSymbol:
    name: str
    type: Optional[str]
    keyword: Optional[str]  # "let" | "var" | "const" | None when implicit
    mutable: bool
    line: int
    column: int
    implicit: bool = False
    used: bool = False
    parameter_of: Optional[str] = None


Symbol = Union[FunctionSymbol, VariableSymbol]
SymbolTable = dict[str, Symbol]


@dataclass
class BracketStackEntry:
    char: str
    expected: str
    line: int
    column: int


@dataclass
class DuplicateDeclaration:
    """A let/var/const declaration of a name already in the table."""

    name: str
    line: int
    column: int


@dataclass
class AnalyzedDocument:
    diagnostics: list[Diagnostic]
    symbols: SymbolTable


# Words the scanner itself treats as syntax. Never reported as undefined.
RESERVED_WORDS = frozenset({"if", "else", "while", "for", "return", "true", "false"})
DECLARATION_KEYWORDS = frozenset({"let", "var", "const", "fn"})


class AnalyzerBase:
    def __init__(self, keywords=None):
        # Read-only keyword/documentation table; only its keys matter here.
        self.keywords = keywords if keywords is not None else {}
        self.lines: list[str] = []
        self.scanned = []
        self.diagnostics: list[Diagnostic] = []
        self.symbols: SymbolTable = {}
        self.duplicates: list[DuplicateDeclaration] = []

    def _reset(self, lines: list[str]):
        self.lines = lines
        self.scanned = []
        self.diagnostics = []
        self.symbols = {}
        self.duplicates = []

    def _error(self, code: DiagnosticCode, msg: str, line: int, start: int,
               end: int, category: Category = Category.SYNTAX, **extra):
        self.diagnostics.append(Diagnostic(
            code=code, severity=Severity.ERROR, message=msg, line=line,
            start=start, end=end, category=category, **extra,
        ))

    def _warning(self, code: DiagnosticCode, msg: str, line: int, start: int,
                 end: int, category: Category = Category.SYNTAX, **extra):
        self.diagnostics.append(Diagnostic(
            code=code, severity=Severity.WARNING, message=msg, line=line,
            start=start, end=end, category=category, **extra,
        ))

    def _line_fix(self, line: int, new_text: str) -> TextFix:
        """Replace the whole text of *line*, keeping its line break."""
        return TextFix(line, 0, line, len(self.lines[line]), new_text)

    def _delete_line_fix(self, line: int) -> TextFix:
        """Remove *line* together with one adjacent line break."""
        if line + 1 < len(self.lines):
            return TextFix(line, 0, line + 1, 0, "")
        if line > 0:
            return TextFix(line - 1, len(self.lines[line - 1]),
                           line, len(self.lines[line]), "")
        return TextFix(line, 0, line, len(self.lines[line]), "")
