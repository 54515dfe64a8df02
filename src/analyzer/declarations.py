"""Function and variable declaration recognition; builds the symbol table."""

import re
from dataclasses import replace
from typing import Optional

from .core import (
    DECLARATION_KEYWORDS,
    RESERVED_WORDS,
    DuplicateDeclaration,
    FunctionSymbol,
    Parameter,
    VariableSymbol,
)
from .lines import has_comment_marker

FUNCTION_RE = re.compile(r"^fn\s+(\w+)\s*\(([^)]*)\)(?:\s*->\s*(\w+))?")
VARIABLE_RE = re.compile(r"^(let|var|const)\s+(\w+)(?:\s*:\s*(\w+))?\s*=(?!=)(.*)$")
ASSIGNMENT_RE = re.compile(r"^([A-Za-z_]\w*)\s*=(?!=)(.*)$")
_PARAM_RE = re.compile(r"^(\w+)(?:\s*:\s*(\w+))?$")

_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d+$")
_CALL_RE = re.compile(r"^(\w+)\s*\(")
_NAME_RE = re.compile(r"^\w+$")


def _is_parameter(symbol) -> bool:
    return isinstance(symbol, VariableSymbol) and symbol.parameter_of is not None


def parse_params(text: str) -> tuple[Parameter, ...]:
    params = []
    for raw in text.split(","):
        m = _PARAM_RE.match(raw.strip())
        if m:
            params.append(Parameter(m.group(1), m.group(2)))
    return tuple(params)


class DeclarationsMixin:

    def _collect_declarations(self):
        for line_no, line in enumerate(self.lines):
            if not line.strip() or has_comment_marker(line):
                continue
            masked = self.scanned[line_no].masked
            indent = len(masked) - len(masked.lstrip())
            code = masked.strip()

            m = FUNCTION_RE.match(code)
            if m:
                self._declare_function(m, line_no, indent)
                continue

            m = VARIABLE_RE.match(code)
            if m:
                self._declare_variable(m, line_no, indent)
                continue

            m = ASSIGNMENT_RE.match(code)
            if m and m.group(1) not in RESERVED_WORDS | DECLARATION_KEYWORDS:
                self._assign(m, line_no, indent)

    def _declare_function(self, m: re.Match, line_no: int, indent: int):
        name = m.group(1)
        params = tuple(
            replace(param, column=indent + offset)
            for offset, param in self._param_columns(m, parse_params(m.group(2)))
        )
        # A repeated function declaration replaces the earlier one.
        self.symbols[name] = FunctionSymbol(
            name=name,
            params=params,
            return_type=m.group(3),
            line=line_no,
            column=indent + m.start(1),
        )
        # Parameters share the flat table; the first declaration of a name wins.
        for param in params:
            if param.name in self.symbols:
                continue
            self.symbols[param.name] = VariableSymbol(
                name=param.name,
                type=param.type,
                keyword=None,
                mutable=True,
                line=line_no,
                column=param.column,
                used=True,
                parameter_of=name,
            )

    def _param_columns(self, m: re.Match, params: tuple[Parameter, ...]):
        """Pair each parameter with its column inside the matched header."""
        text = m.group(2)
        base = m.start(2)
        pos = 0
        for param in params:
            found = re.search(rf"\b{re.escape(param.name)}\b", text[pos:])
            col = pos + found.start() if found else pos
            pos = col + len(param.name)
            yield base + col, param

    def _declare_variable(self, m: re.Match, line_no: int, indent: int):
        keyword, name, declared = m.group(1), m.group(2), m.group(3)
        column = indent + m.start(2)
        existing = self.symbols.get(name)
        # A parameter is not a let/var/const declaration; a top-level
        # variable of the same name takes over the entry.
        if existing is not None and not _is_parameter(existing):
            self.duplicates.append(DuplicateDeclaration(name, line_no, column))
            return
        self.symbols[name] = VariableSymbol(
            name=name,
            type=declared or self._infer_type(m.group(4)),
            keyword=keyword,
            mutable=keyword != "const",
            line=line_no,
            column=column,
        )

    def _assign(self, m: re.Match, line_no: int, indent: int):
        name = m.group(1)
        existing = self.symbols.get(name)
        if existing is not None:
            if isinstance(existing, VariableSymbol):
                existing.used = True
            return
        self.symbols[name] = VariableSymbol(
            name=name,
            type=self._infer_type(m.group(2)),
            keyword=None,
            mutable=True,
            line=line_no,
            column=indent + m.start(1),
            implicit=True,
        )

    def _infer_type(self, expr: str) -> Optional[str]:
        expr = expr.strip()
        if not expr:
            return None
        if _INT_RE.match(expr):
            return "int"
        if _FLOAT_RE.match(expr):
            return "float"
        if expr[0] in ('"', "'"):
            return "string"
        if expr in ("true", "false"):
            return "bool"
        if expr[0] == "[":
            return "list"
        if expr[0] == "{":
            return "map"
        m = _CALL_RE.match(expr)
        if m:
            target = self.symbols.get(m.group(1))
            if isinstance(target, FunctionSymbol):
                return target.return_type
            return None
        if _NAME_RE.match(expr):
            target = self.symbols.get(expr)
            if isinstance(target, VariableSymbol):
                return target.type
        return None
