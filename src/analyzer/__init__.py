"""Orion source analyzer package."""

from .analyzer import Analyzer as Analyzer
from .code_actions import ProposedEdit as ProposedEdit, propose_fixes as propose_fixes
from .core import Diagnostic as Diagnostic, DiagnosticCode as DiagnosticCode
