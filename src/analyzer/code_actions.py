"""Quick-fix proposals keyed by diagnostic code.

Pure: reads diagnostics produced by the analyzer and never inspects the
source text. A diagnostic without a usable fix yields no proposal.
"""

from dataclasses import dataclass
from typing import Iterable

from .core import Diagnostic, DiagnosticCode, TextFix

_TITLES = {
    DiagnosticCode.DUPLICATE_VAR: "Turn into a re-assignment of '{subject}'",
    DiagnosticCode.UNUSED_VAR: "Remove unused variable '{subject}'",
    DiagnosticCode.INVALID_SYNTAX: "Replace '{subject}' with show()",
}


@dataclass(frozen=True)
class ProposedEdit:
    diagnostic: Diagnostic
    title: str
    fix: TextFix


def propose_fix(diag: Diagnostic):
    title = _TITLES.get(diag.code)
    if title is None or diag.fix is None or not diag.subject:
        return None
    return ProposedEdit(diag, title.format(subject=diag.subject), diag.fix)


def propose_fixes(diagnostics: Iterable[Diagnostic]) -> list[ProposedEdit]:
    """At most one proposal per actionable diagnostic, in input order."""
    proposals = []
    for diag in diagnostics:
        proposal = propose_fix(diag)
        if proposal is not None:
            proposals.append(proposal)
    return proposals
