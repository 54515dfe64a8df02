"""Quick-fix code actions for Orion.

The client sends the diagnostics under the cursor; each is matched against
the stored snapshot by code and range, and the analyzer's proposals for the
matches are wrapped as LSP code actions. Client diagnostics that do not
match the snapshot (stale, or from another source) are ignored.
"""

from __future__ import annotations

from lsprotocol import types as lsp

from src.analyzer import propose_fixes
from src.analyzer.code_actions import ProposedEdit
from src.devex.lsp.diagnostics import AnalysisResult, to_lsp_diagnostic


def _diagnostic_key(code, rng: lsp.Range) -> tuple:
    return (
        str(code),
        rng.start.line, rng.start.character,
        rng.end.line, rng.end.character,
    )


def _to_code_action(uri: str, proposal: ProposedEdit) -> lsp.CodeAction:
    fix = proposal.fix
    edit = lsp.TextEdit(
        range=lsp.Range(
            start=lsp.Position(line=fix.start_line, character=fix.start_character),
            end=lsp.Position(line=fix.end_line, character=fix.end_character),
        ),
        new_text=fix.new_text,
    )
    return lsp.CodeAction(
        title=proposal.title,
        kind=lsp.CodeActionKind.QuickFix,
        diagnostics=[to_lsp_diagnostic(proposal.diagnostic)],
        edit=lsp.WorkspaceEdit(changes={uri: [edit]}),
    )


def get_code_actions(
    result: AnalysisResult, selected: list[lsp.Diagnostic]
) -> list[lsp.CodeAction]:
    """Propose at most one edit per selected, actionable diagnostic."""
    wanted = {
        _diagnostic_key(d.code, d.range) for d in selected if d.code is not None
    }
    if not wanted:
        return []

    matched = []
    for diag in result.diagnostics:
        lsp_diag = to_lsp_diagnostic(diag)
        if _diagnostic_key(lsp_diag.code, lsp_diag.range) in wanted:
            matched.append(diag)

    return [_to_code_action(result.uri, p) for p in propose_fixes(matched)]
