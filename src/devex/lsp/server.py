#!/usr/bin/env python3
"""Orion Language Server.

Provides diagnostics, document symbols, hover, go-to-definition, code
completion and quick fixes for Orion files by running the line analyzer on
every change.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to sys.path so the server also runs as a plain script
PROJECT_ROOT = str(Path(__file__).resolve().parent.parent.parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from lsprotocol import types as lsp  # noqa: E402
from pygls.lsp.server import LanguageServer  # noqa: E402

from src.devex.lsp.builtins import DEFAULT_DOCS_PATH, load_docs_table  # noqa: E402
from src.devex.lsp.code_actions import get_code_actions  # noqa: E402
from src.devex.lsp.completion import get_completions  # noqa: E402
from src.devex.lsp.definition import get_definition  # noqa: E402
from src.devex.lsp.diagnostics import AnalysisResult, DocumentStore  # noqa: E402
from src.devex.lsp.hover import get_hover_info  # noqa: E402
from src.devex.lsp.symbols import get_document_symbols  # noqa: E402

logger = logging.getLogger("orion-lsp")

server = LanguageServer(
    "orion-lsp", "0.1.0",
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)

# uri -> latest AnalysisResult; keyword table is installed by main()
store = DocumentStore()


def _validate_document(uri: str, source: str) -> AnalysisResult:
    """Run the analyzer and publish diagnostics."""
    result = store.update(uri, source)
    server.text_document_publish_diagnostics(
        lsp.PublishDiagnosticsParams(uri=uri, diagnostics=result.lsp_diagnostics)
    )
    return result


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams):
    logger.info("opened %s", params.text_document.uri)
    _validate_document(
        params.text_document.uri,
        params.text_document.text,
    )


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams):
    doc = server.workspace.get_text_document(params.text_document.uri)
    _validate_document(params.text_document.uri, doc.source)


@server.feature(lsp.TEXT_DOCUMENT_DID_SAVE)
def did_save(params: lsp.DidSaveTextDocumentParams):
    doc = server.workspace.get_text_document(params.text_document.uri)
    _validate_document(params.text_document.uri, doc.source)


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams):
    uri = params.text_document.uri
    store.close(uri)
    logger.info("closed %s", uri)
    server.text_document_publish_diagnostics(
        lsp.PublishDiagnosticsParams(uri=uri, diagnostics=[])
    )


@server.feature(lsp.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbol(params: lsp.DocumentSymbolParams):
    result = store.get(params.text_document.uri)
    if result:
        return get_document_symbols(result)
    return []


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams):
    result = store.get(params.text_document.uri)
    if result:
        return get_hover_info(result, params.position)
    return None


@server.feature(lsp.TEXT_DOCUMENT_DEFINITION)
def goto_definition(params: lsp.DefinitionParams):
    result = store.get(params.text_document.uri)
    if result:
        return get_definition(result, params.position)
    return None


@server.feature(
    lsp.TEXT_DOCUMENT_COMPLETION,
    lsp.CompletionOptions(trigger_characters=[".", "(", " ", "\n"]),
)
def completion(params: lsp.CompletionParams):
    uri = params.text_document.uri
    result = store.get(uri)

    # A document we have not seen yet: analyze it once so symbols exist
    if result is None:
        doc = server.workspace.get_text_document(uri)
        if doc is None:
            return []
        result = store.update(uri, doc.source)

    return get_completions(result, params.position)


@server.feature(
    lsp.TEXT_DOCUMENT_CODE_ACTION,
    lsp.CodeActionOptions(code_action_kinds=[lsp.CodeActionKind.QuickFix]),
)
def code_action(params: lsp.CodeActionParams):
    result = store.get(params.text_document.uri)
    if result is None:
        return []
    return get_code_actions(result, params.context.diagnostics)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="orion-lsp",
        description="Orion language server",
    )
    parser.add_argument("--tcp", action="store_true",
                        help="Serve over TCP instead of stdio")
    parser.add_argument("--host", default="127.0.0.1",
                        help="TCP host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=2087,
                        help="TCP port (default: 2087)")
    parser.add_argument("--docs", type=Path, default=DEFAULT_DOCS_PATH,
                        help="Keyword documentation table (JSON)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: INFO)")
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    # stdout carries the protocol; logs go to stderr
    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr)

    store.keywords = load_docs_table(args.docs)

    if args.tcp:
        logger.info("listening on %s:%d", args.host, args.port)
        server.start_tcp(args.host, args.port)
    else:
        server.start_io()


if __name__ == "__main__":
    main()
