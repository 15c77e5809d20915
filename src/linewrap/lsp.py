"""Minimal LSP server for linewrap: long-line diagnostics and reflow formatting."""

from __future__ import annotations

import dataclasses

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_FORMATTING,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentFormattingParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
    TextEdit,
)
from pygls.lsp.server import LanguageServer

from linewrap import __version__
from linewrap.errors import LexError
from linewrap.lexer import Lexer
from linewrap.tokens import Category
from linewrap.wrapper import WrapConfig, Wrapper, display_width


class LinewrapServer(LanguageServer):
    """LanguageServer carrying the WrapConfig used for checks and formatting."""

    def __init__(self, *args, wrap_config: WrapConfig | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.wrap_config = wrap_config if wrap_config is not None else WrapConfig()


server = LinewrapServer(
    "linewrap-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _utf16_len(text: str) -> int:
    """Length of text in UTF-16 code units, the default LSP position encoding."""
    return sum(2 if ord(ch) > 0xFFFF else 1 for ch in text)


def _lex_error(source: str) -> LexError | None:
    """Return the first encoding error in source, if any."""
    lexer = Lexer(source)
    for tok in lexer:
        if tok.category is Category.ERROR:
            return LexError(tok.text, tok.offset, lexer.source)
    return None


def _validate(ls: LinewrapServer, uri: str) -> None:
    """Check line widths and encoding, then publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    config = ls.wrap_config
    diagnostics: list[Diagnostic] = []

    lines = [line.rstrip("\r") for line in source.split("\n")]
    for idx, line in enumerate(lines):
        width = display_width(line, config.tab_width)
        if width >= config.max_columns:
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=idx, character=0),
                        end=Position(line=idx, character=_utf16_len(line)),
                    ),
                    message=f"line is {width} columns wide (limit {config.max_columns - 1})",
                    severity=DiagnosticSeverity.Warning,
                    source="linewrap",
                )
            )

    exc = _lex_error(source)
    if exc is not None:
        err_line = exc.line - 1
        col = _utf16_len(lines[err_line][: exc.column - 1])
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=err_line, character=col),
                    end=Position(line=err_line, character=col + 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="linewrap",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


def _format(ls: LinewrapServer, params: DocumentFormattingParams) -> list[TextEdit] | None:
    """Reflow the whole document; None when there is nothing to change."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    source = doc.source
    config = dataclasses.replace(ls.wrap_config, tab_width=params.options.tab_size)

    try:
        wrapped = Wrapper(config).render(source)
    except LexError:
        # Reported by _validate; a malformed document is left untouched.
        return None

    if wrapped == source:
        return None

    end_line = source.count("\n") + 1
    return [
        TextEdit(
            range=Range(
                start=Position(line=0, character=0),
                end=Position(line=end_line, character=0),
            ),
            new_text=wrapped,
        )
    ]


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LinewrapServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LinewrapServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_FORMATTING)
def formatting(ls: LinewrapServer, params: DocumentFormattingParams) -> list[TextEdit] | None:
    return _format(ls, params)


def main() -> None:
    server.start_io()
