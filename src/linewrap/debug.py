"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from linewrap.classify import describe
from linewrap.tokens import Category, Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*: offset, category, length, text."""
    file.write("Tokens\n")
    for tok in tokens:
        file.write(f"  {tok.offset:>6} {tok.category.name:<15} {tok.length:>4}  {_label(tok)}\n")


def _label(tok: Token) -> str:
    if tok.category is Category.EOF:
        return "EOF"
    if tok.category is Category.ERROR:
        return f"error: {tok.text}"
    if tok.category is Category.TEXT:
        return repr(tok.text)
    names = sorted({describe(ch) for ch in tok.text})
    return f"{tok.text!r} ({', '.join(names)})"
