"""Wrap text to a column width, breaking only at spaces and dashes."""

from __future__ import annotations

__version__ = "0.1.0"

from linewrap.classify import classify, is_hyphen_class, is_space_class  # noqa: E402
from linewrap.errors import ConfigError, LexError  # noqa: E402
from linewrap.lexer import Lexer, tokenize  # noqa: E402
from linewrap.tokens import Category, Token  # noqa: E402
from linewrap.unwrap import unwrap  # noqa: E402
from linewrap.wrapper import CommentStyle, WrapConfig, Wrapper, render  # noqa: E402

__all__ = [
    "Category",
    "CommentStyle",
    "ConfigError",
    "LexError",
    "Lexer",
    "Token",
    "WrapConfig",
    "Wrapper",
    "classify",
    "is_hyphen_class",
    "is_space_class",
    "render",
    "tokenize",
    "unwrap",
]
