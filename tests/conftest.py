"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from linewrap.lexer import tokenize
from linewrap.tokens import Category, Token
from linewrap.wrapper import WrapConfig, Wrapper


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str | bytes) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.category != Category.EOF]

    return _lex


@pytest.fixture
def wrap():
    """Return a helper that renders text with keyword WrapConfig overrides."""

    def _wrap(text: str | bytes, **options) -> str:
        return Wrapper(WrapConfig(**options)).render(text)

    return _wrap


def assert_categories(tokens: list[Token], expected: list[Category]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def find_tokens(tokens: list[Token], category: Category) -> list[Token]:
    """Return all tokens of the given category."""
    return [t for t in tokens if t.category == category]
