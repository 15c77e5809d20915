"""linewrap lexer: splits input text into a stream of classified runs."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum, auto

from linewrap.classify import classify
from linewrap.tokens import Category, Token


class _State(Enum):
    SCAN_TEXT = auto()
    SCAN_SPACE_RUN = auto()
    SCAN_HYPHEN_RUN = auto()
    SCAN_TAB = auto()
    SCAN_NEWLINE = auto()
    SCAN_CARRIAGE_RETURN = auto()
    DONE = auto()
    ERROR = auto()


# State entered when SCAN_TEXT stops at a code point of the given category.
_BREAK_STATES = {
    Category.SPACE: _State.SCAN_SPACE_RUN,
    Category.HYPHEN: _State.SCAN_HYPHEN_RUN,
    Category.TAB: _State.SCAN_TAB,
    Category.NEWLINE: _State.SCAN_NEWLINE,
    Category.CARRIAGE_RETURN: _State.SCAN_CARRIAGE_RETURN,
}


def decode_utf8(data: bytes) -> tuple[str, str | None]:
    """Strictly decode data as UTF-8.

    Returns the decoded text and None, or, when data is malformed, the
    decodable prefix and a message naming the byte offset of the failure.
    """
    try:
        return data.decode("utf-8"), None
    except UnicodeDecodeError as exc:
        prefix = data[: exc.start].decode("utf-8")
        return prefix, f"invalid UTF-8 at byte {exc.start}: {exc.reason}"


class Lexer:
    """Pull tokens one at a time from str or UTF-8 bytes input.

    Each call to :meth:`next_token` returns exactly one token.  The stream
    ends with a zero-length EOF token, or with an ERROR token when the input
    is malformed; after that the terminal token is returned again on every
    call.  Offsets and lengths count code points.
    """

    def __init__(self, source: str | bytes) -> None:
        self._decode_error: str | None = None
        if isinstance(source, (bytes, bytearray)):
            source, self._decode_error = decode_utf8(bytes(source))
        self._source = source
        self._pos = 0
        self._start = 0
        self._state = _State.SCAN_TEXT
        self._terminal: Token | None = None

    @property
    def source(self) -> str:
        """The decoded input (only the valid prefix if decoding failed)."""
        return self._source

    def next_token(self) -> Token:
        """Advance the cursor and return the next token."""
        while self._terminal is None:
            if self._state == _State.SCAN_TEXT:
                tok = self._scan_text()
            elif self._state == _State.SCAN_SPACE_RUN:
                tok = self._scan_run(Category.SPACE)
            elif self._state == _State.SCAN_HYPHEN_RUN:
                tok = self._scan_run(Category.HYPHEN)
            elif self._state == _State.SCAN_TAB:
                tok = self._scan_one(Category.TAB)
            elif self._state == _State.SCAN_NEWLINE:
                tok = self._scan_one(Category.NEWLINE)
            elif self._state == _State.SCAN_CARRIAGE_RETURN:
                tok = self._scan_one(Category.CARRIAGE_RETURN)
            else:
                raise RuntimeError(f"internal error: lexer in state {self._state}")
            if tok is not None:
                return tok
        return self._terminal

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the EOF or ERROR token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.category in (Category.EOF, Category.ERROR):
                return

    # ------------------------------------------------------------------
    # Emit helpers
    # ------------------------------------------------------------------

    def _emit(self, category: Category) -> Token:
        length = self._pos - self._start
        tok = Token(category, self._start, length, self._source[self._start : self._pos])
        self._start = self._pos
        return tok

    def _fail(self, message: str) -> Token:
        self._state = _State.ERROR
        self._terminal = Token(Category.ERROR, self._pos, 0, message)
        return self._terminal

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def _scan_text(self) -> Token | None:
        """Consume text up to the next break candidate or the end of input."""
        src = self._source
        while self._pos < len(src):
            ch = src[self._pos]
            if "\ud800" <= ch <= "\udfff":
                if self._pos > self._start:
                    return self._emit(Category.TEXT)
                return self._fail(f"invalid code point U+{ord(ch):04X} (lone surrogate)")
            next_state = _BREAK_STATES.get(classify(ch))
            if next_state is not None:
                self._state = next_state
                if self._pos > self._start:
                    return self._emit(Category.TEXT)
                return None
            self._pos += 1

        if self._pos > self._start:
            return self._emit(Category.TEXT)
        if self._decode_error is not None:
            return self._fail(self._decode_error)
        self._state = _State.DONE
        self._terminal = self._emit(Category.EOF)
        return self._terminal

    def _scan_run(self, category: Category) -> Token:
        """Consume a maximal run of code points of one category."""
        src = self._source
        while self._pos < len(src) and classify(src[self._pos]) is category:
            self._pos += 1
        self._state = _State.SCAN_TEXT
        return self._emit(category)

    def _scan_one(self, category: Category) -> Token:
        """Consume exactly one code point; tabs and breaks never coalesce."""
        self._pos += 1
        self._state = _State.SCAN_TEXT
        return self._emit(category)


def tokenize(source: str | bytes) -> list[Token]:
    """Convenience function: tokenize source and return the full token list."""
    return list(Lexer(source))
