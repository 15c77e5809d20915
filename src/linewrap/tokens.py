"""Token categories and the token data structure."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Category(Enum):
    # Content
    TEXT = auto()  # anything that is not one of the following
    SPACE = auto()  # run of breaking whitespace (see classify.SPACE_CHARS)
    HYPHEN = auto()  # run of breaking dashes (see classify.HYPHEN_CHARS)

    # Structural (single code point per token)
    TAB = auto()  # \t
    NEWLINE = auto()  # \n
    CARRIAGE_RETURN = auto()  # \r

    # U+FEFF, non-breaking; also the unwrap marker
    ZERO_WIDTH_NO_BREAK_SPACE = auto()

    EOF = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A classified run of input.

    ``offset`` is the code point index of the run in the original input and
    ``length`` the number of code points it spans.  For an ERROR token,
    ``text`` is the diagnostic message and ``length`` is 0.
    """

    category: Category
    offset: int
    length: int
    text: str

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __str__(self) -> str:
        if self.category is Category.EOF:
            return "EOF"
        return self.text
