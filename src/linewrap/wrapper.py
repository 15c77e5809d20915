"""Wrapper: reflows a token stream into lines of bounded width."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum

from linewrap.classify import ZERO_WIDTH_NO_BREAK_SPACE
from linewrap.errors import ConfigError, LexError
from linewrap.lexer import Lexer
from linewrap.tokens import Category, Token

MAX_COLUMNS = 80  # default line width
TAB_WIDTH = 8  # default tab width
LINE_BREAKS = ("\n", "\r\n")

# Written before every inserted break in unwrappable mode.
UNWRAP_MARKER = ZERO_WIDTH_NO_BREAK_SPACE


class CommentKind(Enum):
    NONE = "none"
    LINE = "line"
    BLOCK = "block"


@dataclass(frozen=True, slots=True)
class CommentStyle:
    """How wrapped output is framed as a source-code comment."""

    kind: CommentKind = CommentKind.NONE
    prefix: str = ""  # LINE: written at the start of every output line
    begin: str = ""  # BLOCK: written before the content
    end: str = ""  # BLOCK: written after the content

    @classmethod
    def none(cls) -> CommentStyle:
        return cls()

    @classmethod
    def line(cls, prefix: str) -> CommentStyle:
        return cls(CommentKind.LINE, prefix=prefix)

    @classmethod
    def block(cls, begin: str, end: str) -> CommentStyle:
        return cls(CommentKind.BLOCK, begin=begin, end=end)

    @classmethod
    def cpp(cls) -> CommentStyle:
        return cls.line("// ")

    @classmethod
    def shell(cls) -> CommentStyle:
        return cls.line("# ")

    @classmethod
    def c(cls) -> CommentStyle:
        # begin and end each sit on a line of their own
        return cls.block("/*\n", "*/\n")

    @classmethod
    def parse(cls, name: str) -> CommentStyle:
        """Return the preset named by name (case-insensitive)."""
        key = name.strip().lower()
        if key in ("", "none"):
            return cls.none()
        if key == "c":
            return cls.c()
        if key in ("cpp", "c++"):
            return cls.cpp()
        if key in ("shell", "perl"):
            return cls.shell()
        raise ConfigError(f"unknown comment style '{name}' (expected none, c, cpp, or shell)")

    def __str__(self) -> str:
        if self.kind is CommentKind.LINE:
            return f"line comments ({self.prefix.strip()})"
        if self.kind is CommentKind.BLOCK:
            return f"block comments ({self.begin.strip()} {self.end.strip()})"
        return "none"


@dataclass(frozen=True, slots=True)
class WrapConfig:
    """Immutable wrap settings; use dataclasses.replace() to derive variants."""

    max_columns: int = MAX_COLUMNS
    tab_width: int = TAB_WIDTH
    indent_text: str = ""
    comment_style: CommentStyle = CommentStyle()
    unwrappable: bool = False
    line_break: str = "\n"

    def validate(self) -> None:
        """Raise ConfigError if any setting is unusable."""
        if isinstance(self.max_columns, bool) or not isinstance(self.max_columns, int):
            raise ConfigError(f"max_columns must be an integer, got {self.max_columns!r}")
        if self.max_columns <= 0:
            raise ConfigError(f"max_columns must be greater than 0, got {self.max_columns}")
        if isinstance(self.tab_width, bool) or not isinstance(self.tab_width, int):
            raise ConfigError(f"tab_width must be an integer, got {self.tab_width!r}")
        if self.tab_width < 0:
            raise ConfigError(f"tab_width must not be negative, got {self.tab_width}")
        if self.line_break not in LINE_BREAKS:
            raise ConfigError(f"line_break must be '\\n' or '\\r\\n', got {self.line_break!r}")
        if "\n" in self.indent_text or "\r" in self.indent_text:
            raise ConfigError("indent_text must not contain line breaks")
        if self.comment_style.kind is CommentKind.LINE:
            prefix = self.comment_style.prefix
            if not prefix:
                raise ConfigError("line comment prefix must not be empty")
            if "\n" in prefix or "\r" in prefix:
                raise ConfigError("line comment prefix must not contain line breaks")
        if self.unwrappable and self.comment_style.kind is not CommentKind.NONE:
            raise ConfigError(
                f"unwrappable output cannot be framed as a comment ({self.comment_style})"
            )


def display_width(text: str, tab_width: int) -> int:
    """Width of text in columns: one per code point, tab_width per tab."""
    return sum(tab_width if ch == "\t" else 1 for ch in text)


class Wrapper:
    """Wrap text to a WrapConfig.

    The configuration is validated once, up front.  Per-call state is reset at
    the start of every :meth:`render`; a Wrapper must not be shared between
    threads.
    """

    def __init__(self, config: WrapConfig | None = None) -> None:
        self.config = config if config is not None else WrapConfig()
        self.config.validate()
        self._indent_width = display_width(self.config.indent_text, self.config.tab_width)
        style = self.config.comment_style
        self._prefix_width = display_width(style.prefix, self.config.tab_width)
        self._reset()

    def _reset(self) -> None:
        self._parts: list[str] = []
        self._column = 0
        self._prior: Token | None = None  # last token written on the current line
        self._line_tokens = 0  # tokens written on the current line

    def render(self, text: str | bytes) -> str:
        """Return text wrapped according to the configuration.

        Raises LexError if text is not valid UTF-8 / contains lone surrogates;
        the output produced up to that point is attached as ``exc.partial``.
        """
        if not text:
            return ""
        self._reset()
        cfg = self.config

        self._comment_begin()

        lexer = Lexer(text)
        after_newline = False
        for tok in lexer:
            cat = tok.category
            if cat is Category.EOF:
                break
            if cat is Category.ERROR:
                exc = LexError(tok.text, tok.offset, lexer.source)
                exc.partial = "".join(self._parts)
                raise exc
            if cat is Category.CARRIAGE_RETURN:
                continue
            if cat is Category.NEWLINE:
                self._break(inserted=False)
                after_newline = True
                continue
            if cat is Category.SPACE and after_newline and not cfg.unwrappable:
                after_newline = False
                continue
            after_newline = False

            width = cfg.tab_width if cat is Category.TAB else tok.length
            # A token that fills the line to the edge also forces a break.
            if self._line_tokens and self._column + width >= cfg.max_columns:
                self._break(inserted=True)
                if cat in (Category.SPACE, Category.TAB) and not cfg.unwrappable:
                    continue
            self._write(tok, width)

        self._comment_end()
        return "".join(self._parts)

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _write(self, tok: Token, width: int) -> None:
        self._parts.append(tok.text)
        self._column += width
        self._prior = tok
        self._line_tokens += 1

    def _break(self, inserted: bool) -> None:
        """End the current line and start the next one."""
        cfg = self.config
        self._retract_space()
        self._clean_blank_line()

        if inserted and cfg.unwrappable:
            self._parts.append(UNWRAP_MARKER)
        self._parts.append(cfg.line_break)
        self._column = 0
        self._prior = None
        self._line_tokens = 0

        if cfg.comment_style.kind is CommentKind.LINE:
            self._parts.append(cfg.comment_style.prefix)
            self._column = self._prefix_width
        elif cfg.indent_text and not cfg.unwrappable:
            self._parts.append(cfg.indent_text)
            self._column = self._indent_width

    def _retract_space(self) -> None:
        """Drop a space run written last on the current line."""
        if (
            not self.config.unwrappable
            and self._prior is not None
            and self._prior.category is Category.SPACE
        ):
            self._parts.pop()
            self._line_tokens -= 1
            self._prior = None

    def _clean_blank_line(self) -> None:
        """Strip trailing whitespace from a line holding only a prefix or indent.

        A blank line comment becomes "//" rather than "// ", and a blank line
        keeps no indentation.
        """
        if self._line_tokens or not self._parts:
            return
        style = self.config.comment_style
        if style.kind is CommentKind.LINE:
            if self._parts[-1] == style.prefix:
                self._parts[-1] = style.prefix.rstrip()
        elif self.config.indent_text and self._parts[-1] == self.config.indent_text:
            self._parts.pop()

    def _comment_begin(self) -> None:
        style = self.config.comment_style
        if style.kind is CommentKind.LINE:
            self._parts.append(style.prefix)
            self._column = self._prefix_width
        elif style.kind is CommentKind.BLOCK and style.begin:
            self._parts.append(style.begin)
            last_line = style.begin.rsplit("\n", 1)[-1]
            self._column = display_width(last_line, self.config.tab_width)

    def _comment_end(self) -> None:
        style = self.config.comment_style
        if style.kind is CommentKind.BLOCK:
            self._retract_space()
            if self._line_tokens:
                self._parts.append(self.config.line_break)
            else:
                self._clean_blank_line()
            self._parts.append(style.end)
        else:
            self._clean_blank_line()


def render(text: str | bytes, config: WrapConfig | None = None, **options: object) -> str:
    """Wrap text; keyword options override fields of config.

    >>> render("Hello World", max_columns=20)
    'Hello World'
    """
    if options:
        config = dataclasses.replace(config if config is not None else WrapConfig(), **options)
    return Wrapper(config).render(text)
