"""Error types with formatted source context."""

from __future__ import annotations


class LexError(Exception):
    """Raised when the input cannot be decoded, with offset and source context.

    ``offset`` is the code point index of the failure in ``source``, the
    decodable prefix of the input.  ``partial`` holds whatever output the
    wrapper produced before the failure; it is for diagnostics only.
    """

    def __init__(self, message: str, offset: int, source: str) -> None:
        self.message = message
        self.offset = offset
        self.source = source
        self.partial = ""
        super().__init__(self.format())

    @property
    def line(self) -> int:
        """1-based line of the failure."""
        return self.source.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        """1-based column (in code points) of the failure."""
        return self.offset - (self.source.rfind("\n", 0, self.offset) + 1) + 1

    def format(self, filename: str = "<input>") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.line - 1
        col = self.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Lone surrogates cannot be printed; show a replacement glyph instead
        source_line = source_line.encode("utf-8", "replace").decode("utf-8")

        pad = " " * (col - 1)
        line_num = str(self.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class ConfigError(Exception):
    """Raised on an invalid wrap configuration, before any input is read."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def format(self) -> str:
        return f"error: {self.message}"
