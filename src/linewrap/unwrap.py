"""Remove the line breaks inserted by an unwrappable render."""

from __future__ import annotations

from linewrap.wrapper import UNWRAP_MARKER


def unwrap(text: str) -> str:
    """Return text with every marked break removed.

    A marked break is the marker (U+FEFF) followed by any carriage returns and
    then a line feed; the marker and the break are dropped together.  A marker
    that is not followed by a break is left in place.  Breaks that were
    already present in the wrapped source carry no marker and are kept.
    """
    parts: list[str] = []
    pos = 0
    while True:
        idx = text.find(UNWRAP_MARKER, pos)
        if idx < 0:
            parts.append(text[pos:])
            break
        parts.append(text[pos:idx])
        end = idx + 1
        while end < len(text) and text[end] == "\r":
            end += 1
        if end < len(text) and text[end] == "\n":
            pos = end + 1
        else:
            parts.append(UNWRAP_MARKER)
            pos = idx + 1
    return "".join(parts)
