"""Line-break classification of code points.

The tables are a curated subset of the whitespace and dash characters, not a
UAX #14 implementation.  Breaks are allowed after a run of SPACE or HYPHEN
characters; everything unlisted is TEXT and never breaks.

Whitespace exceptions:
  U+200B ZERO WIDTH SPACE is a SPACE even though it is not generic whitespace.
  U+00A0 NO-BREAK SPACE and U+202F NARROW NO-BREAK SPACE are TEXT.
  U+FEFF ZERO WIDTH NO-BREAK SPACE has its own non-breaking category.

Dash exceptions:
  U+007E TILDE and U+00AD SOFT HYPHEN are HYPHENs.
  U+002D HYPHEN-MINUS breaks even in a numeric context ("1-2").
  U+2011, U+207B, U+208B, U+2212, U+301C, U+3030 never break.
  U+1806 MONGOLIAN TODO SOFT HYPHEN breaks before, which is unsupported.
  The presentation form, small and full width dashes are not yet supported.
"""

from __future__ import annotations

from linewrap.tokens import Category

TAB = "\t"
NEWLINE = "\n"
CARRIAGE_RETURN = "\r"
ZERO_WIDTH_NO_BREAK_SPACE = "\uFEFF"

SPACE_CHARS: dict[str, str] = {
    " ": "space",
    "\u1680": "ogham space mark",
    "\u180E": "mongolian vowel separator",
    "\u2000": "en quad",
    "\u2001": "em quad",
    "\u2002": "en space",
    "\u2003": "em space",
    "\u2004": "three-per-em space",
    "\u2005": "four-per-em space",
    "\u2006": "six-per-em space",
    "\u2007": "figure space",
    "\u2008": "punctuation space",
    "\u2009": "thin space",
    "\u200A": "hair space",
    "\u200B": "zero width space",
    "\u205F": "medium mathematical space",
    "\u3000": "ideographic space",
}

HYPHEN_CHARS: dict[str, str] = {
    "-": "hyphen-minus",
    "~": "tilde",
    "\u00AD": "soft hyphen",
    "\u058A": "armenian hyphen",
    "\u2010": "hyphen",
    "\u2012": "figure dash",
    "\u2013": "en dash",
    "\u2014": "em dash",  # may break before or after; only after is supported
    "\u2015": "horizontal bar",
    "\u2053": "swung dash",
    "\u2E3A": "two-em dash",
    "\u2E3B": "three-em dash",
}

# Whitespace that must not break a line.
NON_BREAKING_SPACES: dict[str, str] = {
    "\u00A0": "no-break space",
    "\u202F": "narrow no-break space",
    "\uFEFF": "zero width no-break space",
}

# Dashes deliberately left out of HYPHEN_CHARS.
EXCLUDED_HYPHENS: dict[str, str] = {
    "\u1806": "mongolian todo soft hyphen",
    "\u2011": "non-breaking hyphen",
    "\u207B": "superscript minus",
    "\u208B": "subscript minus",
    "\u2212": "minus sign",
    "\u301C": "wave dash",
    "\u3030": "wavy dash",
    "\uFE31": "presentation form for vertical em dash",
    "\uFE32": "presentation form for vertical en dash",
    "\uFE58": "small em dash",
    "\uFE63": "small hyphen-minus",
    "\uFF0D": "fullwidth hyphen-minus",
}

_TABLE: dict[str, Category] = {
    TAB: Category.TAB,
    NEWLINE: Category.NEWLINE,
    CARRIAGE_RETURN: Category.CARRIAGE_RETURN,
    ZERO_WIDTH_NO_BREAK_SPACE: Category.ZERO_WIDTH_NO_BREAK_SPACE,
}
_TABLE.update(dict.fromkeys(SPACE_CHARS, Category.SPACE))
_TABLE.update(dict.fromkeys(HYPHEN_CHARS, Category.HYPHEN))


def classify(ch: str) -> Category:
    """Return the line-break category of a single code point."""
    return _TABLE.get(ch, Category.TEXT)


def is_space_class(category: Category) -> bool:
    """Return True if category is a breaking whitespace run."""
    return category is Category.SPACE


def is_hyphen_class(category: Category) -> bool:
    """Return True if category is a breaking dash run."""
    return category is Category.HYPHEN


def is_breaking(category: Category) -> bool:
    """Return True if a line may be broken after a run of this category."""
    return category is Category.SPACE or category is Category.HYPHEN


def describe(ch: str) -> str:
    """Return a short human-readable name for ch, e.g. ``"em dash"``."""
    if ch == TAB:
        return "tab"
    if ch == NEWLINE:
        return "line feed"
    if ch == CARRIAGE_RETURN:
        return "carriage return"
    for table in (SPACE_CHARS, HYPHEN_CHARS, NON_BREAKING_SPACES, EXCLUDED_HYPHENS):
        if ch in table:
            return table[ch]
    return "text"
