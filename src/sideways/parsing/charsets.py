"""Character sets and tag-name tables for O(1) classification.

All sets are frozensets (immutable, module-level, no per-call allocation).

Usage:
    from sideways.parsing.charsets import ESCAPABLE

    if char in ESCAPABLE:  # O(1) lookup
        ...
"""

import re

# Characters that start an inline span (first occurrence drives the scanner)
INLINE_MARKERS: str = "!*_&[:<`~\\"
INLINE_MARKER_PATTERN: re.Pattern[str] = re.compile("[" + re.escape(INLINE_MARKERS) + "]")

# Characters a backslash may escape
ESCAPABLE: frozenset[str] = frozenset("\\`*_{}[]()>#+-.!|~")

# Characters allowed in a table divider row
TABLE_DIVIDER_CHARS: str = " -:|"

# Elements that never have content
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "command",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
    }
)

# Inline (text-level) elements: never start a raw HTML block and are never
# reprocessed as Markdown containers
TEXT_LEVEL_ELEMENTS: frozenset[str] = frozenset(
    {
        "a",
        "br",
        "bdo",
        "abbr",
        "blink",
        "nextid",
        "acronym",
        "basefont",
        "b",
        "em",
        "big",
        "cite",
        "small",
        "spacer",
        "listing",
        "i",
        "rp",
        "del",
        "code",
        "strike",
        "marquee",
        "q",
        "rt",
        "ins",
        "font",
        "strong",
        "s",
        "tt",
        "kbd",
        "mark",
        "u",
        "xm",
        "sub",
        "nobr",
        "sup",
        "ruby",
        "var",
        "span",
        "wbr",
        "time",
    }
)

# URL prefixes allowed in href/src under safe mode (compared case-insensitively)
SAFE_URL_PREFIXES: tuple[str, ...] = (
    "http://",
    "https://",
    "ftp://",
    "ftps://",
    "mailto:",
    "tel:",
    "data:image/png;base64,",
    "data:image/gif;base64,",
    "data:image/jpeg;base64,",
    "irc:",
    "ircs:",
    "git:",
    "ssh:",
    "news:",
    "steam:",
)

# One HTML attribute, optionally with a value (shared by block/inline markup)
HTML_ATTRIBUTE: str = (
    r"""[a-zA-Z_:][\w:.-]*+(?:\s*+=\s*+(?:[^"'=<>`\s]+|"[^"]*+"|'[^']*+'))?+"""
)

# Extra-mode attribute block item: ``#id`` or ``.class``
ATTRIBUTE_ITEM: str = r"(?:[#.][-\w]+[ ]*)"
