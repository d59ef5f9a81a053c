"""Line preprocessing for the block segmenter.

Normalizes line endings, trims surrounding blank lines, expands tabs to
4-column stops and measures indentation.

Example:
    >>> [line.text for line in preprocess("# Title\\r\\n\\r\\n\\tcode")]
    ['# Title', '', 'code']
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from sideways.utils.text import rtrim, span_length

TAB_STOP = 4


@dataclass(frozen=True, slots=True)
class Line:
    """One source line after tab expansion.

    Attributes:
        body: The full line, tabs expanded
        indent: Number of leading spaces in body
        text: body without its leading spaces
        blank: True when the line holds only whitespace
    """

    body: str
    indent: int
    text: str
    blank: bool = False

    @property
    def marker(self) -> str:
        """First non-space character, or "" for blank lines."""
        return self.text[:1]


BLANK = Line(body="", indent=0, text="", blank=True)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def expand_tabs(line: str) -> str:
    """Replace each tab with spaces up to the next 4-column stop.

    Columns are counted in characters, not bytes.
    """
    while (pos := line.find("\t")) != -1:
        shortage = TAB_STOP - pos % TAB_STOP
        line = line[:pos] + " " * shortage + line[pos + 1 :]
    return line


def make_line(raw: str) -> Line:
    """Build a Line from one raw source line."""
    if rtrim(raw) == "":
        return BLANK
    body = expand_tabs(raw)
    indent = span_length(body, " ")
    return Line(body=body, indent=indent, text=body[indent:])


def split_lines(text: str) -> list[str]:
    """Normalize line endings, trim surrounding newlines and split."""
    return normalize_newlines(text).strip("\n").split("\n")


def preprocess(source: str | Iterable[str]) -> Iterator[Line]:
    """Yield Lines for a document string or for already-split lines."""
    raw_lines = split_lines(source) if isinstance(source, str) else source
    for raw in raw_lines:
        yield make_line(raw)
