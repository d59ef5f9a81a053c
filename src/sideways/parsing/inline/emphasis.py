"""Emphasis, strikethrough and code spans.

Strong and em are matched by regular expressions, not a delimiter stack:
``**``/``__`` wrap strong, ``*``/``_`` wrap em, and the inner text is
tokenized again when the element renders. ``_`` em needs a word boundary
after the closing underscore, so ``snake_case_name`` stays plain text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sideways.elements import Element, inline_element
from sideways.parsing.inline.core import Excerpt, Span

if TYPE_CHECKING:
    from sideways.context import ParseContext

_STRONG = {
    "*": re.compile(r"^[*]{2}((?:\\\*|[^*]|[*][^*]*+[*])+?)[*]{2}(?![*])", re.DOTALL),
    "_": re.compile(r"^__((?:\\_|[^_]|_[^_]*+_)+?)__(?!_)", re.DOTALL),
}

_EM = {
    "*": re.compile(r"^[*]((?:\\\*|[^*]|[*][*][^*]+?[*][*])+?)[*](?![*])", re.DOTALL),
    "_": re.compile(r"^_((?:\\_|[^_]|__[^_]*__)+?)_(?!_)\b", re.DOTALL),
}

_STRIKETHROUGH = re.compile(r"^~~(?=\S)(.+?)(?<=\S)~~")

# Opening backtick run, content, closing run of the same length
_CODE = re.compile(r"^(`++)[ ]*+(.+?)[ ]*+(?<!`)\1(?!`)", re.DOTALL)
_CODE_NEWLINE = re.compile(r"[ ]*+\n")


class EmphasisMixin:
    """Recognizers for ``*``, ``_``, ``~`` and backtick markers."""

    def _inline_emphasis(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        text = excerpt.text
        if len(text) < 2:
            return None

        marker = text[0]
        if text[1] == marker and (match := _STRONG[marker].match(text)):
            name = "strong"
        elif match := _EM[marker].match(text):
            name = "em"
        else:
            return None

        return Span(extent=match.end(), element=inline_element(name, match.group(1)))

    def _inline_strikethrough(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        if excerpt.text[1:2] != "~":
            return None
        match = _STRIKETHROUGH.match(excerpt.text)
        if match is None:
            return None
        return Span(extent=match.end(), element=inline_element("del", match.group(1)))

    def _inline_code(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        match = _CODE.match(excerpt.text)
        if match is None:
            return None
        code = _CODE_NEWLINE.sub(" ", match.group(2))
        return Span(extent=match.end(), element=Element(name="code", text=code))
