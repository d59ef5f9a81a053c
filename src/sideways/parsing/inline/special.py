"""Escapes, entities, autolinks and inline raw HTML.

- ``\\*`` backslash escapes for Markdown punctuation
- ``&copy;`` / ``&#169;`` entities, passed through unescaped
- ``<https://example.com>`` and ``<user@example.com>`` autolinks
- bare ``https://example.com`` URLs (when urls_linked)
- inline tags and comments (unless safe_mode or markup_escaped)
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sideways.elements import Element
from sideways.parsing.charsets import ESCAPABLE, HTML_ATTRIBUTE
from sideways.parsing.inline.core import Excerpt, Span

if TYPE_CHECKING:
    from sideways.config import RenderOptions
    from sideways.context import ParseContext

_ENTITY = re.compile(r"^&(#?+[0-9a-zA-Z]++);")

_URL = re.compile(r"\bhttps?+:[/]{2}[^\s<]+\b/*+", re.IGNORECASE)
_URL_TAG = re.compile(r"^<(\w++:/{2}[^ >]++)>", re.IGNORECASE)

_HOSTNAME_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
_EMAIL = (
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]++@"
    + _HOSTNAME_LABEL
    + r"(?:\."
    + _HOSTNAME_LABEL
    + r")*"
)
_EMAIL_TAG = re.compile(r"^<((mailto:)?" + _EMAIL + r")>", re.IGNORECASE)

_CLOSING_TAG = re.compile(r"^</\w[\w-]*+[ ]*+>")
_COMMENT = re.compile(r"^<!---?[^>-](?:-?+[^-])*-->")
_OPENING_TAG = re.compile(
    r"^<\w[\w-]*+(?:[ ]*+" + HTML_ATTRIBUTE + r")*+[ ]*+/?>", re.DOTALL
)


class SpecialInlineMixin:
    """Recognizers for ``\\``, ``&``, ``:`` and ``<`` markers.

    Required Host Attributes:
        - _options: RenderOptions

    """

    _options: RenderOptions

    def _inline_escape_sequence(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        escaped = excerpt.text[1:2]
        if escaped and escaped in ESCAPABLE:
            return Span(extent=2, element=Element(raw_html=escaped))
        return None

    def _inline_special_character(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        text = excerpt.text
        if text[1:2] == " " or ";" not in text:
            return None
        match = _ENTITY.match(text)
        if match is None:
            return None
        return Span(extent=match.end(), element=Element(raw_html=f"&{match.group(1)};"))

    def _inline_url(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        """Bare URL; the ``:`` marker sits after the scheme, so the match starts earlier."""
        if not self._options.urls_linked or excerpt.text[2:3] != "/":
            return None
        if "http" not in excerpt.context:
            return None

        match = _URL.search(excerpt.context)
        if match is None:
            return None
        url = match.group(0)
        return Span(
            extent=len(url),
            position=match.start(),
            element=Element(name="a", attributes={"href": url}, text=url),
        )

    def _inline_url_tag(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        if ">" not in excerpt.text:
            return None
        match = _URL_TAG.match(excerpt.text)
        if match is None:
            return None
        url = match.group(1)
        return Span(
            extent=match.end(),
            element=Element(name="a", attributes={"href": url}, text=url),
        )

    def _inline_email_tag(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        if ">" not in excerpt.text:
            return None
        match = _EMAIL_TAG.match(excerpt.text)
        if match is None:
            return None

        address = match.group(1)
        url = address if match.group(2) else f"mailto:{address}"
        return Span(
            extent=match.end(),
            element=Element(name="a", attributes={"href": url}, text=address),
        )

    def _inline_markup(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        if self._options.markup_escaped or self._options.safe_mode:
            return None
        text = excerpt.text
        if ">" not in text:
            return None

        second = text[1:2]
        match = None
        if second == "/":
            match = _CLOSING_TAG.match(text)
        elif second == "!":
            match = _COMMENT.match(text)
        elif second != " ":
            match = _OPENING_TAG.match(text)
        if match is None:
            return None
        return Span(extent=match.end(), element=Element(raw_html=match.group(0)))
