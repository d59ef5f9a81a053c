"""Link, image and footnote marker recognition.

Forms:
    [text](url "title")     inline link
    [text][id]              full reference
    [text][]                collapsed reference
    [text]                  shortcut reference
    ![alt](src "title")     image (same grammar after the ``!``)
    [^label]                footnote marker (extra mode)

Reference ids are case-insensitive. Undefined references leave the text
as-is. In extra mode a ``{#id .class}`` block may follow a link.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sideways.elements import DeferredParse, Element, ParseKind, SpanType
from sideways.parsing.charsets import ATTRIBUTE_ITEM
from sideways.parsing.inline.core import Excerpt, Span

if TYPE_CHECKING:
    from sideways.config import RenderOptions
    from sideways.context import ParseContext

_INLINE_DESTINATION = re.compile(
    r"""^[(]\s*+((?:[^ ()]++|[(][^ )]+[)])++)(?:[ ]+("[^"]*+"|'[^']*+'))?\s*+[)]"""
)
_REFERENCE_LABEL = re.compile(r"^\s*\[(.*?)\]")
_ATTRIBUTE_BLOCK = re.compile(r"^[ ]*{(" + ATTRIBUTE_ITEM + r"+)}")
_FOOTNOTE_MARKER = re.compile(r"^\[\^(.+?)\]")

_LINK_NON_NESTABLES = frozenset({SpanType.URL, SpanType.LINK})


def _match_brackets(excerpt: Excerpt) -> tuple[str, int] | None:
    """Match a balanced ``[...]`` at the start of the excerpt.

    Returns:
        (inner text, length including brackets), or None when unbalanced
    """
    text = excerpt.text
    if text[:1] != "[":
        return None
    extent = excerpt.brackets.get(len(text))
    if extent is None:
        return None
    return text[1 : extent - 1], extent


class LinkParsingMixin:
    """Recognizers for ``[`` and ``!`` markers.

    Required Host Attributes:
        - _options: RenderOptions

    Required Host Methods:
        - _parse_attribute_data(attribute_string) -> dict[str, str | None]

    """

    _options: RenderOptions

    def _inline_link(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        label_match = _match_brackets(excerpt)
        if label_match is None:
            return None
        label, extent = label_match
        remainder = excerpt.text[extent:]

        attributes: dict[str, str | None] = {"href": None, "title": None}

        if destination := _INLINE_DESTINATION.match(remainder):
            attributes["href"] = destination.group(1)
            if destination.group(2) is not None:
                attributes["title"] = destination.group(2)[1:-1]
            extent += destination.end()
        else:
            reference_id = label
            if reference_label := _REFERENCE_LABEL.match(remainder):
                reference_id = reference_label.group(1) or label
                extent += reference_label.end()

            reference = ctx.lookup_reference(reference_id)
            if reference is None:
                return None
            attributes["href"] = reference.url
            attributes["title"] = reference.title

        if self._options.extra:
            block = _ATTRIBUTE_BLOCK.match(excerpt.text[extent:])
            if block is not None:
                for name, value in self._parse_attribute_data(block.group(1)).items():
                    attributes.setdefault(name, value)
                extent += block.end()

        element = Element(
            name="a",
            attributes=attributes,
            handler=DeferredParse(ParseKind.INLINE, label),
            non_nestables=_LINK_NON_NESTABLES,
        )
        return Span(extent=extent, element=element)

    def _inline_image(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        if excerpt.text[1:2] != "[":
            return None

        link = self._inline_link(
            Excerpt(text=excerpt.text[1:], context=excerpt.context, brackets=excerpt.brackets), ctx
        )
        if link is None:
            return None

        link_element = link.element
        assert link_element.attributes is not None and link_element.handler is not None
        attributes: dict[str, str | None] = {
            "src": link_element.attributes["href"],
            "alt": link_element.handler.argument,  # type: ignore[dict-item]
        }
        for name, value in link_element.attributes.items():
            if name != "href":
                attributes.setdefault(name, value)

        return Span(
            extent=link.extent + 1,
            element=Element(name="img", attributes=attributes, autobreak=True),
        )

    def _inline_footnote_marker(self, excerpt: Excerpt, ctx: ParseContext) -> Span | None:
        match = _FOOTNOTE_MARKER.match(excerpt.text)
        if match is None:
            return None

        label = match.group(1)
        footnote = ctx.reference_footnote(label)
        if footnote is None:
            return None

        element = Element(
            name="sup",
            attributes={"id": f"fnref{footnote.count}:{label}"},
            child=Element(
                name="a",
                attributes={"href": f"#fn:{label}", "class": "footnote-ref"},
                text=str(footnote.number),
            ),
        )
        return Span(extent=match.end(), element=element)
