"""Raw HTML tag scanning and Markdown splicing (extra mode).

A raw HTML block is reprocessed when it renders:

- ``<div markdown="1">...</div>``: the attribute is dropped and the inner
  HTML is rendered as Markdown with the document's definitions.
- Any other block tag: its children are walked; child elements that are not
  text-level are reprocessed the same way, everything else is kept as-is.

The scanner covers tag names, attributes, comments,
self-closing and void tags, and same-name depth counting to find the
matching end tag. Unclosed tags extend to the end of the markup.

Example:
    >>> tag = parse_open_tag('<div class="note" markdown="1">', 0)
    >>> tag.name, tag.attributes
    ('div', {'class': 'note', 'markdown': '1'})
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sideways.parsing.charsets import HTML_ATTRIBUTE, TEXT_LEVEL_ELEMENTS, VOID_ELEMENTS
from sideways.utils.logger import get_logger

if TYPE_CHECKING:
    from sideways.config import RenderOptions
    from sideways.context import ParseContext

logger = get_logger(__name__)

_OPEN_TAG = re.compile(r"<(\w[\w-]*+)((?:\s*+" + HTML_ATTRIBUTE + r")*+)\s*+(/?)>", re.DOTALL)
_ATTRIBUTE = re.compile(
    r"""([a-zA-Z_:][\w:.-]*)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^"'=<>`\s]+)))?"""
)
_CLOSE_TAG = re.compile(r"</(\w[\w-]*)\s*>")
_TAG_OR_COMMENT = re.compile(r"<!--.*?-->|<(/?)(\w[\w-]*)(?:\s[^>]*)?>", re.DOTALL)


@dataclass(slots=True)
class Tag:
    """An opening tag.

    Attributes:
        name: Tag name as written
        attributes: Attribute name -> value (None for bare attributes)
        self_closing: Written as ``<name ... />``
        start: Offset of ``<``
        end: Offset just past ``>``
    """

    name: str
    attributes: dict[str, str | None]
    self_closing: bool
    start: int
    end: int

    @property
    def is_void(self) -> bool:
        return self.self_closing or self.name.lower() in VOID_ELEMENTS


def parse_open_tag(markup: str, pos: int) -> Tag | None:
    """Parse an opening tag starting exactly at ``pos``."""
    match = _OPEN_TAG.match(markup, pos)
    if match is None:
        return None

    attributes: dict[str, str | None] = {}
    for attribute in _ATTRIBUTE.finditer(match.group(2)):
        name, double, single, bare = attribute.groups()
        value = double if double is not None else single if single is not None else bare
        attributes[name.lower()] = value

    return Tag(
        name=match.group(1),
        attributes=attributes,
        self_closing=match.group(3) == "/",
        start=match.start(),
        end=match.end(),
    )


def find_closing_tag(markup: str, name: str, pos: int) -> tuple[int, int] | None:
    """Locate the end tag matching an element opened before ``pos``.

    Nested elements of the same name are counted; comments are skipped.

    Returns:
        (start, end) offsets of the end tag, or None if it is missing
    """
    name = name.lower()
    depth = 0
    for token in _TAG_OR_COMMENT.finditer(markup, pos):
        tag_name = token.group(2)
        if tag_name is None or tag_name.lower() != name:
            continue
        if token.group(1):
            if depth == 0:
                return token.start(), token.end()
            depth -= 1
        elif not token.group(0).endswith("/>"):
            depth += 1
    return None


def iter_nodes(markup: str) -> Iterator[tuple[str, str | None]]:
    """Split markup into top-level nodes.

    Yields:
        (node markup, tag name) for elements, (markup, None) for text,
        comments and stray end tags
    """
    pos = 0
    length = len(markup)
    while pos < length:
        lt = markup.find("<", pos)
        if lt == -1:
            yield markup[pos:], None
            return
        if lt > pos:
            yield markup[pos:lt], None

        if markup.startswith("<!--", lt):
            close = markup.find("-->", lt + 4)
            end = length if close == -1 else close + 3
            yield markup[lt:end], None
            pos = end
            continue

        tag = parse_open_tag(markup, lt)
        if tag is None:
            stray = _CLOSE_TAG.match(markup, lt)
            end = stray.end() if stray else lt + 1
            yield markup[lt:end], None
            pos = end
            continue

        if tag.is_void:
            end = tag.end
        else:
            closing = find_closing_tag(markup, tag.name, tag.end)
            end = closing[1] if closing else length
        yield markup[lt:end], tag.name
        pos = end


def serialize_open_tag(tag: Tag) -> str:
    parts = [f"<{tag.name.lower()}"]
    for name, value in tag.attributes.items():
        if value is None:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{value.replace(chr(34), "&quot;")}"')
    parts.append(">")
    return "".join(parts)


class MarkupSplicingMixin:
    """Reprocess raw HTML blocks that may contain Markdown.

    Required Host Attributes:
        - _options: RenderOptions

    Required Host Methods:
        - _render_fragment(text, ctx) -> str

    """

    _options: RenderOptions

    def _process_tag(self, markup: str, ctx: ParseContext) -> str:
        """Rewrite one element's markup, splicing rendered Markdown into it."""
        tag = parse_open_tag(markup, 0)
        if tag is None or tag.is_void:
            return markup

        if ctx.depth >= self._options.max_nesting_depth:
            logger.warning(
                "Nesting depth %d reached; <%s> left unprocessed",
                self._options.max_nesting_depth,
                tag.name,
            )
            return markup

        closing = find_closing_tag(markup, tag.name, tag.end)
        inner_end, tail_start = closing if closing else (len(markup), len(markup))
        inner = markup[tag.end : inner_end]

        ctx.depth += 1
        try:
            if tag.attributes.get("markdown") == "1":
                del tag.attributes["markdown"]
                content = "\n" + self._render_fragment(inner, ctx) + "\n"
            else:
                content = "".join(
                    self._process_tag(node, ctx)
                    if name is not None and name.lower() not in TEXT_LEVEL_ELEMENTS
                    else node
                    for node, name in iter_nodes(inner)
                )
        finally:
            ctx.depth -= 1

        return serialize_open_tag(tag) + content + f"</{tag.name.lower()}>" + markup[tail_start:]
