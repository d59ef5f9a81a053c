"""HTML rendering of the element tree.

Deferred parses are resolved here, when their element is written: by then
the whole block pass has run, so every reference, footnote and abbreviation
definition is known.

Layout rules:
    - A newline separates siblings unless either one has ``autobreak=False``.
    - An element without explicit autobreak breaks iff it has a name.
    - Named elements without content self-close: ``<hr />``.

Nesting:
    Each resolved deferred parse counts one level of ``ctx.depth``. Past
    ``max_nesting_depth`` the unparsed argument is written as escaped text.

Thread Safety:
    All per-document state lives in the ParseContext argument.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sideways.elements import Element, ParseKind
from sideways.sanitize import sanitize_element
from sideways.stringbuilder import StringBuilder
from sideways.utils.logger import get_logger
from sideways.utils.text import escape_html

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sideways.config import RenderOptions
    from sideways.context import ParseContext

logger = get_logger(__name__)

# Adjacent definition lists collapse into one
_ADJACENT_DEFINITION_LISTS = re.compile(r"</dl>\s+<dl>\s+")


class HtmlRenderingMixin:
    """Element tree to HTML.

    Required Host Attributes:
        - _options: RenderOptions

    Required Host Methods:
        - _lines_elements(lines, ctx) -> list[Element | None]
        - _line_elements(text, non_nestables, ctx) -> list[Element | None]
        - _process_tag(markup, ctx) -> str

    """

    _options: RenderOptions

    # =========================================================================
    # Documents
    # =========================================================================

    def _render_document(self, text: str, ctx: ParseContext) -> str:
        """Render a full document, footnotes included."""
        markup = self._render_fragment(text, ctx)
        if self._options.extra and ctx.referenced_footnotes():
            markup += "\n" + self._element(self._build_footnotes(ctx), ctx)
        return markup

    def _render_fragment(self, text: str | Iterable[str], ctx: ParseContext) -> str:
        """Render Markdown blocks without the trailing footnote list."""
        markup = self._elements(self._lines_elements(text, ctx), ctx).strip("\n")
        if self._options.extra:
            markup = _ADJACENT_DEFINITION_LISTS.sub("", markup)
        return markup

    # =========================================================================
    # Elements
    # =========================================================================

    def _elements(self, elements: Sequence[Element | None], ctx: ParseContext) -> str:
        sb = StringBuilder()
        autobreak = True

        for element in elements:
            if element is None:
                continue

            autobreak_next = element.autobreak if element.autobreak is not None else element.name is not None
            # autobreak=False on either side suppresses the newline
            autobreak = autobreak_next if autobreak else autobreak

            if autobreak:
                sb.append("\n")
            sb.append(self._element(element, ctx))
            autobreak = autobreak_next

        if autobreak:
            sb.append("\n")
        return sb.build()

    def _element(self, element: Element, ctx: ParseContext) -> str:
        if self._options.safe_mode:
            sanitize_element(element)

        if element.handler is None:
            return self._write_element(element, ctx)

        if ctx.depth >= self._options.max_nesting_depth:
            logger.warning(
                "Nesting depth %d reached; rendering <%s> content as text",
                self._options.max_nesting_depth,
                element.name or "",
            )
            argument = element.handler.argument
            element.text = argument if isinstance(argument, str) else "\n".join(argument)
            element.handler = None
            return self._write_element(element, ctx)

        ctx.depth += 1
        try:
            self._handle(element, ctx)
            return self._write_element(element, ctx)
        finally:
            ctx.depth -= 1

    def _handle(self, element: Element, ctx: ParseContext) -> None:
        """Run the element's deferred parse and store the result on it."""
        handler = element.handler
        assert handler is not None
        element.handler = None
        argument = handler.argument

        if handler.kind is ParseKind.INLINE:
            assert isinstance(argument, str)
            element.children = self._line_elements(argument, element.non_nestables, ctx)
        elif handler.kind is ParseKind.LINES:
            element.children = self._lines_elements(argument, ctx)
        elif handler.kind is ParseKind.LIST_ITEM:
            assert isinstance(argument, list)
            element.children = self._list_item(argument, ctx)
        else:
            assert isinstance(argument, str)
            element.raw_html = self._process_tag(argument, ctx)

    def _write_element(self, element: Element, ctx: ParseContext) -> str:
        name = element.name
        sb = StringBuilder()

        if name is not None:
            sb.append("<").append(name)
            for attribute, value in (element.attributes or {}).items():
                if value is None:
                    continue
                sb.append(f' {attribute}="{escape_html(value)}"')

        content: str | None = None
        permit_raw_html = False
        if element.text is not None:
            content = element.text
        elif element.raw_html is not None:
            content = element.raw_html
            permit_raw_html = not self._options.safe_mode or element.allow_raw_html_in_safe_mode

        if content is not None or element.child is not None or element.children is not None:
            if name is not None:
                sb.append(">")

            if element.children is not None:
                sb.append(self._elements(element.children, ctx))
            elif element.child is not None:
                sb.append(self._element(element.child, ctx))
            elif permit_raw_html:
                sb.append(content or "")
            else:
                sb.append(escape_html(content or "", allow_quotes=True))

            if name is not None:
                sb.append(f"</{name}>")
        elif name is not None:
            sb.append(" />")

        return sb.build()

    # =========================================================================
    # List items and footnotes
    # =========================================================================

    def _list_item(self, lines: list[str], ctx: ParseContext) -> list[Element | None]:
        """Block-parse an item; a tight item's leading paragraph loses its ``<p>``."""
        elements = self._lines_elements(lines, ctx)
        first = elements[0] if elements else None
        if "" not in lines and first is not None and first.name == "p":
            first.name = None
        return elements

    def _build_footnotes(self, ctx: ParseContext) -> Element:
        """``<div class="footnotes">`` listing every referenced footnote by number.

        Items are rendered as they are built, so footnotes first referenced
        from another footnote's body are numbered in time to be listed too.
        """
        items: list[Element | None] = []
        listed: set[str] = set()

        while pending := [(label, fn) for label, fn in ctx.referenced_footnotes() if label not in listed]:
            label, footnote = pending[0]
            listed.add(label)
            body = self._lines_elements(footnote.text, ctx)

            backlinks: list[Element | None] = []
            for number in range(1, footnote.count + 1):
                if backlinks:
                    backlinks.append(Element(text=" "))
                backlinks.append(
                    Element(
                        name="a",
                        attributes={
                            "href": f"#fnref{number}:{label}",
                            "rev": "footnote",
                            "class": "footnote-backref",
                        },
                        raw_html="&#8617;",
                        allow_raw_html_in_safe_mode=True,
                        autobreak=False,
                    )
                )

            last = body[-1] if body else None
            if last is not None and last.name == "p":
                last.name = None
                body[-1] = Element(
                    name="p",
                    children=[
                        last,
                        Element(raw_html="&#160;", allow_raw_html_in_safe_mode=True),
                        *backlinks,
                    ],
                )
            else:
                body.append(Element(name="p", children=backlinks))

            item = Element(name="li", attributes={"id": f"fn:{label}"}, children=body)
            items.append(
                Element(raw_html=self._element(item, ctx), allow_raw_html_in_safe_mode=True, autobreak=True)
            )

        return Element(
            name="div",
            attributes={"class": "footnotes"},
            children=[Element(name="hr"), Element(name="ol", children=items)],
        )
