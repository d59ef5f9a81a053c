"""List parsing for Sideways.

Handles bullet (``*``, ``+``, ``-``) and ordered (``1.``, ``1)``) lists.

Each item collects its raw lines into a LIST_ITEM deferred parse; the item is
block-parsed at render time. A blank line between items, or inside an item
followed by more content, makes the list loose: every item then ends with an
empty line, which keeps its paragraphs wrapped in ``<p>``.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sideways.elements import DeferredParse, Element, ParseKind
from sideways.parsing.blocks.state import Block, ListBlock
from sideways.parsing.dispatch import BlockType

if TYPE_CHECKING:
    from sideways.context import ParseContext
    from sideways.lines import Line

_BULLET = re.compile(r"^([*+-]([ ]++|$))(.*+)")
_ORDERED = re.compile(r"^([0-9]{1,9}+[.)]([ ]++|$))(.*+)")


class ListParsingMixin:
    """Mixin for list parsing.

    Required Host Methods:
        - _start_reference(line, current, ctx) -> Block | None

    """

    def _start_list(
        self, line: Line, current: Block | None = None, ctx: ParseContext | None = None
    ) -> Block | None:
        if line.text[0] <= "-":
            list_type, pattern = "ul", _BULLET
        else:
            list_type, pattern = "ol", _ORDERED

        match = pattern.match(line.text)
        if match is None:
            return None

        marker, spacing, content = match.group(1), match.group(2), match.group(3)
        content_indent = len(spacing)
        if content_indent >= 5:
            # One space belongs to the marker, the rest makes indented code
            content_indent -= 1
            marker = marker[:-content_indent]
            content = " " * content_indent + content
        elif content_indent == 0:
            marker += " "

        bare_marker = marker.split(" ", 1)[0]
        block = ListBlock(
            type=BlockType.LIST,
            element=Element(name=list_type, children=[]),
            indent=line.indent,
            list_type=list_type,
            marker=marker,
            marker_type=bare_marker if list_type == "ul" else bare_marker[-1],
        )

        if list_type == "ol":
            start = bare_marker[:-1].lstrip("0") or "0"
            if start != "1":
                if current is not None and current.type is BlockType.PARAGRAPH and not current.interrupted:
                    return None
                block.element.attributes = {"start": start}  # type: ignore[union-attr]

        self._add_list_item(block, [content] if content else [])
        return block

    def _continue_list(self, line: Line, block: Block, ctx: ParseContext) -> Block | None:
        assert isinstance(block, ListBlock) and block.item is not None
        item_lines = self._item_lines(block.item)
        if block.interrupted and not item_lines:
            return None

        required_indent = block.indent + len(block.marker)

        if line.indent < required_indent:
            match = self._match_sibling_marker(block, line.text)
            if match is not None:
                if block.interrupted:
                    item_lines.append("")
                    block.loose = True
                    block.interrupted = 0
                block.indent = line.indent
                self._add_list_item(block, [match.group(1) or ""])
                return block

            if self._start_list(line) is not None:
                return None

        if line.text[0] == "[" and self._start_reference(line, None, ctx) is not None:
            return block

        if line.indent >= required_indent:
            if block.interrupted:
                item_lines.append("")
                block.loose = True
                block.interrupted = 0
            item_lines.append(line.body[required_indent:])
            return block

        if not block.interrupted:
            item_lines.append(re.sub(r"^[ ]{0," + str(required_indent) + r"}+", "", line.body))
            return block

        return None

    def _complete_list(self, block: Block, ctx: ParseContext) -> Block:
        assert isinstance(block, ListBlock) and block.element is not None
        if block.loose:
            for item in block.element.children or ():
                if item is None:
                    continue
                lines = self._item_lines(item)
                if not lines or lines[-1] != "":
                    lines.append("")
        return block

    @staticmethod
    def _match_sibling_marker(block: ListBlock, text: str) -> re.Match[str] | None:
        """Match a marker of the same kind as the list's own."""
        marker_type = re.escape(block.marker_type)
        if block.list_type == "ol":
            return re.match(r"^[0-9]++" + marker_type + r"(?:[ ]++(.*)|$)", text)
        return re.match(r"^" + marker_type + r"(?:[ ]++(.*)|$)", text)

    @staticmethod
    def _add_list_item(block: ListBlock, lines: list[str]) -> None:
        item = Element(name="li", handler=DeferredParse(ParseKind.LIST_ITEM, lines))
        assert block.element is not None and block.element.children is not None
        block.element.children.append(item)
        block.item = item

    @staticmethod
    def _item_lines(item: Element) -> list[str]:
        assert item.handler is not None and isinstance(item.handler.argument, list)
        return item.handler.argument
