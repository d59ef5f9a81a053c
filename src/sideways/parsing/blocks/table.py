"""Table parsing for Sideways.

A table is recognised when the line right below a one-line paragraph is a
divider made only of ``-``, ``:``, ``|`` and spaces:

| Header 1 | Header 2 |   <- the paragraph
|:---------|---------:|   <- divider, one cell per header cell
| Cell 1   | Cell 2   |   <- body rows (continuation lines)

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sideways.elements import Element, inline_element
from sideways.parsing.blocks.state import Block, TableBlock
from sideways.parsing.charsets import TABLE_DIVIDER_CHARS
from sideways.parsing.dispatch import BlockType
from sideways.utils.text import rtrim, trim

if TYPE_CHECKING:
    from sideways.context import ParseContext
    from sideways.lines import Line

# A cell: escaped pipes, plain characters, or whole code spans
_CELL = re.compile(r"(?:\\[|]|[^|`]|`[^`]++`|`)++")


def _strip_row(row: str) -> str:
    """Strip surrounding whitespace, then surrounding pipes."""
    return trim(trim(row), "|")


class TableParsingMixin:
    """Mixin for table parsing."""

    def _start_table(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        if current is None or current.type is not BlockType.PARAGRAPH or current.interrupted:
            return None

        header = current.element.handler.argument  # type: ignore[union-attr]
        assert isinstance(header, str)
        if "\n" in header or ("|" not in header and "|" not in line.text and ":" not in line.text):
            return None
        if rtrim(line.text, TABLE_DIVIDER_CHARS) != "":
            return None

        alignments = self._parse_table_divider(line.text)
        if alignments is None:
            return None

        header_cells = _strip_row(header).split("|")
        if len(header_cells) != len(alignments):
            return None

        header_row = Element(
            name="tr",
            children=[
                self._table_cell("th", cell, alignments[index])
                for index, cell in enumerate(header_cells)
            ],
        )
        return TableBlock(
            type=BlockType.TABLE,
            identified=True,
            alignments=alignments,
            element=Element(
                name="table",
                children=[
                    Element(name="thead", children=[header_row]),
                    Element(name="tbody", children=[]),
                ],
            ),
        )

    def _continue_table(self, line: Line, block: Block, ctx: ParseContext) -> Block | None:
        assert isinstance(block, TableBlock) and block.element is not None
        if block.interrupted:
            return None
        if len(block.alignments) != 1 and "|" not in line.text:
            return None

        cells = [m.group(0) for m in _CELL.finditer(_strip_row(line.text))]
        row = Element(
            name="tr",
            children=[
                self._table_cell("td", cell, block.alignments[index])
                for index, cell in enumerate(cells[: len(block.alignments)])
            ],
        )
        body = block.element.children[1]  # type: ignore[index]
        assert body is not None and body.children is not None
        body.children.append(row)
        return block

    @staticmethod
    def _parse_table_divider(divider: str) -> list[str | None] | None:
        """Column alignments from a divider row, or None if a cell is empty."""
        alignments: list[str | None] = []
        for cell in _strip_row(divider).split("|"):
            cell = trim(cell)
            if cell == "":
                return None
            alignment = "left" if cell[0] == ":" else None
            if cell.endswith(":"):
                alignment = "center" if alignment == "left" else "right"
            alignments.append(alignment)
        return alignments

    @staticmethod
    def _table_cell(name: str, text: str, alignment: str | None) -> Element:
        attributes = {"style": f"text-align: {alignment};"} if alignment else None
        return inline_element(name, trim(text), attributes)
