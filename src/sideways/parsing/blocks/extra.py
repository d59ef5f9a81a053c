"""Extra-mode block types for Sideways.

- Footnote definitions: ``[^label]: text``
- Definition lists: a paragraph followed by ``: definition`` lines
- Abbreviations: ``*[TERM]: meaning``
- Attribute blocks: ``{#id .class}`` after headers and links

Footnote and abbreviation definitions are hidden blocks: they only write to
the ParseContext.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sideways.elements import DeferredParse, Element, ParseKind, inline_element
from sideways.parsing.blocks.state import Block, DefinitionListBlock, FootnoteBlock
from sideways.parsing.dispatch import BlockType
from sideways.utils.text import trim

if TYPE_CHECKING:
    from sideways.context import ParseContext
    from sideways.lines import Line

_ABBREVIATION = re.compile(r"^\*\[(.+?)\]:[ ]*(.+?)[ ]*$")
_FOOTNOTE = re.compile(r"^\[\^(.+?)\]:[ ]?(.*)$")
_FOOTNOTE_LABEL = re.compile(r"^\[\^(.+?)\]:")


class ExtraBlockParsingMixin:
    """Mixin for the extra-mode block types."""

    # =========================================================================
    # Abbreviations
    # =========================================================================

    def _start_abbreviation(
        self, line: Line, current: Block | None, ctx: ParseContext
    ) -> Block | None:
        match = _ABBREVIATION.match(line.text)
        if match is None:
            return None
        ctx.define_abbreviation(match.group(1), match.group(2))
        return Block(type=BlockType.ABBREVIATION, hidden=True)

    # =========================================================================
    # Footnotes
    # =========================================================================

    def _start_footnote(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        match = _FOOTNOTE.match(line.text)
        if match is None:
            return None
        return FootnoteBlock(
            type=BlockType.FOOTNOTE,
            hidden=True,
            label=match.group(1),
            text=match.group(2),
        )

    def _continue_footnote(self, line: Line, block: Block, ctx: ParseContext) -> Block | None:
        assert isinstance(block, FootnoteBlock)
        if line.text[0] == "[" and _FOOTNOTE_LABEL.match(line.text):
            return None

        if not block.interrupted:
            block.text += "\n" + line.text
            return block

        # After a blank line only indented lines belong to the footnote
        if line.indent >= 4:
            block.text += "\n\n" + line.text
            block.interrupted = 0
            return block
        return None

    def _complete_footnote(self, block: Block, ctx: ParseContext) -> Block:
        assert isinstance(block, FootnoteBlock)
        ctx.define_footnote(block.label, block.text)
        return block

    # =========================================================================
    # Definition lists
    # =========================================================================

    def _start_definition_list(
        self, line: Line, current: Block | None, ctx: ParseContext
    ) -> Block | None:
        if current is None or current.type is not BlockType.PARAGRAPH:
            return None

        terms = current.element.handler.argument  # type: ignore[union-attr]
        assert isinstance(terms, str)
        block = DefinitionListBlock(
            type=BlockType.DEFINITION_LIST,
            identified=current.identified,
            interrupted=current.interrupted,
            element=Element(
                name="dl",
                children=[inline_element("dt", term) for term in terms.split("\n")],
            ),
        )
        self._add_definition(line, block)
        return block

    def _continue_definition_list(
        self, line: Line, block: Block, ctx: ParseContext
    ) -> Block | None:
        assert isinstance(block, DefinitionListBlock)
        if line.text[0] == ":":
            self._add_definition(line, block)
            return block

        if block.interrupted and line.indent == 0:
            return None

        definition = block.definition
        assert definition is not None and definition.handler is not None
        handler = definition.handler
        if block.interrupted:
            # Content after a blank line turns the definition into blocks
            handler.kind = ParseKind.LINES
            handler.argument += "\n\n"  # type: ignore[operator]
            block.interrupted = 0

        handler.argument += "\n" + line.body[min(line.indent, 4) :]  # type: ignore[operator]
        return block

    @staticmethod
    def _add_definition(line: Line, block: DefinitionListBlock) -> None:
        kind = ParseKind.LINES if block.interrupted else ParseKind.INLINE
        definition = Element(name="dd", handler=DeferredParse(kind, trim(line.text[1:])))
        block.interrupted = 0
        assert block.element is not None and block.element.children is not None
        block.element.children.append(definition)
        block.definition = definition

    # =========================================================================
    # Attribute blocks
    # =========================================================================

    @staticmethod
    def _parse_attribute_data(attribute_string: str) -> dict[str, str | None]:
        """``#id .a .b`` -> ``{"id": "id", "class": "a b"}``."""
        data: dict[str, str | None] = {}
        classes: list[str] = []
        for attribute in attribute_string.split():
            if attribute[0] == "#":
                data["id"] = attribute[1:]
            else:
                classes.append(attribute[1:])
        if classes:
            data["class"] = " ".join(classes)
        return data
