"""Core block segmentation for Sideways.

Turns a sequence of lines into a list of elements with a line-at-a-time
state machine. Each line is first offered to the current block's continue
handler; failing that, the start handlers registered for the line's first
character are tried in priority order; failing that, the line lazily extends
an open paragraph or starts a new one.

Handler signatures (bound by the engine in its dispatch tables):
    start(line, current, ctx) -> Block | None
    continue(line, block, ctx) -> Block | None
    complete(block, ctx) -> Block

Thread Safety:
    All per-document state lives in the ParseContext argument and in local
    Block objects. Engine instances can be shared.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from sideways.elements import DeferredParse, Element, ParseKind, inline_element
from sideways.lines import Line, preprocess
from sideways.parsing.charsets import ATTRIBUTE_ITEM, HTML_ATTRIBUTE, TEXT_LEVEL_ELEMENTS, VOID_ELEMENTS
from sideways.parsing.blocks.state import Block, CommentBlock, FencedCodeBlock, MarkupBlock
from sideways.parsing.dispatch import UNMARKED_BLOCK_TYPES, BlockType
from sideways.utils.text import rtrim, span_length, trim

if TYPE_CHECKING:
    from sideways.config import RenderOptions
    from sideways.context import ParseContext

StartHandler = Callable[[Line, Block | None, "ParseContext"], Block | None]
ContinueHandler = Callable[[Line, Block, "ParseContext"], Block | None]
CompleteHandler = Callable[[Block, "ParseContext"], Block]

_QUOTE = re.compile(r"^>[ ]?+(.*+)")
_REFERENCE = re.compile(r"""^\[(.+?)\]:[ ]*+<?(\S+?)>?(?:[ ]+["'(](.+)["')])?[ ]*+$""")
_MARKUP_OPEN = re.compile(r"^<[/]?+(\w*)(?:[ ]*+" + HTML_ATTRIBUTE + r")*+[ ]*+(/)?>")
_MARKUP_OPEN_EXTRA = re.compile(r"^<(\w[\w-]*+)(?:[ ]*+" + HTML_ATTRIBUTE + r")*+[ ]*+(/)?>")
_HEADER_ATTRIBUTES = re.compile(r"[ #]*{(" + ATTRIBUTE_ITEM + r"+)}[ ]*$")
_SETEXT_ATTRIBUTES = re.compile(r"[ ]*{(" + ATTRIBUTE_ITEM + r"+)}[ ]*$")
_INFO_WORD_END = re.compile(r"[ \t\n\f\r]")


class BlockParsingCoreMixin:
    """Segmenter loop plus the single-line and fenced block types.

    Required Host Attributes:
        - _options: RenderOptions
        - _block_types: dict[str, tuple[BlockType, ...]]
        - _block_start: dict[BlockType, StartHandler]
        - _block_continue: dict[BlockType, ContinueHandler]
        - _block_complete: dict[BlockType, CompleteHandler]

    Required Host Methods:
        - _parse_attribute_data(attribute_string) -> dict[str, str | None]

    """

    _options: RenderOptions
    _block_types: dict[str, tuple[BlockType, ...]]
    _block_start: dict[BlockType, StartHandler]
    _block_continue: dict[BlockType, ContinueHandler]
    _block_complete: dict[BlockType, CompleteHandler]

    # =========================================================================
    # Segmenter
    # =========================================================================

    def _lines_elements(self, lines: str | Iterable[str], ctx: ParseContext) -> list[Element | None]:
        """Segment lines into block elements (hidden blocks yield None)."""
        elements: list[Element | None] = []
        current: Block | None = None

        for line in preprocess(lines):
            if line.blank:
                if current is not None:
                    current.interrupted += 1
                continue

            if current is not None and current.continuable:
                block = self._block_continue[current.type](line, current, ctx)
                if block is not None:
                    current = block
                    continue
                current = self._complete_block(current, ctx)

            block = self._start_block(line, current, ctx)
            if block is not None:
                if not block.identified:
                    if current is not None:
                        elements.append(self._extract_element(current))
                    block.identified = True
                current = block
                continue

            if current is not None and current.type is BlockType.PARAGRAPH and not current.interrupted:
                self._extend_paragraph(line, current)
                continue

            if current is not None:
                elements.append(self._extract_element(current))
            current = self._paragraph(line)
            current.identified = True

        if current is not None:
            if current.continuable:
                current = self._complete_block(current, ctx)
            elements.append(self._extract_element(current))

        return elements

    def _start_block(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        """Try every candidate type for this line; first match wins."""
        candidates = UNMARKED_BLOCK_TYPES + self._block_types.get(line.marker, ())
        for block_type in candidates:
            block = self._block_start[block_type](line, current, ctx)
            if block is None:
                continue
            block.type = block_type
            if block_type in self._block_continue:
                block.continuable = True
            return block
        return None

    def _complete_block(self, block: Block, ctx: ParseContext) -> Block:
        """Finalize a continuable block whose continuation just ended."""
        complete = self._block_complete.get(block.type)
        if complete is not None:
            block = complete(block, ctx)
        block.continuable = False
        return block

    @staticmethod
    def _extract_element(block: Block) -> Element | None:
        if block.hidden:
            return None
        return block.element

    # =========================================================================
    # Paragraph
    # =========================================================================

    def _paragraph(self, line: Line) -> Block:
        return Block(type=BlockType.PARAGRAPH, element=inline_element("p", line.text))

    @staticmethod
    def _extend_paragraph(line: Line, block: Block) -> None:
        assert block.element is not None and block.element.handler is not None
        block.element.handler.argument += "\n" + line.text  # type: ignore[operator]

    # =========================================================================
    # Indented code
    # =========================================================================

    def _start_code(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        if current is not None and current.type is BlockType.PARAGRAPH and not current.interrupted:
            return None
        if line.indent < 4:
            return None
        return Block(
            type=BlockType.CODE,
            element=Element(name="pre", child=Element(name="code", text=line.body[4:])),
        )

    def _continue_code(self, line: Line, block: Block, ctx: ParseContext) -> Block | None:
        if line.indent < 4:
            return None
        code = block.element.child  # type: ignore[union-attr]
        assert code is not None and code.text is not None
        if block.interrupted:
            code.text += "\n" * block.interrupted
            block.interrupted = 0
        code.text += "\n" + line.body[4:]
        return block

    def _complete_code(self, block: Block, ctx: ParseContext) -> Block:
        return block

    # =========================================================================
    # Fenced code
    # =========================================================================

    def _start_fenced_code(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        char = line.text[0]
        opener_length = span_length(line.text, char)
        if opener_length < 3:
            return None

        info = line.text[opener_length:].strip("\t ")
        if "`" in info:
            return None

        code = Element(name="code", text="")
        if info:
            end = _INFO_WORD_END.search(info)
            language = info[: end.start()] if end else info
            code.attributes = {"class": f"language-{language}"}

        return FencedCodeBlock(
            type=BlockType.FENCED_CODE,
            element=Element(name="pre", child=code),
            char=char,
            opener_length=opener_length,
        )

    def _continue_fenced_code(self, line: Line, block: Block, ctx: ParseContext) -> Block | None:
        assert isinstance(block, FencedCodeBlock)
        if block.complete:
            return None

        code = block.element.child  # type: ignore[union-attr]
        assert code is not None and code.text is not None
        if block.interrupted:
            code.text += "\n" * block.interrupted
            block.interrupted = 0

        run = span_length(line.text, block.char)
        if run >= block.opener_length and rtrim(line.text[run:], " ") == "":
            block.complete = True
            return block

        code.text += "\n" + line.body
        return block

    def _complete_fenced_code(self, block: Block, ctx: ParseContext) -> Block:
        """Drop the newline that precedes the first content line."""
        assert isinstance(block, FencedCodeBlock)
        code = block.element.child  # type: ignore[union-attr]
        if not block.trimmed and code is not None and code.text:
            code.text = code.text[1:]
        block.trimmed = True
        return block

    # =========================================================================
    # Headers
    # =========================================================================

    def _start_header(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        level = span_length(line.text, "#")
        if level > 6:
            return None

        text = line.text.strip("#")
        if self._options.strict_mode and text and text[0] != " ":
            return None
        text = text.strip(" ")

        element = inline_element(f"h{level}", text)
        if self._options.extra:
            self._take_attribute_block(element, _HEADER_ATTRIBUTES)
        return Block(type=BlockType.HEADER, element=element)

    def _start_setext_header(
        self, line: Line, current: Block | None, ctx: ParseContext
    ) -> Block | None:
        if current is None or current.type is not BlockType.PARAGRAPH or current.interrupted:
            return None
        if line.indent >= 4 or rtrim(line.text.rstrip(" "), line.text[0]) != "":
            return None

        element = current.element
        assert element is not None
        element.name = "h1" if line.text[0] == "=" else "h2"
        if self._options.extra:
            self._take_attribute_block(element, _SETEXT_ATTRIBUTES)
        return current

    def _take_attribute_block(self, element: Element, pattern: re.Pattern[str]) -> None:
        """Move a trailing ``{#id .class}`` from the header text to attributes."""
        handler = element.handler
        assert handler is not None and isinstance(handler.argument, str)
        match = pattern.search(handler.argument)
        if match:
            element.attributes = self._parse_attribute_data(match.group(1))
            handler.argument = handler.argument[: match.start()]

    # =========================================================================
    # Rule
    # =========================================================================

    def _start_rule(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        marker = line.text[0]
        if line.text.count(marker) >= 3 and line.text.rstrip(" " + marker) == "":
            return Block(type=BlockType.RULE, element=Element(name="hr"))
        return None

    # =========================================================================
    # Block quote
    # =========================================================================

    def _start_quote(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        match = _QUOTE.match(line.text)
        if match is None:
            return None
        return Block(
            type=BlockType.QUOTE,
            element=Element(
                name="blockquote",
                handler=DeferredParse(ParseKind.LINES, [match.group(1)]),
            ),
        )

    def _continue_quote(self, line: Line, block: Block, ctx: ParseContext) -> Block | None:
        if block.interrupted:
            return None
        lines = block.element.handler.argument  # type: ignore[union-attr]
        assert isinstance(lines, list)
        match = _QUOTE.match(line.text) if line.text[0] == ">" else None
        lines.append(match.group(1) if match else line.text)
        return block

    # =========================================================================
    # Link reference definitions
    # =========================================================================

    def _start_reference(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        if "]" not in line.text:
            return None
        match = _REFERENCE.match(line.text)
        if match is None:
            return None
        ctx.define_reference(match.group(1), match.group(2), match.group(3))
        return Block(type=BlockType.REFERENCE, hidden=True)

    # =========================================================================
    # Raw HTML: comments and markup
    # =========================================================================

    def _markup_allowed(self) -> bool:
        return not (self._options.markup_escaped or self._options.safe_mode)

    def _start_comment(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        if not self._markup_allowed() or not line.text.startswith("<!--"):
            return None
        return CommentBlock(
            type=BlockType.COMMENT,
            element=Element(raw_html=line.body, autobreak=True),
            closed="-->" in line.text,
        )

    def _continue_comment(self, line: Line, block: Block, ctx: ParseContext) -> Block | None:
        assert isinstance(block, CommentBlock) and block.element is not None
        if block.closed:
            return None
        block.element.raw_html += "\n" + line.body  # type: ignore[operator]
        if "-->" in line.text:
            block.closed = True
        return block

    def _start_markup(self, line: Line, current: Block | None, ctx: ParseContext) -> Block | None:
        if not self._markup_allowed():
            return None
        if self._options.extra:
            return self._start_markup_extra(line)

        match = _MARKUP_OPEN.match(line.text)
        if match is None or match.group(1).lower() in TEXT_LEVEL_ELEMENTS:
            return None
        return MarkupBlock(
            type=BlockType.MARKUP,
            element=Element(raw_html=line.text, autobreak=True),
            name=match.group(1),
        )

    def _start_markup_extra(self, line: Line) -> Block | None:
        """Block tag that tracks nesting so it can span blank lines."""
        match = _MARKUP_OPEN_EXTRA.match(line.text)
        if match is None:
            return None
        name = match.group(1)
        if name.lower() in TEXT_LEVEL_ELEMENTS:
            return None

        block = MarkupBlock(
            type=BlockType.MARKUP,
            element=Element(raw_html=line.text, autobreak=True),
            name=name,
        )
        self_closing = match.group(2) is not None or name in VOID_ELEMENTS
        remainder = line.text[match.end() :]
        if trim(remainder) == "":
            if self_closing:
                block.closed = True
                block.void = True
        else:
            if self_closing:
                return None
            if re.search(r"</" + re.escape(name) + r">[ ]*$", remainder, re.IGNORECASE):
                block.closed = True
        return block

    def _continue_markup(self, line: Line, block: Block, ctx: ParseContext) -> Block | None:
        assert isinstance(block, MarkupBlock) and block.element is not None
        if self._options.extra:
            return self._continue_markup_extra(line, block)
        if block.closed or block.interrupted:
            return None
        block.element.raw_html += "\n" + line.body  # type: ignore[operator]
        return block

    def _continue_markup_extra(self, line: Line, block: MarkupBlock) -> Block | None:
        if block.closed:
            return None
        assert block.element is not None and block.element.raw_html is not None

        name = re.escape(block.name)
        if re.match(r"^<" + name + r"(?:[ ]*+" + HTML_ATTRIBUTE + r")*+[ ]*+>", line.text, re.IGNORECASE):
            block.depth += 1
        if re.search(r"</" + name + r">[ ]*$", line.text, re.IGNORECASE):
            if block.depth > 0:
                block.depth -= 1
            else:
                block.closed = True

        if block.interrupted:
            block.element.raw_html += "\n"
            block.interrupted = 0
        block.element.raw_html += "\n" + line.body
        return block

    def _complete_markup(self, block: Block, ctx: ParseContext) -> Block:
        assert isinstance(block, MarkupBlock)
        if self._options.extra and not block.void and block.element is not None:
            # Nested Markdown is spliced in at render time, after all definitions
            block.element.handler = DeferredParse(ParseKind.SPLICE, block.element.raw_html or "")
            block.element.raw_html = None
        return block
