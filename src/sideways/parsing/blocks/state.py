"""Block state carried by the segmenter between lines.

One dataclass per block family. The base Block covers the types that need
nothing beyond an element (paragraphs, headers, rules, code, quotes,
references); the subclasses add the state their continue handlers need.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from sideways.elements import Element
from sideways.parsing.dispatch import BlockType


@dataclass(slots=True)
class Block:
    """A block under construction.

    Attributes:
        type: Block type tag (may change, e.g. Paragraph -> SetextHeader)
        element: Output element, None for hidden blocks
        continuable: The segmenter should offer the next line to this block
        identified: The block replaced the previous block instead of following it
        interrupted: Blank lines seen since the last accepted line
        hidden: The block produces no output
    """

    type: BlockType
    element: Element | None = None
    continuable: bool = False
    identified: bool = False
    interrupted: int = 0
    hidden: bool = False


@dataclass(slots=True)
class FencedCodeBlock(Block):
    char: str = "`"
    opener_length: int = 3
    complete: bool = False
    trimmed: bool = False


@dataclass(slots=True)
class CommentBlock(Block):
    closed: bool = False


@dataclass(slots=True)
class MarkupBlock(Block):
    name: str = ""
    depth: int = 0
    closed: bool = False
    void: bool = False


@dataclass(slots=True)
class ListBlock(Block):
    """List state.

    Attributes:
        indent: Indent of the current item's marker line
        list_type: "ul" or "ol"
        marker: Marker including its trailing spaces (sets the content indent)
        marker_type: "-", "*", "+" for ul; "." or ")" for ol
        item: Element of the item currently receiving lines
        loose: A blank line separated items or item content
    """

    indent: int = 0
    list_type: str = "ul"
    marker: str = ""
    marker_type: str = ""
    item: Element | None = None
    loose: bool = False


@dataclass(slots=True)
class TableBlock(Block):
    alignments: list[str | None] = field(default_factory=list)


@dataclass(slots=True)
class FootnoteBlock(Block):
    label: str = ""
    text: str = ""


@dataclass(slots=True)
class DefinitionListBlock(Block):
    definition: Element | None = None
