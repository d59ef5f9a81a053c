"""Dispatch tables for the block segmenter and the inline tokenizer.

Block and span types form closed enums. Which types are tried for a given
marker character, and in which order, is decided once per engine by
``block_types_for`` / ``span_types_for``; the engine then binds each type to
its start/continue/complete (or span) handler method.

Thread Safety:
    Tables are built from immutable module data; the returned mappings are
    owned by the engine that built them and never mutated afterwards.

"""

from __future__ import annotations

from enum import Enum

from sideways.elements import SpanType


class BlockType(Enum):
    """Block types recognised by the segmenter."""

    ABBREVIATION = "Abbreviation"
    CODE = "Code"
    COMMENT = "Comment"
    DEFINITION_LIST = "DefinitionList"
    FENCED_CODE = "FencedCode"
    FOOTNOTE = "Footnote"
    HEADER = "Header"
    LIST = "List"
    MARKUP = "Markup"
    PARAGRAPH = "Paragraph"
    QUOTE = "Quote"
    REFERENCE = "Reference"
    RULE = "Rule"
    SETEXT_HEADER = "SetextHeader"
    TABLE = "Table"


# Types tried on every line regardless of its first character
UNMARKED_BLOCK_TYPES: tuple[BlockType, ...] = (BlockType.CODE,)

_BLOCK_TYPES: dict[str, tuple[BlockType, ...]] = {
    "#": (BlockType.HEADER,),
    "*": (BlockType.RULE, BlockType.LIST),
    "+": (BlockType.LIST,),
    "-": (BlockType.SETEXT_HEADER, BlockType.TABLE, BlockType.RULE, BlockType.LIST),
    ":": (BlockType.TABLE,),
    "<": (BlockType.COMMENT, BlockType.MARKUP),
    "=": (BlockType.SETEXT_HEADER,),
    ">": (BlockType.QUOTE,),
    "[": (BlockType.REFERENCE,),
    "_": (BlockType.RULE,),
    "`": (BlockType.FENCED_CODE,),
    "|": (BlockType.TABLE,),
    "~": (BlockType.FENCED_CODE,),
    **{digit: (BlockType.LIST,) for digit in "0123456789"},
}

_SPAN_TYPES: dict[str, tuple[SpanType, ...]] = {
    "!": (SpanType.IMAGE,),
    "&": (SpanType.SPECIAL_CHARACTER,),
    "*": (SpanType.EMPHASIS,),
    ":": (SpanType.URL,),
    "<": (SpanType.URL_TAG, SpanType.EMAIL_TAG, SpanType.MARKUP),
    "[": (SpanType.LINK,),
    "_": (SpanType.EMPHASIS,),
    "`": (SpanType.CODE,),
    "~": (SpanType.STRIKETHROUGH,),
    "\\": (SpanType.ESCAPE_SEQUENCE,),
}


def block_types_for(extra: bool) -> dict[str, tuple[BlockType, ...]]:
    """Marker -> block types in priority order.

    Extra mode appends DefinitionList under ``:`` and Abbreviation under
    ``*``, and tries Footnote before Reference under ``[``.
    """
    table = dict(_BLOCK_TYPES)
    if extra:
        table[":"] = (*table[":"], BlockType.DEFINITION_LIST)
        table["*"] = (*table["*"], BlockType.ABBREVIATION)
        table["["] = (BlockType.FOOTNOTE, *table["["])
    return table


def span_types_for(extra: bool) -> dict[str, tuple[SpanType, ...]]:
    """Marker -> span types in priority order.

    Extra mode tries footnote markers before links under ``[``.
    """
    table = dict(_SPAN_TYPES)
    if extra:
        table["["] = (SpanType.FOOTNOTE_MARKER, *table["["])
    return table
