"""Block segmentation mixins for Sideways.

Modules:
    core: Segmenter loop, paragraphs, headers, rules, code, quotes,
        references, raw HTML blocks
    list: Bullet and ordered lists
    table: Pipe tables
    extra: Footnotes, definition lists, abbreviations, attribute blocks
    state: Block state dataclasses
"""

from sideways.parsing.blocks.core import BlockParsingCoreMixin
from sideways.parsing.blocks.extra import ExtraBlockParsingMixin
from sideways.parsing.blocks.list import ListParsingMixin
from sideways.parsing.blocks.table import TableParsingMixin
from sideways.parsing.blocks.state import Block


class BlockParsingMixin(
    BlockParsingCoreMixin,
    ListParsingMixin,
    TableParsingMixin,
    ExtraBlockParsingMixin,
):
    """Combined block segmentation mixin."""


__all__ = [
    "Block",
    "BlockParsingCoreMixin",
    "BlockParsingMixin",
    "ExtraBlockParsingMixin",
    "ListParsingMixin",
    "TableParsingMixin",
]
