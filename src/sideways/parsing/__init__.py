"""Parsing subsystem for Sideways.

Provides mixin classes for modular parsing functionality:
- `BlockParsingMixin`: Line segmentation into blocks (paragraphs, lists, tables)
- `InlineParsingMixin`: Span recognition (emphasis, links, code spans)
- `MarkupSplicingMixin`: Markdown inside raw HTML blocks (extra mode)

Architecture:
Each mixin handles one aspect of the grammar; the engine combines them and
binds their handler methods into dispatch tables.

Example:
    >>> from sideways.parsing import BlockParsingMixin, InlineParsingMixin
    >>> class Engine(BlockParsingMixin, InlineParsingMixin):
    ...     pass

"""

from sideways.parsing.blocks import BlockParsingMixin
from sideways.parsing.dispatch import BlockType, block_types_for, span_types_for
from sideways.parsing.html import MarkupSplicingMixin
from sideways.parsing.inline import InlineParsingMixin

__all__ = [
    "BlockParsingMixin",
    "BlockType",
    "InlineParsingMixin",
    "MarkupSplicingMixin",
    "block_types_for",
    "span_types_for",
]
