"""Inline tokenization subsystem for Sideways.

Provides mixins for recognizing inline Markdown spans:
- Emphasis and strong (*, _)
- Strikethrough (~~)
- Code spans (`)
- Links, images and footnote markers
- Escapes, entities, autolinks and inline HTML

Architecture:
Each span type is a recognizer method ``_inline_<type>(excerpt, ctx)``.
The engine binds them into a marker-indexed dispatch table once; the core
scanner walks the text marker by marker.

"""

from __future__ import annotations

from sideways.parsing.inline.core import Excerpt, InlineParsingCoreMixin, Span, SpanRecognizer
from sideways.parsing.inline.emphasis import EmphasisMixin
from sideways.parsing.inline.links import LinkParsingMixin
from sideways.parsing.inline.special import SpecialInlineMixin


class InlineParsingMixin(
    InlineParsingCoreMixin,
    EmphasisMixin,
    LinkParsingMixin,
    SpecialInlineMixin,
):
    """Combined inline tokenization mixin.

    Required Host Attributes:
        - _options: RenderOptions
        - _span_types: dict[str, tuple[SpanType, ...]]
        - _span_recognizers: dict[SpanType, SpanRecognizer]

    Required Host Methods:
        - _parse_attribute_data(attribute_string) -> dict[str, str | None]

    """

    pass


__all__ = [
    "EmphasisMixin",
    "Excerpt",
    "InlineParsingCoreMixin",
    "InlineParsingMixin",
    "LinkParsingMixin",
    "Span",
    "SpanRecognizer",
    "SpecialInlineMixin",
]
