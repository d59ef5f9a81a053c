"""The Sideways Markdown engine.

Combines the block segmenter, inline tokenizer, raw-HTML splicer and HTML
renderer into one object, and binds their handler methods into per-engine
dispatch tables.

Architecture:
The engine uses a mixin-based design for separation of concerns:
- `BlockParsingMixin`: Lines to block elements
- `InlineParsingMixin`: Text runs to span elements
- `MarkupSplicingMixin`: Markdown inside raw HTML blocks (extra mode)
- `HtmlRenderingMixin`: Deferred parse resolution and HTML output

Handlers are looked up by name (``_start_<type>``, ``_continue_<type>``,
``_complete_<type>``, ``_inline_<type>``) once, in the constructor, so a
subclass can override any single handler.

Thread Safety:
- Options and dispatch tables are immutable after construction
- Per-document state lives in a ParseContext created by each render call
- Safe to share one engine across threads

"""

from __future__ import annotations

import threading
from typing import Any, ClassVar

from sideways.config import RenderOptions, get_render_options
from sideways.context import ParseContext
from sideways.elements import SpanType
from sideways.parsing import (
    BlockParsingMixin,
    BlockType,
    InlineParsingMixin,
    MarkupSplicingMixin,
    block_types_for,
    span_types_for,
)
from sideways.parsing.blocks.core import CompleteHandler, ContinueHandler, StartHandler
from sideways.parsing.inline import SpanRecognizer
from sideways.renderers import HtmlRenderingMixin
from sideways.utils.logger import get_logger

logger = get_logger(__name__)


class Sideways(
    BlockParsingMixin,
    InlineParsingMixin,
    MarkupSplicingMixin,
    HtmlRenderingMixin,
):
    """Markdown to HTML converter.

    Usage:
            >>> engine = Sideways()
            >>> engine.render("# Hello **World**")
            '<h1>Hello <strong>World</strong></h1>'

            >>> Sideways(extra=True).render("Term\\n: Definition")
            '<dl>\\n<dt>Term</dt>\\n<dd>Definition</dd>\\n</dl>'

    Configuration:
        Options come from the ``options`` argument, or from the options
        active in the current context (see ``sideways.config``) when it is
        omitted. Keyword overrides are applied on top of either.

    """

    __slots__ = (
        "_options",
        "_block_types",
        "_block_start",
        "_block_continue",
        "_block_complete",
        "_span_types",
        "_span_recognizers",
    )

    _instances: ClassVar[dict[tuple[type, str], Sideways]] = {}
    _instances_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, options: RenderOptions | None = None, **overrides: Any) -> None:
        """Initialize the engine.

        Args:
            options: Render options (defaults to the context's options)
            **overrides: Individual option values, e.g. ``safe_mode=True``

        Raises:
            ConfigError: If an override is unknown or has an invalid value.
        """
        base = options if options is not None else get_render_options()
        self._options = base.with_overrides(**overrides)

        self._block_types = block_types_for(self._options.extra)
        self._span_types = span_types_for(self._options.extra)
        self._bind_handlers()

    def _bind_handlers(self) -> None:
        start: dict[BlockType, StartHandler] = {}
        continue_: dict[BlockType, ContinueHandler] = {}
        complete: dict[BlockType, CompleteHandler] = {}

        for block_type in BlockType:
            suffix = block_type.name.lower()
            if (handler := getattr(self, f"_start_{suffix}", None)) is not None:
                start[block_type] = handler
            if (handler := getattr(self, f"_continue_{suffix}", None)) is not None:
                continue_[block_type] = handler
            if (handler := getattr(self, f"_complete_{suffix}", None)) is not None:
                complete[block_type] = handler

        recognizers: dict[SpanType, SpanRecognizer] = {
            span_type: getattr(self, f"_inline_{span_type.name.lower()}") for span_type in SpanType
        }

        self._block_start = start
        self._block_continue = continue_
        self._block_complete = complete
        self._span_recognizers = recognizers

    @property
    def options(self) -> RenderOptions:
        return self._options

    # =========================================================================
    # Public API
    # =========================================================================

    def render(self, text: str) -> str:
        """Convert a Markdown document to HTML.

        Never raises on Markdown input: anything unrecognised is text.
        """
        logger.debug("Rendering %d characters (extra=%s)", len(text), self._options.extra)
        return self._render_document(text, ParseContext())

    def text(self, text: str) -> str:
        """Alias of render()."""
        return self.render(text)

    def parse(self, text: str) -> str:
        """Alias of render()."""
        return self.render(text)

    __call__ = render

    def line(self, text: str) -> str:
        """Convert a single run of inline Markdown (no block structure)."""
        ctx = ParseContext()
        return self._elements(self._line_elements(text, frozenset(), ctx), ctx)

    @classmethod
    def instance(cls, name: str = "default") -> Sideways:
        """Shared engine registered under ``name``, created with default options."""
        key = (cls, name)
        with cls._instances_lock:
            engine = cls._instances.get(key)
            if engine is None:
                engine = cls(RenderOptions())
                cls._instances[key] = engine
        return engine

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._options!r})"
