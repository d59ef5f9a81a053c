"""
Sideways: Markdown to HTML in one pass

A Parsedown-style Markdown converter: a line-oriented block segmenter, a
marker-driven inline tokenizer and an HTML renderer, with an optional
"extra" mode adding footnotes, definition lists, abbreviations, attribute
blocks and Markdown inside raw HTML. Zero runtime dependencies.

Quick Start:
    >>> from sideways import render
    >>> render("# Hello, *World*!")
    '<h1>Hello, <em>World</em>!</h1>'

    >>> # Reusable engine with options
    >>> from sideways import Sideways
    >>> engine = Sideways(safe_mode=True)
    >>> engine.render("[x](javascript:alert(1))")
    '<p><a href="javascript%3Aalert(1)">x</a></p>'

    >>> # Context-scoped defaults
    >>> from sideways import RenderOptions, render_options_context
    >>> with render_options_context(RenderOptions(extra=True)):
    ...     html = render("*[HTML]: Hyper Text Markup Language\\n\\nHTML rocks")
"""

from typing import Any

from sideways.config import (
    RenderOptions,
    get_render_options,
    render_options_context,
    reset_render_options,
    set_render_options,
)
from sideways.context import ParseContext
from sideways.elements import DeferredParse, Element, ParseKind, SpanType
from sideways.engine import Sideways
from sideways.errors import ConfigError, SidewaysError

__version__ = "0.1.0"


def render(text: str, options: RenderOptions | None = None, **overrides: Any) -> str:
    """Render a Markdown document to HTML.

    Args:
        text: Markdown source (already decoded)
        options: Render options (defaults to the context's options)
        **overrides: Individual option values, e.g. ``extra=True``

    Returns:
        HTML string without surrounding newlines

    Raises:
        ConfigError: If an override is unknown or has an invalid value.

    Example:
        >>> render("Hello  \\nWorld")
        '<p>Hello<br />\\nWorld</p>'
    """
    return Sideways(options, **overrides).render(text)


__all__ = [
    "ConfigError",
    "DeferredParse",
    "Element",
    "ParseContext",
    "ParseKind",
    "RenderOptions",
    "Sideways",
    "SidewaysError",
    "SpanType",
    "__version__",
    "get_render_options",
    "render",
    "render_options_context",
    "reset_render_options",
    "set_render_options",
]
