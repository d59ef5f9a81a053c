"""ContextVar-based render configuration for Sideways.

Provides thread-local default options using Python's ContextVars (PEP 567).
Engines built without explicit options, and the module-level ``render()``,
read the options active in the current context.

Usage:
    # Explicit options
    from sideways import Sideways, RenderOptions

    engine = Sideways(RenderOptions(extra=True))
    html = engine.render("Term\\n: Definition")

    # Context-scoped defaults
    from sideways.config import render_options_context

    with render_options_context(RenderOptions(safe_mode=True)):
        html = render("[x](javascript:alert(1))")

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
from typing import Any

from sideways.errors import ConfigError


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Immutable render configuration.

    Attributes:
        breaks_enabled: Soft line breaks become ``<br />``
        markup_escaped: Raw HTML in the source is escaped instead of passed through
        urls_linked: Bare ``http(s)://`` URLs are auto-linked
        safe_mode: Sanitize attributes/URLs and escape raw HTML (untrusted input)
        strict_mode: ATX headers need a space after the hashes
        extra: Enable footnotes, definition lists, abbreviations, attribute
            blocks and ``markdown="1"`` splicing
        max_nesting_depth: Bound on nested deferred parses (quotes, lists,
            emphasis, raw-HTML splicing); deeper content renders as text

    """

    breaks_enabled: bool = False
    markup_escaped: bool = False
    urls_linked: bool = True
    safe_mode: bool = False
    strict_mode: bool = False
    extra: bool = False
    max_nesting_depth: int = 32

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "max_nesting_depth":
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError(f.name, f"expected int, got {type(value).__name__}")
                if value < 1:
                    raise ConfigError(f.name, f"must be at least 1, got {value}")
            elif not isinstance(value, bool):
                raise ConfigError(f.name, f"expected bool, got {type(value).__name__}")

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> RenderOptions:
        """Create RenderOptions from a dictionary.

        Only includes keys that are valid RenderOptions fields; unknown keys
        are silently ignored.

        Example:
            >>> options = RenderOptions.from_dict({"extra": True, "theme": "dark"})
            >>> options.extra
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def with_overrides(self, **overrides: Any) -> RenderOptions:
        """Return a copy with ``overrides`` applied.

        Raises:
            ConfigError: If an override names an unknown option.
        """
        if not overrides:
            return self
        valid_fields = {f.name for f in fields(self)}
        for name in overrides:
            if name not in valid_fields:
                raise ConfigError(name, "unknown option")
        return replace(self, **overrides)


# Module-level default options (reused, never recreated)
_DEFAULT_OPTIONS: RenderOptions = RenderOptions()

_render_options: ContextVar[RenderOptions] = ContextVar(
    "render_options",
    default=_DEFAULT_OPTIONS,
)


def get_render_options() -> RenderOptions:
    """Get the render options active in the current context."""
    return _render_options.get()


def set_render_options(options: RenderOptions) -> None:
    """Set the render options for the current context."""
    _render_options.set(options)


def reset_render_options() -> None:
    """Reset to the default options."""
    _render_options.set(_DEFAULT_OPTIONS)


@contextmanager
def render_options_context(options: RenderOptions) -> Iterator[None]:
    """Context manager for temporary option changes.

    Restores the previous options even if an exception is raised.

    Example:
        >>> with render_options_context(RenderOptions(extra=True)):
        ...     get_render_options().extra
        True
    """
    previous = _render_options.get()
    _render_options.set(options)
    try:
        yield
    finally:
        _render_options.set(previous)


__all__ = [
    "RenderOptions",
    "get_render_options",
    "set_render_options",
    "reset_render_options",
    "render_options_context",
]
