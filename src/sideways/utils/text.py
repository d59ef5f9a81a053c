"""Text processing utilities for Sideways.

Provides the escaping and trimming primitives shared by the block segmenter,
the inline tokenizer and the renderer.

Example:
    >>> from sideways.utils.text import escape_html
    >>> escape_html('<a href="x">')
    '&lt;a href=&quot;x&quot;&gt;'
"""

from __future__ import annotations

import html as html_module

# Characters stripped by the line-oriented trim helpers (no Unicode spaces)
TRIM_CHARS = " \t\n\r\0\x0b"


def escape_html(text: str, allow_quotes: bool = False) -> str:
    """Escape HTML special characters.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot; (unless allow_quotes)
    - ' becomes &#039; (unless allow_quotes)

    Args:
        text: Text to escape
        allow_quotes: Keep quote characters as-is (element text content)

    Returns:
        HTML-escaped text

    Examples:
        >>> escape_html("<b>it's</b>")
        '&lt;b&gt;it&#039;s&lt;/b&gt;'
        >>> escape_html('"quoted"', allow_quotes=True)
        '"quoted"'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=False)
    if allow_quotes:
        return escaped
    return escaped.replace('"', "&quot;").replace("'", "&#039;")


def trim(text: str, chars: str = TRIM_CHARS) -> str:
    """Strip ``chars`` from both ends (ASCII whitespace by default)."""
    return text.strip(chars)


def rtrim(text: str, chars: str = TRIM_CHARS) -> str:
    """Strip ``chars`` from the right end (ASCII whitespace by default)."""
    return text.rstrip(chars)


def span_length(text: str, chars: str, start: int = 0) -> int:
    """Length of the leading run of ``text[start:]`` made only of ``chars``.

    Examples:
        >>> span_length("###  Title", "#")
        3
        >>> span_length("    code", " ")
        4
    """
    end = start
    text_len = len(text)
    while end < text_len and text[end] in chars:
        end += 1
    return end - start


def starts_with_ignore_case(text: str, prefix: str) -> bool:
    """Case-insensitive prefix test."""
    return len(prefix) <= len(text) and text[: len(prefix)].lower() == prefix.lower()
