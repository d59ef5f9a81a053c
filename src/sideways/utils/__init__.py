"""Utility modules for Sideways.

Provides:
- text: escape_html and the trim/span helpers used by the engine
- logger: get_logger for logging
"""

from sideways.utils.logger import get_logger
from sideways.utils.text import escape_html, rtrim, span_length, starts_with_ignore_case, trim

__all__ = [
    "escape_html",
    "get_logger",
    "rtrim",
    "span_length",
    "starts_with_ignore_case",
    "trim",
]
