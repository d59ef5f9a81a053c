"""Exception classes for Sideways.

Markdown input never raises: malformed input degrades to literal text.
These exceptions cover misuse of the API (bad options).
"""

from __future__ import annotations


class SidewaysError(Exception):
    """Base exception for all Sideways errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(SidewaysError):
    """Invalid render configuration.

    Raised when an option has the wrong type or an out-of-range value,
    or when an unknown option name is passed as a keyword override.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize config error.

        Args:
            option: Name of the offending option (e.g., "max_nesting_depth")
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Option '{option}': {message}")
