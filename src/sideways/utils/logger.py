"""Logger lookup for Sideways modules.

Every module logs under the ``sideways`` namespace, so one
``logging.getLogger("sideways")`` configures the whole engine:

- ``sideways.engine``: one debug record per top-level render
- ``sideways.renderers.html``: a warning when a deferred parse is cut off
  at ``max_nesting_depth``
- ``sideways.parsing.html``: the same warning for nested raw HTML splicing

Example:
    >>> import logging
    >>> logging.getLogger("sideways").setLevel(logging.WARNING)
"""

from __future__ import annotations

import logging

_ROOT = "sideways"


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, placed under the ``sideways`` namespace.

    Module names inside the package are used as-is; anything else is
    prefixed, so ``get_logger("readme")`` is ``sideways.readme``.
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
