"""Safe-mode sanitization of output elements.

Applied by the renderer to every element before it is written when
``safe_mode`` is on:

- ``<a href>`` and ``<img src>`` keep their value only when it starts with
  an allowed scheme; otherwise every ``:`` becomes ``%3A`` so no scheme can
  be recognized (``javascript:alert(1)`` -> ``javascript%3Aalert(1)``).
- Attribute names that are malformed or start with ``on`` are dropped.
- Nameless elements lose all attributes.

Example:
    >>> from sideways.sanitize import filter_unsafe_url
    >>> filter_unsafe_url("javascript:alert(1)")
    'javascript%3Aalert(1)'
"""

from __future__ import annotations

import re

from sideways.elements import Element
from sideways.parsing.charsets import SAFE_URL_PREFIXES
from sideways.utils.text import starts_with_ignore_case

_GOOD_ATTRIBUTE = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9_-]*+")

# Element name -> attribute holding a URL
_URL_ATTRIBUTES = {"a": "href", "img": "src"}


def _is_safe_url(url: str) -> bool:
    return any(starts_with_ignore_case(url, prefix) for prefix in SAFE_URL_PREFIXES)


def _keep_attribute(name: str) -> bool:
    """Drop badly parsed names and event handlers."""
    return _GOOD_ATTRIBUTE.fullmatch(name) is not None and not starts_with_ignore_case(name, "on")


def filter_unsafe_url(url: str) -> str:
    """Neutralize a URL whose scheme is not on the allow-list."""
    if _is_safe_url(url):
        return url
    return url.replace(":", "%3A")


def sanitize_element(element: Element) -> Element:
    """Sanitize one element's attributes in place (children are not visited)."""
    if element.name is None:
        element.attributes = None
        return element

    attributes = element.attributes
    if not attributes:
        return element

    url_attribute = _URL_ATTRIBUTES.get(element.name)
    if url_attribute is not None:
        url = attributes.get(url_attribute)
        if url is not None:
            attributes[url_attribute] = filter_unsafe_url(url)

    element.attributes = {
        name: value for name, value in attributes.items() if _keep_attribute(name)
    }
    return element
