"""Element tree produced by the block segmenter and inline tokenizer.

Elements are mutable: block handlers keep appending lines to a deferred
argument until the block closes, and the renderer replaces a deferred parse
with its result in place.

Content fields (the renderer uses the first one that is set):
    children    A list of nested elements (``None`` entries are hidden)
    child       A single nested element
    text        Plain text, escaped on output
    raw_html    Markup emitted verbatim unless safe mode forbids it
    handler     A DeferredParse resolved at render time

"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto


class ParseKind(Enum):
    """What a deferred parse runs over its argument."""

    INLINE = auto()
    LINES = auto()
    LIST_ITEM = auto()
    SPLICE = auto()


class SpanType(Enum):
    """Inline recognizer types, used for non-nesting rules."""

    CODE = "Code"
    EMAIL_TAG = "EmailTag"
    EMPHASIS = "Emphasis"
    ESCAPE_SEQUENCE = "EscapeSequence"
    FOOTNOTE_MARKER = "FootnoteMarker"
    IMAGE = "Image"
    LINK = "Link"
    MARKUP = "Markup"
    SPECIAL_CHARACTER = "SpecialCharacter"
    STRIKETHROUGH = "Strikethrough"
    URL = "Url"
    URL_TAG = "UrlTag"


@dataclass(slots=True)
class DeferredParse:
    """A parse postponed until the owning element is rendered.

    INLINE, LINES and LIST_ITEM results become the element's children;
    SPLICE (raw HTML with Markdown inside) becomes its raw_html.

    Attributes:
        kind: Which parse to run
        argument: Text, or already-split lines for block parses
    """

    kind: ParseKind
    argument: str | list[str]


@dataclass(slots=True)
class Element:
    """A node of the output tree.

    ``name=None`` makes a transparent element: no tag, only content.
    ``autobreak=None`` means "break around me if I have a name".
    """

    name: str | None = None
    attributes: dict[str, str | None] | None = None
    text: str | None = None
    raw_html: str | None = None
    child: Element | None = None
    children: list[Element | None] | None = None
    handler: DeferredParse | None = None
    autobreak: bool | None = None
    non_nestables: frozenset[SpanType] = field(default_factory=frozenset)
    allow_raw_html_in_safe_mode: bool = False


def inline_element(
    name: str | None, text: str, attributes: dict[str, str | None] | None = None
) -> Element:
    """Element whose content is the inline parse of ``text``."""
    return Element(
        name=name, attributes=attributes, handler=DeferredParse(ParseKind.INLINE, text)
    )


def apply_depth_first(element: Element, fn: Callable[[Element], Element]) -> Element:
    """Rewrite ``element`` bottom-up: children first, then the node itself."""
    if element.children is not None:
        element.children = [
            apply_depth_first(child, fn) if child is not None else None
            for child in element.children
        ]
    elif element.child is not None:
        element.child = apply_depth_first(element.child, fn)
    return fn(element)


def replace_elements(
    pattern: re.Pattern[str], replacement: Callable[[], list[Element]], text: str
) -> list[Element | None]:
    """Split ``text`` on ``pattern``, putting fresh replacement elements at each match.

    Text runs (possibly empty) become text elements:

        >>> [e.text or e.name for e in replace_elements(re.compile("b"), lambda: [Element(name="br")], "abc")]
        ['a', 'br', 'c']
    """
    result: list[Element | None] = []
    pos = 0
    for match in pattern.finditer(text):
        result.append(Element(text=text[pos : match.start()]))
        result.extend(replacement())
        pos = match.end()
    result.append(Element(text=text[pos:]))
    return result
