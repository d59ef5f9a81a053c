"""Core inline tokenization for Sideways.

Scans a text run for the first marker character, offers the excerpt that
starts there to the recognizers registered for that marker, and splits the
run into plain text and span elements.

Recognizer signature (bound by the engine in its dispatch table):
    recognizer(excerpt, ctx) -> Span | None

Thread Safety:
    Recognizers read definitions from the ParseContext argument and return
    fresh elements. Engine instances can be shared.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from sideways.elements import Element, SpanType, apply_depth_first, replace_elements
from sideways.lines import normalize_newlines
from sideways.parsing.charsets import INLINE_MARKER_PATTERN

if TYPE_CHECKING:
    from sideways.config import RenderOptions
    from sideways.context import ParseContext

# Hard breaks: two trailing spaces or a trailing backslash, or any newline
# when breaks are enabled
_HARD_BREAK = re.compile(r"(?:[ ]*+\\|[ ]{2,}+)\n")
_ANY_BREAK = re.compile(r"[ ]*+\n")


@dataclass(frozen=True, slots=True)
class Excerpt:
    """What a recognizer sees.

    Attributes:
        text: Remaining text, starting at the marker
        context: The whole remaining text run (bare URLs search it)
        brackets: Balanced ``[...]`` lengths, see :func:`bracket_extents`
    """

    text: str
    context: str
    brackets: Mapping[int, int]


@dataclass(slots=True)
class Span:
    """A recognizer match.

    Attributes:
        extent: Number of characters consumed from ``position``
        element: The produced element
        position: Start offset in the context; None means the marker position
    """

    extent: int
    element: Element
    position: int | None = None


SpanRecognizer = Callable[[Excerpt, "ParseContext"], Span | None]


def bracket_extents(run: str) -> dict[int, int]:
    """Length of the balanced ``[...]`` opening at each ``[`` of a text run.

    Keys count from the end of the run, so the table holds for every suffix
    the scanner slices off it: an excerpt looks itself up by ``len(text)``.
    """
    extents: dict[int, int] = {}
    openers: list[int] = []
    for index, char in enumerate(run):
        if char == "[":
            openers.append(index)
        elif char == "]" and openers:
            opener = openers.pop()
            extents[len(run) - opener] = index - opener + 1
    return extents


def _line_break() -> list[Element]:
    return [Element(name="br"), Element(text="\n")]


def _insert_abbreviation(term: str, meaning: str, element: Element) -> Element:
    """Wrap whole-word occurrences of ``term`` in a text leaf with ``<abbr>``."""
    if element.text is None:
        return element
    pattern = re.compile(r"\b" + re.escape(term) + r"\b")
    element.children = replace_elements(
        pattern,
        lambda: [Element(name="abbr", attributes={"title": meaning}, text=term)],
        element.text,
    )
    element.text = None
    return element


class InlineParsingCoreMixin:
    """Marker scanner and plain-text compilation.

    Required Host Attributes:
        - _options: RenderOptions
        - _span_types: dict[str, tuple[SpanType, ...]]
        - _span_recognizers: dict[SpanType, SpanRecognizer]

    """

    _options: RenderOptions
    _span_types: dict[str, tuple[SpanType, ...]]
    _span_recognizers: dict[SpanType, SpanRecognizer]

    def _line_elements(
        self,
        text: str,
        non_nestables: frozenset[SpanType],
        ctx: ParseContext,
    ) -> list[Element | None]:
        """Tokenize one text run into plain-text and span elements.

        Span types in ``non_nestables`` are not tried; produced elements
        inherit the set so the restriction holds at every depth.
        """
        text = normalize_newlines(text)
        elements: list[Element | None] = []
        brackets = bracket_extents(text) if "[" in text else {}

        while (found := INLINE_MARKER_PATTERN.search(text)) is not None:
            marker_position = found.start()
            excerpt = Excerpt(text=text[marker_position:], context=text, brackets=brackets)

            for span_type in self._span_types.get(text[marker_position], ()):
                if span_type in non_nestables:
                    continue
                span = self._span_recognizers[span_type](excerpt, ctx)
                if span is None:
                    continue
                # The match must belong to this marker, not a later one
                if span.position is not None and span.position > marker_position:
                    continue

                position = marker_position if span.position is None else span.position
                span.element.non_nestables = span.element.non_nestables | non_nestables
                elements.append(self._inline_text(text[:position], ctx))
                elements.append(span.element)
                text = text[position + span.extent :]
                break
            else:
                elements.append(self._inline_text(text[: marker_position + 1], ctx))
                text = text[marker_position + 1 :]

        elements.append(self._inline_text(text, ctx))

        for element in elements:
            if element is not None and element.autobreak is None:
                element.autobreak = False
        return elements

    def _inline_text(self, text: str, ctx: ParseContext) -> Element:
        """Plain text with line breaks and, in extra mode, abbreviations."""
        pattern = _ANY_BREAK if self._options.breaks_enabled else _HARD_BREAK
        element = Element(children=replace_elements(pattern, _line_break, text))

        if self._options.extra:
            for term, meaning in ctx.abbreviations.items():
                element = apply_depth_first(element, partial(_insert_abbreviation, term, meaning))
        return element
