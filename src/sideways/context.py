"""Per-document definition table for Sideways.

The block segmenter writes link references, footnote definitions and
abbreviations here; render-time inline resolution reads them. Because every
deferred inline parse runs after the whole block pass, a definition placed
anywhere in the document is visible to every use.

A ParseContext is created fresh by each top-level render call and passed
explicitly through the segmenter, tokenizer and renderer. Engine instances
hold no per-document state, so one engine can render many documents.

"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Reference:
    """Link reference definition: ``[id]: url "title"``."""

    url: str
    title: str | None = None


@dataclass(slots=True)
class Footnote:
    """Footnote definition and its usage counters.

    Attributes:
        text: Raw Markdown body
        count: Number of ``[^label]`` markers rendered so far
        number: Display number, assigned on first reference
    """

    text: str
    count: int = 0
    number: int | None = None


@dataclass(slots=True)
class ParseContext:
    """Mutable state owned by one top-level render call.

    Attributes:
        references: Lower-cased reference id -> Reference
        footnotes: Footnote label -> Footnote (definition order)
        abbreviations: Term -> meaning (declaration order)
        footnote_count: Last footnote number handed out
        depth: Current nesting depth of deferred parses
    """

    references: dict[str, Reference] = field(default_factory=dict)
    footnotes: dict[str, Footnote] = field(default_factory=dict)
    abbreviations: dict[str, str] = field(default_factory=dict)
    footnote_count: int = 0
    depth: int = 0

    def define_reference(self, label: str, url: str, title: str | None = None) -> None:
        """Register a link reference; labels are case-insensitive, last wins."""
        self.references[label.lower()] = Reference(url=url, title=title)

    def lookup_reference(self, label: str) -> Reference | None:
        return self.references.get(label.lower())

    def define_footnote(self, label: str, text: str) -> None:
        self.footnotes[label] = Footnote(text=text)

    def reference_footnote(self, label: str) -> Footnote | None:
        """Record one use of footnote ``label``.

        Increments the use count and assigns the next display number on the
        first use. Returns None for undefined labels.
        """
        footnote = self.footnotes.get(label)
        if footnote is None:
            return None
        footnote.count += 1
        if footnote.number is None:
            self.footnote_count += 1
            footnote.number = self.footnote_count
        return footnote

    def referenced_footnotes(self) -> list[tuple[str, Footnote]]:
        """Footnotes used at least once, ordered by display number."""
        used = [(label, fn) for label, fn in self.footnotes.items() if fn.number is not None]
        return sorted(used, key=lambda item: item[1].number or 0)

    def define_abbreviation(self, term: str, meaning: str) -> None:
        self.abbreviations[term] = meaning
