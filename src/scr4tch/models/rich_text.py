"""Styled inline text: the payload of text, quote, heading and list-item content."""

from dataclasses import dataclass, field, replace
from typing import Any

from scr4tch.errors import InvariantViolation

_STYLE_FIELDS = ("bold", "italic", "underline", "strikethrough", "color", "link")


@dataclass(frozen=True)
class Span:
    """A styled range ``[start, end)`` of a run's text.

    ``color`` is an opaque color intent. It is stored and copied but never
    interpreted here.
    """

    start: int
    end: int
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    color: str | None = None
    link: str | None = None

    @property
    def style(self) -> tuple[Any, ...]:
        return tuple(getattr(self, name) for name in _STYLE_FIELDS)

    def shifted(self, offset: int) -> "Span":
        return replace(self, start=self.start + offset, end=self.end + offset)


def _coalesce(spans: list[Span]) -> tuple[Span, ...]:
    """Join neighbouring spans that carry the same style."""
    out: list[Span] = []
    for span in spans:
        if out and out[-1].end == span.start and out[-1].style == span.style:
            out[-1] = replace(out[-1], end=span.end)
        else:
            out.append(span)
    return tuple(out)


@dataclass(frozen=True)
class RichRun:
    """Plain text plus styled spans that partition it.

    A run built from text alone gets a single unstyled span. The empty run has
    no spans and represents an empty block.
    """

    text: str = ""
    spans: tuple[Span, ...] = field(default=())

    def __post_init__(self) -> None:
        if self.text and not self.spans:
            object.__setattr__(self, "spans", (Span(0, len(self.text)),))
        pos = 0
        for span in self.spans:
            if span.start != pos or span.end <= span.start:
                msg = f"Spans do not partition text at offset {pos}: {span!r}"
                raise InvariantViolation(msg)
            pos = span.end
        if pos != len(self.text):
            msg = f"Spans cover {pos} characters but text has {len(self.text)}"
            raise InvariantViolation(msg)

    @classmethod
    def plain(cls, text: str = "", **style: Any) -> "RichRun":
        """Build a run whose whole text carries one style."""
        if not text:
            return cls()
        return cls(text, (Span(0, len(text), **style),))

    @property
    def plain_text(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def is_blank(self) -> bool:
        """True if the run holds nothing but whitespace and newlines."""
        return not self.text.strip()

    def slice(self, start: int, end: int | None = None) -> "RichRun":
        """Return the sub-run ``[start, end)`` with styles preserved."""
        size = len(self.text)
        end = size if end is None else end
        start = max(0, min(start, size))
        end = max(start, min(end, size))
        if start == end:
            return RichRun()
        spans = [
            replace(s, start=max(s.start, start) - start, end=min(s.end, end) - start)
            for s in self.spans
            if s.end > start and s.start < end
        ]
        return RichRun(self.text[start:end], tuple(spans))

    def split_at(self, index: int) -> tuple["RichRun", "RichRun"]:
        """Split into the prefix before ``index`` and the suffix from it."""
        return self.slice(0, index), self.slice(index)

    def concat(self, other: "RichRun") -> "RichRun":
        """Append ``other`` after this run."""
        if not other.text:
            return self
        if not self.text:
            return other
        offset = len(self.text)
        spans = list(self.spans) + [s.shifted(offset) for s in other.spans]
        return RichRun(self.text + other.text, _coalesce(spans))

    def __add__(self, other: "RichRun") -> "RichRun":
        return self.concat(other)

    def with_style(self, start: int, end: int, **changes: Any) -> "RichRun":
        """Apply style changes to ``[start, end)``, leaving the rest untouched."""
        unknown = set(changes) - set(_STYLE_FIELDS)
        if unknown:
            msg = f"Unknown style attributes: {sorted(unknown)}"
            raise ValueError(msg)
        before, rest = self.split_at(start)
        middle, after = rest.split_at(end - len(before))
        styled = RichRun(
            middle.text, tuple(replace(s, **changes) for s in middle.spans)
        )
        return before.concat(styled).concat(after)
