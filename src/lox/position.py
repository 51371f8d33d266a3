"""Byte positions, spans, and diagnostics shared by every pipeline stage."""
from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

T = TypeVar("T")


#offsets advance by UTF-8 width so multi-byte characters keep spans aligned
@dataclass(frozen=True, slots=True, order=True)
class BytePos:
    """A 0-based byte offset into the source text."""

    offset: int = 0

    def shift(self, char: str) -> BytePos:
        return BytePos(self.offset + len(char.encode("utf-8")))

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.offset)


#stores the start/end offsets for highlighting user diagnostics
@dataclass(frozen=True, slots=True)
class Span:
    """Represents a half-open source range [start, end)."""

    start: BytePos
    end: BytePos

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"span start {self.start} is after end {self.end}")

    @classmethod
    def union(cls, a: Span, b: Span) -> Span:
        """Return the minimal span that covers both spans."""

        return cls(start=min(a.start, b.start), end=max(a.end, b.end))

    def merge(self, other: Span) -> Span:
        return Span.union(self, other)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.start}-{self.end}"


#pairs any token or tree node with the source range it came from
@dataclass(frozen=True, slots=True)
class WithSpan(Generic[T]):
    value: T
    span: Span


#a user-facing message anchored to the exact range responsible for it
@dataclass(frozen=True, slots=True)
class Diagnostic:
    message: str
    span: Span

    @classmethod
    def at(cls, message: str, start: BytePos, end: BytePos) -> Diagnostic:
        return cls(message=message, span=Span(start, end))


#maps byte offsets back to 1-based line numbers for error reports
@dataclass(slots=True)
class LineOffsets:
    """Start offset of every line in a source text.

    Offset 0 is always present, followed by one entry after each ``\\n``.
    """

    offsets: List[int] = field(default_factory=lambda: [0])
    length: int = 0

    @classmethod
    def from_text(cls, text: str) -> LineOffsets:
        data = text.encode("utf-8")
        offsets = [0]
        for index, byte in enumerate(data):
            if byte == 0x0A:
                offsets.append(index + 1)
        return cls(offsets=offsets, length=len(data))

    def line(self, pos: BytePos) -> int:
        assert pos.offset <= self.length, f"position {pos.offset} is past end of source ({self.length})"
        return bisect_right(self.offsets, pos.offset)


__all__ = ["BytePos", "Diagnostic", "LineOffsets", "Span", "WithSpan"]
