import pytest

from lox.position import BytePos, Diagnostic, LineOffsets, Span, WithSpan


#byte positions advance by encoded width, not character count
def test_shift_uses_utf8_width() -> None:
    assert BytePos().shift("a") == BytePos(1)
    assert BytePos().shift("é") == BytePos(2)
    assert BytePos(3).shift("😀") == BytePos(7)


def test_span_union_covers_both() -> None:
    a = Span(BytePos(4), BytePos(6))
    b = Span(BytePos(1), BytePos(2))
    assert Span.union(a, b) == Span(BytePos(1), BytePos(6))
    assert a.merge(b) == Span.union(b, a)


def test_span_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        Span(BytePos(3), BytePos(2))


def test_with_span_keeps_value_and_span() -> None:
    wrapped = WithSpan("x", Span(BytePos(0), BytePos(1)))
    assert wrapped.value == "x"
    assert wrapped.span == Span(BytePos(0), BytePos(1))


def test_diagnostic_at_builds_span() -> None:
    diagnostic = Diagnostic.at("boom", BytePos(2), BytePos(5))
    assert diagnostic.span == Span(BytePos(2), BytePos(5))
    assert diagnostic.message == "boom"


#line lookups are 1-based and a line start belongs to its own line
def test_line_offsets_map_positions_to_lines() -> None:
    offsets = LineOffsets.from_text("line1\nline2\nline3\n")
    assert offsets.offsets == [0, 6, 12, 18]
    assert offsets.line(BytePos(0)) == 1
    assert offsets.line(BytePos(5)) == 1
    assert offsets.line(BytePos(6)) == 2
    assert offsets.line(BytePos(8)) == 2
    assert offsets.line(BytePos(14)) == 3


def test_line_offsets_count_bytes() -> None:
    offsets = LineOffsets.from_text("é\nx")
    assert offsets.offsets == [0, 3]
    assert offsets.line(BytePos(4)) == 2


def test_line_lookup_past_end_is_a_programming_error() -> None:
    offsets = LineOffsets.from_text("abc")
    with pytest.raises(AssertionError):
        offsets.line(BytePos(4))
