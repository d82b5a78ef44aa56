"""Tests for RichRun: span partitioning, slicing, joining and styling."""

import pytest

from scr4tch.errors import InvariantViolation
from scr4tch.models.rich_text import RichRun, Span


def test_text_without_spans_gets_one_plain_span() -> None:
    run = RichRun("hello")
    assert run.spans == (Span(0, 5),)


def test_empty_run_has_no_spans() -> None:
    assert RichRun().spans == ()
    assert RichRun.plain("").spans == ()


@pytest.mark.parametrize(
    "spans",
    [
        (Span(0, 1), Span(2, 3)),  # gap
        (Span(0, 2), Span(1, 3)),  # overlap
        (Span(0, 2),),  # short
    ],
)
def test_spans_must_partition_the_text(spans: tuple[Span, ...]) -> None:
    with pytest.raises(InvariantViolation):
        RichRun("abc", spans)


def test_slice_keeps_styles_relative_to_the_slice() -> None:
    run = RichRun.plain("hello world").with_style(0, 5, bold=True)
    part = run.slice(3, 8)
    assert part.text == "lo wo"
    assert part.spans == (Span(0, 2, bold=True), Span(2, 5))


def test_slice_out_of_range_is_clamped() -> None:
    run = RichRun.plain("abc")
    assert run.slice(2, 99).text == "c"
    assert run.slice(5) == RichRun()


def test_split_at_returns_prefix_and_suffix() -> None:
    prefix, suffix = RichRun.plain("ABCD").split_at(2)
    assert (prefix.text, suffix.text) == ("AB", "CD")


def test_concat_coalesces_matching_styles() -> None:
    joined = RichRun.plain("ab") + RichRun.plain("cd")
    assert joined.text == "abcd"
    assert joined.spans == (Span(0, 4),)


def test_concat_keeps_distinct_styles_apart() -> None:
    joined = RichRun.plain("ab", bold=True) + RichRun.plain("cd")
    assert joined.spans == (Span(0, 2, bold=True), Span(2, 4))


def test_concat_with_empty_run_is_identity() -> None:
    run = RichRun.plain("x", italic=True)
    assert run + RichRun() is run
    assert RichRun() + run is run


def test_is_blank_ignores_whitespace_and_newlines() -> None:
    assert RichRun().is_blank()
    assert RichRun.plain(" \n\t").is_blank()
    assert not RichRun.plain(" x ").is_blank()


def test_color_is_carried_through_untouched() -> None:
    run = RichRun.plain("hi", color="accent-red")
    assert run.slice(0, 1).spans[0].color == "accent-red"


def test_with_style_rejects_unknown_attributes() -> None:
    with pytest.raises(ValueError, match="Unknown style"):
        RichRun.plain("hi").with_style(0, 1, shouting=True)


def test_with_style_in_the_middle_splits_spans() -> None:
    run = RichRun.plain("abcdef").with_style(2, 4, underline=True)
    assert run.spans == (Span(0, 2), Span(2, 4, underline=True), Span(4, 6))
