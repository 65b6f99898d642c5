"""Tests for the documentation data model."""

import dataclasses

import pytest

from nixdoc.exceptions import NixdocError, NixParseError
from nixdoc.models import FlatArgument, ManualEntry, PatternArgument, SingleArg


def _entry(name: str) -> ManualEntry:
    return ManualEntry(category="lists", name=name, fn_type=None, description=(), example=None)


def test_title_and_ident():
    """Test the reader-facing title and the anchor-safe ident."""
    entry = _entry("foldl'")
    assert entry.title() == "lib.lists.foldl'"
    assert entry.ident() == "lib.lists.foldl-prime"
    assert entry.ident("pkgs") == "pkgs.lists.foldl-prime"


def test_every_quote_is_rewritten():
    """Test that each quote in a name becomes its own -prime."""
    assert _entry("f''").ident() == "lib.lists.f-prime-prime"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ('"quoted name"', "lib.lists.-quoted-name-"),
        ("a.${b}", "lib.lists.a.-b-"),
        ('"x y".z', "lib.lists.-x-y-.z"),
        ("snake_case-name", "lib.lists.snake_case-name"),
    ],
)
def test_ident_replaces_anchor_unsafe_characters(name, expected):
    """Test that characters invalid in ids collapse to a dash."""
    assert _entry(name).ident() == expected
    assert _entry(name).title() == f"lib.lists.{name}"


def test_entries_are_immutable():
    """Test that ManualEntry instances are frozen."""
    entry = _entry("map")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.name = "other"  # type: ignore[misc]


def test_argument_variants_compare_by_value():
    """Test value equality of the two argument variants."""
    assert FlatArgument(SingleArg("x")) == FlatArgument(SingleArg("x", None))
    assert PatternArgument() == PatternArgument(())
    assert FlatArgument(SingleArg("x")) != PatternArgument((SingleArg("x"),))


def test_parse_error_position():
    """Test that parse errors carry their position."""
    error = NixParseError("unexpected character '`'", 3, 7)
    assert isinstance(error, NixdocError)
    assert (error.line, error.column) == (3, 7)
    assert str(error) == "unexpected character '`' at line 3, column 7"
