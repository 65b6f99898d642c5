"""Tests for the CommonMark renderer."""

import pytest

from nixdoc.models import FlatArgument, ManualEntry, PatternArgument, SingleArg
from nixdoc.render.commonmark import format_argument, inline_code, render_commonmark, render_section


def _entry(name: str = "concatStrings", **overrides) -> ManualEntry:
    values = {
        "category": "strings",
        "name": name,
        "fn_type": None,
        "description": (),
        "example": None,
        "args": (),
    }
    values.update(overrides)
    return ManualEntry(**values)


# ---------------------------------------------------------------------------
# Whole document
# ---------------------------------------------------------------------------


def test_full_document():
    """Test a document with every section of an entry."""
    entry = _entry(
        fn_type="[string] -> string",
        description=("Concatenate a list of strings.", "Second paragraph."),
        example='\nconcatStrings ["a" "b"]\n=> "ab"\n',
        args=(FlatArgument(SingleArg("list", " The list ")),),
    )
    expected = (
        "# String manipulation functions {#sec-functions-library-strings}\n"
        "\n"
        "## `lib.strings.concatStrings` {#function-library-lib.strings.concatStrings}\n"
        "\n"
        "`[string] -> string`\n"
        "\n"
        "Concatenate a list of strings.\n"
        "\n"
        "Second paragraph.\n"
        "\n"
        "`list`\n"
        "\n"
        ": The list\n"
        "\n"
        "::: {.example #function-library-example-lib.strings.concatStrings}\n"
        "# `lib.strings.concatStrings` usage example\n"
        "\n"
        "```nix\n"
        'concatStrings ["a" "b"]\n'
        '=> "ab"\n'
        "```\n"
        ":::\n"
    )
    assert render_commonmark([entry], "strings", "String manipulation functions") == expected


def test_empty_document_has_heading_only():
    """Test that a document without entries is just the heading."""
    assert render_commonmark([], "lists", "List functions") == "# List functions {#sec-functions-library-lists}\n"


def test_entry_order_is_preserved():
    """Test that entries keep their input order."""
    names = ["zeta", "alpha", "mid"]
    output = render_commonmark([_entry(name) for name in names], "strings", "Strings")
    positions = [output.index(f"{{#function-library-lib.strings.{name}}}") for name in names]
    assert positions == sorted(positions)


def test_root_attr_is_configurable():
    """Test rendering with another root attribute."""
    output = render_commonmark([_entry("foo")], "strings", "Strings", root_attr="pkgs.lib")
    assert "## `pkgs.lib.strings.foo` {#function-library-pkgs.lib.strings.foo}" in output


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def test_minimal_section():
    """Test an entry with nothing but a name."""
    assert render_section(_entry("foo")) == ["## `lib.strings.foo` {#function-library-lib.strings.foo}", ""]


def test_quote_in_name_is_rewritten_in_anchors_only():
    """Test that quotes are rewritten in anchors but not in titles."""
    lines = render_section(_entry("foldl'", example="foldl' f"))
    assert lines[0] == "## `lib.strings.foldl'` {#function-library-lib.strings.foldl-prime}"
    assert "::: {.example #function-library-example-lib.strings.foldl-prime}" in lines
    assert "# `lib.strings.foldl'` usage example" in lines


def test_string_attribute_name_in_anchor():
    """Test that a quoted name keeps its title but gets a safe anchor."""
    lines = render_section(_entry('"two words"'))
    assert lines[0] == '## `lib.strings."two words"` {#function-library-lib.strings.-two-words-}'


def test_example_fence_outgrows_backticks():
    """Test that the example fence is longer than any backtick run inside it."""
    lines = render_section(_entry("foo", example="```\ncode\n```"))
    assert "````nix" in lines
    assert lines[lines.index("````nix") + 2] == "````"


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------


class TestFormatArgument:
    def test_flat_with_doc(self):
        """Test a flat argument with its doc comment."""
        assert format_argument(FlatArgument(SingleArg("x", "\n   The x. "))) == "`x`\n\n: The x.\n"

    def test_flat_default_doc(self):
        """Test the default text of an undocumented argument."""
        assert format_argument(FlatArgument(SingleArg("x"))) == "`x`\n\n: Function argument\n"

    def test_multiline_doc_stays_in_definition(self):
        """Test that later doc lines are indented into the definition."""
        assert format_argument(FlatArgument(SingleArg("x", "line one\nline two"))) == "`x`\n\n: line one\n  line two\n"

    def test_pattern(self):
        """Test a structured argument with nested entries."""
        arg = PatternArgument((SingleArg("name", "Who"), SingleArg("greeting")))
        assert format_argument(arg) == (
            "structured function argument\n"
            "\n"
            ": `name`\n"
            "\n"
            "    : Who\n"
            "\n"
            "    `greeting`\n"
            "\n"
            "    : Function argument\n"
        )

    def test_empty_pattern(self):
        """Test a structured argument without entries."""
        assert format_argument(PatternArgument(())) == "structured function argument\n"

    def test_argument_order_is_kept(self):
        """Test that pattern entries keep their order."""
        arg = PatternArgument((SingleArg("b"), SingleArg("a"), SingleArg("b")))
        rendered = format_argument(arg)
        assert rendered.index("`b`") < rendered.index("`a`") < rendered.rindex("`b`")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a -> b", "`a -> b`"),
        ("a`b", "``a`b``"),
        ("`a", "`` `a ``"),
        ("x ``y`` z", "```x ``y`` z```"),
    ],
)
def test_inline_code(text, expected):
    """Test that code spans widen around backticks."""
    assert inline_code(text) == expected
