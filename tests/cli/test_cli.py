"""Tests for the nixdoc command line and pipeline driver."""

import runpy
import sys
from pathlib import Path

import pytest
from lxml import etree
from pydantic import ValidationError

from nixdoc.cli import main
from nixdoc.driver import document_file, generate_document
from nixdoc.exceptions import NixParseError, OptionsError
from nixdoc.logging import setup_logging
from nixdoc.options import DocsOptions, build_options
from nixdoc.settings import Settings

SOURCE = """\
{ lib }:
{
  # Return the first element.
  #
  # Type: head :: [a] -> a
  head = list: builtins.elemAt list 0;

  tail = list: list;

  # Flip a function.
  flip' =
    # The function
    f: a: b: f b a;
}
"""


def _write(tmp_path: Path, source: str = SOURCE) -> Path:
    path = tmp_path / "lists.nix"
    path.write_text(source)
    return path


def _args(path: Path, *extra: str) -> list[str]:
    return ["-f", str(path), "-c", "lists", "-d", "List manipulation functions", *extra]


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


def test_commonmark_to_stdout(tmp_path, capsys):
    """Test that the CommonMark document is written to stdout."""
    assert main(_args(_write(tmp_path))) == 0
    out, err = capsys.readouterr()
    assert out.startswith("# List manipulation functions {#sec-functions-library-lists}\n")
    assert "## `lib.lists.head` {#function-library-lib.lists.head}" in out
    assert "`head :: [a] -> a`" in out
    assert "lib.lists.tail" not in out
    assert "{#function-library-lib.lists.flip-prime}" in out
    assert out.index("lib.lists.head") < out.index("lib.lists.flip'")
    assert err == ""


def test_docbook_to_stdout(tmp_path, capsys):
    """Test that the DocBook document is well-formed with one section per entry."""
    assert main(_args(_write(tmp_path), "--format", "docbook")) == 0
    out, _ = capsys.readouterr()
    root = etree.fromstring(out.encode("utf-8"))
    ids = [section.get("{http://www.w3.org/XML/1998/namespace}id") for section in root]
    assert ids[1:] == ["function-library-lib.lists.head", "function-library-lib.lists.flip-prime"]


def test_parse_error_fails_without_output(tmp_path, capsys):
    """Test that a syntax error is reported on stderr with its position."""
    assert main(_args(_write(tmp_path, "{ a = 1 }"))) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("FAIL: expected ';'")
    assert "line 1, column 9" in err


def test_missing_file(tmp_path, capsys):
    """Test that an unreadable file fails cleanly."""
    assert main(_args(tmp_path / "missing.nix")) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("FAIL: ")


def test_invalid_category(tmp_path, capsys):
    """Test that invalid options are reported on stderr."""
    assert main(["-f", str(_write(tmp_path)), "-c", "two words", "-d", "Lists"]) == 1
    _, err = capsys.readouterr()
    assert "FAIL: invalid options" in err
    assert "category" in err


def test_required_options():
    """Test that argparse rejects a missing --file."""
    with pytest.raises(SystemExit) as exc_info:
        main(["-c", "lists", "-d", "Lists"])
    assert exc_info.value.code == 2


def test_unknown_format_is_rejected(tmp_path):
    """Test that argparse rejects an unknown output format."""
    with pytest.raises(SystemExit):
        main(_args(_write(tmp_path), "--format", "html"))


def test_log_level_goes_to_stderr(tmp_path, capsys):
    """Test that --log-level debug logs on stderr and leaves stdout clean."""
    try:
        assert main(_args(_write(tmp_path), "--log-level", "debug")) == 0
        out, err = capsys.readouterr()
    finally:
        setup_logging(level="WARNING")
    assert out.startswith("# List manipulation functions")
    assert "DEBUG" not in out
    assert "DEBUG" in err
    assert "nixdoc.driver - Rendering 2 entries of category lists as commonmark" in err


def test_python_m_nixdoc(tmp_path, capsys, monkeypatch):
    """Test running the package as a module."""
    monkeypatch.setattr(sys, "argv", ["nixdoc", *_args(_write(tmp_path))])
    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("nixdoc", run_name="__main__")
    assert exc_info.value.code == 0
    out, _ = capsys.readouterr()
    assert "## `lib.lists.head`" in out


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestOptions:
    def test_valid(self, tmp_path):
        """Test building valid options with the default format."""
        options = build_options(file=tmp_path / "a.nix", category="lists", description="Lists")
        assert options == DocsOptions(file=tmp_path / "a.nix", category="lists", description="Lists")
        assert options.output_format == "commonmark"

    @pytest.mark.parametrize(
        "values",
        [
            {"category": "", "description": "Lists"},
            {"category": "a b", "description": "Lists"},
            {"category": "it's", "description": "Lists"},
            {"category": "lists", "description": "   "},
            {"category": "lists", "description": "Lists", "output_format": "html"},
        ],
    )
    def test_invalid(self, tmp_path, values):
        """Test that invalid option values raise OptionsError."""
        with pytest.raises(OptionsError, match="invalid options"):
            build_options(file=tmp_path / "a.nix", **values)

    def test_frozen(self, tmp_path):
        """Test that DocsOptions instances are immutable."""
        options = build_options(file=tmp_path / "a.nix", category="lists", description="Lists")
        with pytest.raises(ValidationError):
            options.category = "other"


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


def test_generate_document_uses_settings():
    """Test that the root attribute comes from the settings."""
    config = Settings(root_attr="pkgs.lib")
    output = generate_document(SOURCE, "lists", "Lists", config=config)
    assert "## `pkgs.lib.lists.head`" in output


def test_generate_document_docbook_settings():
    """Test that DocBook link targets come from the settings."""
    config = Settings(overrides_dir="./manual/overrides", locations_href="./loc.xml")
    output = generate_document(SOURCE, "lists", "Lists", "docbook", config=config)
    assert 'href="./manual/overrides/lib.lists.head.xml"' in output
    assert 'href="./loc.xml"' in output


def test_generate_document_parse_error():
    """Test that parse errors propagate from the driver."""
    with pytest.raises(NixParseError):
        generate_document("{", "lists", "Lists")


def test_document_file(tmp_path):
    """Test reading and rendering a file from options."""
    options = build_options(file=_write(tmp_path), category="lists", description="Lists", output_format="docbook")
    assert document_file(options).startswith("<?xml")
