"""nixdoc: reference documentation for Nix library functions.

Reads a Nix file defining library functions (such as the files in
``lib/`` of nixpkgs), collects every binding that carries a doc comment
and renders the result as CommonMark or DocBook.

Example:
    >>> from nixdoc import generate_document
    >>> print(generate_document(source, "strings", "String manipulation functions"))
"""

from nixdoc.comments import parse_doc_comment, retrieve_doc_comment
from nixdoc.driver import document_file, generate_document
from nixdoc.exceptions import (
    MissingStructureError,
    NixdocError,
    NixParseError,
    OptionsError,
    RenderError,
)
from nixdoc.extractor import collect_entries, collect_entry_information, collect_lambda_args
from nixdoc.models import (
    Argument,
    DocComment,
    DocItem,
    FlatArgument,
    ManualEntry,
    PatternArgument,
    SingleArg,
)
from nixdoc.options import DocsOptions
from nixdoc.render import render_commonmark, render_docbook
from nixdoc.settings import Settings, settings

__all__ = [
    "Argument",
    "DocComment",
    "DocItem",
    "DocsOptions",
    "FlatArgument",
    "ManualEntry",
    "MissingStructureError",
    "NixParseError",
    "NixdocError",
    "OptionsError",
    "PatternArgument",
    "RenderError",
    "Settings",
    "SingleArg",
    "collect_entries",
    "collect_entry_information",
    "collect_lambda_args",
    "document_file",
    "generate_document",
    "parse_doc_comment",
    "render_commonmark",
    "render_docbook",
    "retrieve_doc_comment",
    "settings",
]
