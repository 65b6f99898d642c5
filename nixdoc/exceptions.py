"""Exception hierarchy for nixdoc.

All exceptions inherit from NixdocError, so callers (the CLI in
particular) can report any failure of the pipeline uniformly.
"""


class NixdocError(Exception):
    """Base exception for all nixdoc errors."""


class NixParseError(NixdocError):
    """Raised when Nix source text cannot be tokenized or parsed.

    Attributes:
        line: 1-based line of the offending input.
        column: 1-based column of the offending input.
    """

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at line {line}, column {column}")
        self.line = line
        self.column = column


class MissingStructureError(NixdocError):
    """Raised when a syntax node lacks a part the parser always produces."""


class OptionsError(NixdocError):
    """Raised when driver options fail validation."""


class RenderError(NixdocError):
    """Raised when entries cannot be represented in the output format."""
