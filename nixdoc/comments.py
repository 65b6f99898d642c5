"""Doc comment harvesting and parsing.

A definition's doc comment is the comment block immediately in front of
it. Line comments on directly adjacent lines are merged into one block; a
blank line ends the block. Block comments are always taken on their own.

The harvested text is split into sections by line markers:

    # Concatenate a list of strings.
    #
    # Type: concatStrings :: [string] -> string
    #
    # Example:
    #   concatStrings ["foo" "bar"]
    #   => "foobar"
"""

from enum import StrEnum

from nixdoc.models import DocComment
from nixdoc.syntax import Comment, SyntaxKind, SyntaxNode

TYPE_MARKER = "Type:"
EXAMPLE_MARKER = "Example:"


def retrieve_doc_comment(node: SyntaxNode) -> str | None:
    """Return the text of the doc comment attached to ``node``, if any.

    The node's first token may be preceded by at most one whitespace token
    and then the comment. The returned text has comment delimiters removed.
    """
    first = node.first_token()
    token = first.prev_token() if first is not None else None
    if token is not None and token.kind is SyntaxKind.TOKEN_WHITESPACE:
        # A blank line between comment and definition detaches the comment.
        if token.text.count("\n") > 1:
            return None
        token = token.prev_token()
    comment = Comment.cast(token)
    if comment is None:
        return None

    if comment.is_block:
        return comment.text()

    parts: list[str] = []
    while comment is not None:
        parts.append(comment.text())
        ws = comment.syntax.prev_token()
        if ws is None or ws.kind is not SyntaxKind.TOKEN_WHITESPACE:
            break
        # Only adjacent lines continue a doc comment, empty lines do not.
        if not ws.text.startswith("\n") or "\n" in ws.text[1:]:
            break
        parts.append(ws.text)
        comment = Comment.cast(ws.prev_token())
    return "".join(reversed(parts))


class ParseState(StrEnum):
    """Section of the doc comment the current line belongs to."""

    DOC = "doc"
    TYPE = "type"
    EXAMPLE = "example"


# Nothing leads back to DOC. A repeated marker keeps its section.
_TRANSITIONS: dict[ParseState, dict[str, ParseState]] = {
    ParseState.DOC: {TYPE_MARKER: ParseState.TYPE, EXAMPLE_MARKER: ParseState.EXAMPLE},
    ParseState.TYPE: {TYPE_MARKER: ParseState.TYPE, EXAMPLE_MARKER: ParseState.EXAMPLE},
    ParseState.EXAMPLE: {EXAMPLE_MARKER: ParseState.EXAMPLE},
}


def advance(state: ParseState, line: str) -> tuple[ParseState, str]:
    """Apply marker transitions for one line.

    Markers are checked in order (``Type:`` then ``Example:``) against what
    is left of the line, stripping each marker that fires. A marker with no
    transition from the current state (``Type:`` inside an example) is
    plain content.
    """
    for marker in (TYPE_MARKER, EXAMPLE_MARKER):
        target = _TRANSITIONS[state].get(marker)
        if target is not None and line.startswith(marker):
            state = target
            line = line[len(marker) :]
    return state, line


def parse_doc_comment(raw: str) -> DocComment:
    """Split a harvested comment into description, type and example."""
    state = ParseState.DOC
    doc: list[str] = []
    doc_type: list[str] = []
    example: list[str] = []

    for raw_line in raw.strip().split("\n"):
        state, line = advance(state, raw_line.strip())
        line = line.strip()
        if state is ParseState.DOC:
            doc.append(line + "\n")
        elif state is ParseState.TYPE:
            doc_type.append(line)
        else:
            example.append(line + "\n")

    return DocComment(
        doc="".join(doc).strip(),
        doc_type="".join(doc_type) or None,
        example="".join(example) or None,
    )
