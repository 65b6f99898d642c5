"""Immutable concrete syntax tree with token-level navigation.

Nodes own an ordered tuple of children (nodes and tokens). Every token
also knows its position in the flat token sequence of the whole file, so
``prev_token``/``next_token`` cross node boundaries freely. Trees are
built once by the parser and never mutated afterwards.
"""

from collections.abc import Iterator, Sequence

from nixdoc.syntax.kinds import SyntaxKind


class SyntaxToken:
    """A leaf of the tree: one token of source text."""

    __slots__ = ("kind", "text", "offset", "index", "parent", "_sequence")

    def __init__(self, kind: SyntaxKind, text: str, offset: int, index: int, sequence: Sequence["SyntaxToken"]):
        self.kind = kind
        self.text = text
        self.offset = offset
        self.index = index
        self.parent: SyntaxNode | None = None
        self._sequence = sequence

    def prev_token(self) -> "SyntaxToken | None":
        if self.index == 0:
            return None
        return self._sequence[self.index - 1]

    def next_token(self) -> "SyntaxToken | None":
        if self.index + 1 >= len(self._sequence):
            return None
        return self._sequence[self.index + 1]

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"{self.kind}@{self.offset} {self.text!r}"


class SyntaxNode:
    """An interior node of the tree."""

    __slots__ = ("kind", "parent", "_children")

    def __init__(self, kind: SyntaxKind, children: Sequence["SyntaxNode | SyntaxToken"]):
        self.kind = kind
        self.parent: SyntaxNode | None = None
        self._children = tuple(children)
        for child in self._children:
            child.parent = self

    def children_with_tokens(self) -> tuple["SyntaxNode | SyntaxToken", ...]:
        return self._children

    def children(self) -> Iterator["SyntaxNode"]:
        """Child nodes, tokens skipped."""
        return (child for child in self._children if isinstance(child, SyntaxNode))

    def tokens(self) -> Iterator[SyntaxToken]:
        """Direct child tokens, nodes skipped."""
        return (child for child in self._children if isinstance(child, SyntaxToken))

    def first_token(self) -> SyntaxToken | None:
        for child in self._children:
            if isinstance(child, SyntaxToken):
                return child
            if (token := child.first_token()) is not None:
                return token
        return None

    def preorder(self) -> Iterator["SyntaxNode"]:
        """Yield this node and all descendant nodes in source order."""
        yield self
        for child in self.children():
            yield from child.preorder()

    def descendant_tokens(self) -> Iterator[SyntaxToken]:
        for child in self._children:
            if isinstance(child, SyntaxToken):
                yield child
            else:
                yield from child.descendant_tokens()

    @property
    def offset(self) -> int:
        token = self.first_token()
        return token.offset if token is not None else 0

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.descendant_tokens())

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"{self.kind}@{self.offset}"
