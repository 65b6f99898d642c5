"""Typed views over syntax nodes.

Each view wraps a SyntaxNode of one specific kind. ``View.cast(node)``
returns the view, or None when the node has a different shape, so callers
can test a generic node without exceptions:

    >>> if (fn := Lambda.cast(binding.value())) is not None:
    ...     param = fn.param()
"""

from collections.abc import Iterator
from typing import ClassVar, Self, TypeVar

from nixdoc.syntax.kinds import SyntaxKind
from nixdoc.syntax.tree import SyntaxNode, SyntaxToken

_V = TypeVar("_V", bound="AstNode")


class AstNode:
    """Base class for typed node views."""

    KIND: ClassVar[SyntaxKind]

    __slots__ = ("syntax",)

    def __init__(self, syntax: SyntaxNode):
        self.syntax = syntax

    @classmethod
    def cast(cls, node: SyntaxNode | None) -> Self | None:
        if node is not None and node.kind is cls.KIND:
            return cls(node)
        return None

    def _child(self, view: type[_V]) -> _V | None:
        for child in self.syntax.children():
            if (cast := view.cast(child)) is not None:
                return cast
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AstNode) and other.syntax is self.syntax

    def __hash__(self) -> int:
        return id(self.syntax)

    def __str__(self) -> str:
        return self.syntax.text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.syntax.text!r})"


class Root(AstNode):
    KIND = SyntaxKind.NODE_ROOT

    def expr(self) -> SyntaxNode | None:
        return next(self.syntax.children(), None)


class Ident(AstNode):
    KIND = SyntaxKind.NODE_IDENT

    @property
    def name(self) -> str:
        token = self.syntax.first_token()
        return token.text if token is not None else ""


class Str(AstNode):
    """A string literal, plain or indented."""

    KIND = SyntaxKind.NODE_STRING


class Dynamic(AstNode):
    """An interpolated attribute name: ``${expr}``."""

    KIND = SyntaxKind.NODE_DYNAMIC


class Attrpath(AstNode):
    KIND = SyntaxKind.NODE_ATTRPATH

    def attrs(self) -> Iterator[SyntaxNode]:
        """The path segments: NODE_IDENT, NODE_STRING or NODE_DYNAMIC nodes."""
        return self.syntax.children()


class AttrpathValue(AstNode):
    """A binding ``attr.path = value;`` inside a set or let."""

    KIND = SyntaxKind.NODE_ATTRPATH_VALUE

    def attrpath(self) -> Attrpath | None:
        return self._child(Attrpath)

    def value(self) -> SyntaxNode | None:
        nodes = [child for child in self.syntax.children() if child.kind is not SyntaxKind.NODE_ATTRPATH]
        return nodes[0] if nodes else None


class AttrSet(AstNode):
    KIND = SyntaxKind.NODE_ATTR_SET

    @property
    def is_rec(self) -> bool:
        return any(token.kind is SyntaxKind.TOKEN_REC for token in self.syntax.tokens())

    def entries(self) -> Iterator[AttrpathValue]:
        for child in self.syntax.children():
            if (binding := AttrpathValue.cast(child)) is not None:
                yield binding


class IdentParam(AstNode):
    """A plain identifier function parameter: the ``x`` in ``x: body``."""

    KIND = SyntaxKind.NODE_IDENT_PARAM

    def ident(self) -> Ident | None:
        return self._child(Ident)


class PatBind(AstNode):
    """The ``name @`` alias of a pattern parameter."""

    KIND = SyntaxKind.NODE_PAT_BIND

    def ident(self) -> Ident | None:
        return self._child(Ident)


class PatEntry(AstNode):
    KIND = SyntaxKind.NODE_PAT_ENTRY

    def ident(self) -> Ident | None:
        return self._child(Ident)


class Pattern(AstNode):
    """A destructuring function parameter: ``{ a, b ? 1, ... }``."""

    KIND = SyntaxKind.NODE_PATTERN

    def pat_entries(self) -> Iterator[PatEntry]:
        for child in self.syntax.children():
            if (entry := PatEntry.cast(child)) is not None:
                yield entry

    def pat_bind(self) -> PatBind | None:
        return self._child(PatBind)

    @property
    def ellipsis(self) -> bool:
        return any(token.kind is SyntaxKind.TOKEN_ELLIPSIS for token in self.syntax.tokens())


Param = IdentParam | Pattern


class Lambda(AstNode):
    """A function literal ``param: body``."""

    KIND = SyntaxKind.NODE_LAMBDA

    def param(self) -> Param | None:
        return self._child(IdentParam) or self._child(Pattern)

    def body(self) -> SyntaxNode | None:
        nodes = [
            child for child in self.syntax.children() if child.kind not in (SyntaxKind.NODE_IDENT_PARAM, SyntaxKind.NODE_PATTERN)
        ]
        return nodes[0] if nodes else None


class Comment:
    """View over a comment token."""

    __slots__ = ("syntax",)

    def __init__(self, syntax: SyntaxToken):
        self.syntax = syntax

    @classmethod
    def cast(cls, token: SyntaxToken | None) -> "Comment | None":
        if token is not None and token.kind is SyntaxKind.TOKEN_COMMENT:
            return cls(token)
        return None

    @property
    def is_block(self) -> bool:
        return self.syntax.text.startswith("/*")

    def text(self) -> str:
        """Comment body without its ``#`` or ``/* */`` delimiters."""
        raw = self.syntax.text
        if self.is_block:
            return raw.removeprefix("/*").removesuffix("*/")
        return raw.removeprefix("#")
