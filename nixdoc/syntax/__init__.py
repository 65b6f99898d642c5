"""Nix syntax layer: lossless tokenizer, concrete syntax tree and typed views.

Exposes just what documentation extraction needs: a tree of typed nodes
with an ordered token stream, parent/child navigation, previous/next
token navigation and ``cast`` views that return None on shape mismatch.
"""

from nixdoc.syntax.ast import (
    AstNode,
    Attrpath,
    AttrpathValue,
    AttrSet,
    Comment,
    Dynamic,
    Ident,
    IdentParam,
    Lambda,
    Param,
    PatBind,
    PatEntry,
    Pattern,
    Root,
    Str,
)
from nixdoc.syntax.kinds import SyntaxKind
from nixdoc.syntax.parser import parse
from nixdoc.syntax.tokenizer import Token, tokenize
from nixdoc.syntax.tree import SyntaxNode, SyntaxToken

__all__ = [
    "AstNode",
    "AttrSet",
    "Attrpath",
    "AttrpathValue",
    "Comment",
    "Dynamic",
    "Ident",
    "IdentParam",
    "Lambda",
    "Param",
    "PatBind",
    "PatEntry",
    "Pattern",
    "Root",
    "Str",
    "SyntaxKind",
    "SyntaxNode",
    "SyntaxToken",
    "Token",
    "parse",
    "tokenize",
]
