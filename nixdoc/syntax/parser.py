"""Recursive-descent parser producing the Nix concrete syntax tree.

Binary operators are handled by precedence climbing with the binding
powers below (higher binds tighter); function application and attribute
selection bind tighter than any operator.

Trivia is attached lazily: it is flushed into the current node right
before the next significant token is consumed or a new node is opened, so
no node ever starts with whitespace or a comment. That keeps
``node.first_token().prev_token()`` pointing at the trivia in front of a
definition, which is where doc comments live.
"""

from nixdoc.exceptions import NixParseError
from nixdoc.logging import get_nixdoc_logger
from nixdoc.syntax.kinds import SyntaxKind
from nixdoc.syntax.tokenizer import position, tokenize
from nixdoc.syntax.tree import SyntaxNode, SyntaxToken

logger = get_nixdoc_logger(__name__)

K = SyntaxKind

# (left binding power, right binding power)
_BINARY_OPS: dict[SyntaxKind, tuple[int, int]] = {
    K.TOKEN_PIPE_RIGHT: (1, 2),
    K.TOKEN_PIPE_LEFT: (1, 1),
    K.TOKEN_IMPLICATION: (3, 3),
    K.TOKEN_OR_OR: (5, 6),
    K.TOKEN_AND_AND: (7, 8),
    K.TOKEN_EQUAL: (9, 10),
    K.TOKEN_NOT_EQUAL: (9, 10),
    K.TOKEN_LESS: (11, 12),
    K.TOKEN_LESS_OR_EQ: (11, 12),
    K.TOKEN_MORE: (11, 12),
    K.TOKEN_MORE_OR_EQ: (11, 12),
    K.TOKEN_UPDATE: (13, 13),
    K.TOKEN_ADD: (15, 16),
    K.TOKEN_SUB: (15, 16),
    K.TOKEN_MUL: (17, 18),
    K.TOKEN_DIV: (17, 18),
    K.TOKEN_CONCAT: (19, 19),
}
_HAS_ATTR_POWER = 21
_INVERT_POWER = 14
_NEGATE_POWER = 23

_TERM_STARTS = frozenset({
    K.TOKEN_IDENT,
    K.TOKEN_INTEGER,
    K.TOKEN_FLOAT,
    K.TOKEN_PATH,
    K.TOKEN_URI,
    K.TOKEN_STRING_START,
    K.TOKEN_ISTRING_START,
    K.TOKEN_L_PAREN,
    K.TOKEN_L_BRACK,
    K.TOKEN_L_BRACE,
    K.TOKEN_REC,
})

_ATTR_STARTS = frozenset({K.TOKEN_IDENT, K.TOKEN_STRING_START, K.TOKEN_INTERPOL_START})


def parse(source: str) -> SyntaxNode:
    """Parse Nix source text into a NODE_ROOT syntax tree.

    Raises:
        NixParseError: If the text is not a single well-formed Nix expression.
    """
    root = _Parser(source).parse_root()
    logger.debug("Parsed %d characters into %s", len(source), root.kind)
    return root


class _TreeBuilder:
    """Stack-based node builder with checkpoints for left-recursive rules."""

    def __init__(self) -> None:
        self._kinds: list[SyntaxKind] = []
        self._children: list[list[SyntaxNode | SyntaxToken]] = [[]]

    def start_node(self, kind: SyntaxKind) -> None:
        self._kinds.append(kind)
        self._children.append([])

    def checkpoint(self) -> int:
        return len(self._children[-1])

    def start_node_at(self, checkpoint: int, kind: SyntaxKind) -> None:
        current = self._children[-1]
        wrapped = current[checkpoint:]
        del current[checkpoint:]
        self._kinds.append(kind)
        self._children.append(wrapped)

    def finish_node(self) -> None:
        node = SyntaxNode(self._kinds.pop(), self._children.pop())
        self._children[-1].append(node)

    def token(self, token: SyntaxToken) -> None:
        self._children[-1].append(token)

    def finish(self) -> SyntaxNode:
        (root,) = self._children.pop()
        assert isinstance(root, SyntaxNode)
        return root


class _Parser:  # noqa: PLR0904
    def __init__(self, source: str):
        self.source = source
        sequence: list[SyntaxToken] = []
        for index, raw in enumerate(tokenize(source)):
            sequence.append(SyntaxToken(raw.kind, raw.text, raw.offset, index, sequence))
        self.tokens = sequence
        self.pos = 0
        self.builder = _TreeBuilder()

    # ------------------------------------------------------------------
    # Token stream
    # ------------------------------------------------------------------

    def _significant_index(self, n: int = 0) -> int:
        index = self.pos
        seen = -1
        while index < len(self.tokens):
            if not self.tokens[index].kind.is_trivia:
                seen += 1
                if seen == n:
                    return index
            index += 1
        return len(self.tokens)

    def peek(self, n: int = 0) -> SyntaxKind | None:
        """Kind of the n-th upcoming significant token, None at end of input."""
        index = self._significant_index(n)
        return self.tokens[index].kind if index < len(self.tokens) else None

    def peek_token(self) -> SyntaxToken | None:
        index = self._significant_index()
        return self.tokens[index] if index < len(self.tokens) else None

    def skip_trivia(self) -> None:
        while self.pos < len(self.tokens) and self.tokens[self.pos].kind.is_trivia:
            self.builder.token(self.tokens[self.pos])
            self.pos += 1

    def bump(self) -> None:
        self.skip_trivia()
        if self.pos >= len(self.tokens):
            raise self.error("unexpected end of input")
        self.builder.token(self.tokens[self.pos])
        self.pos += 1

    def expect(self, kind: SyntaxKind, what: str) -> None:
        if self.peek() is not kind:
            raise self.error(f"expected {what}")
        self.bump()

    def start_node(self, kind: SyntaxKind) -> None:
        self.skip_trivia()
        self.builder.start_node(kind)

    def checkpoint(self) -> int:
        self.skip_trivia()
        return self.builder.checkpoint()

    def error(self, message: str) -> NixParseError:
        token = self.peek_token()
        if token is None:
            offset = len(self.source)
            found = "end of input"
        else:
            offset = token.offset
            found = repr(token.text)
        line, column = position(self.source, offset)
        return NixParseError(f"{message}, found {found}", line, column)

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse_root(self) -> SyntaxNode:
        self.builder.start_node(K.NODE_ROOT)
        self.parse_expr()
        if self.peek() is not None:
            raise self.error("unexpected trailing input")
        self.skip_trivia()
        self.builder.finish_node()
        return self.builder.finish()

    def parse_expr(self) -> None:  # noqa: C901
        kind = self.peek()
        if kind is K.TOKEN_LET:
            if self.peek(1) is K.TOKEN_L_BRACE:
                raise self.error("legacy `let { ... }` syntax is not supported")
            self._parse_let_in()
        elif kind is K.TOKEN_WITH:
            self._parse_keyword_body(K.NODE_WITH)
        elif kind is K.TOKEN_ASSERT:
            self._parse_keyword_body(K.NODE_ASSERT)
        elif kind is K.TOKEN_IF:
            self._parse_if_else()
        elif kind is K.TOKEN_IDENT and self.peek(1) in (K.TOKEN_COLON, K.TOKEN_AT):
            self._parse_lambda()
        elif kind is K.TOKEN_L_BRACE and self._at_pattern():
            self._parse_lambda()
        else:
            self._parse_operators(0)

    def _parse_keyword_body(self, node_kind: SyntaxKind) -> None:
        # with e; body   |   assert e; body
        self.start_node(node_kind)
        self.bump()
        self.parse_expr()
        self.expect(K.TOKEN_SEMICOLON, "';'")
        self.parse_expr()
        self.builder.finish_node()

    def _parse_if_else(self) -> None:
        self.start_node(K.NODE_IF_ELSE)
        self.bump()
        self.parse_expr()
        self.expect(K.TOKEN_THEN, "'then'")
        self.parse_expr()
        self.expect(K.TOKEN_ELSE, "'else'")
        self.parse_expr()
        self.builder.finish_node()

    def _parse_let_in(self) -> None:
        self.start_node(K.NODE_LET_IN)
        self.bump()
        self._parse_bindings(K.TOKEN_IN)
        self.expect(K.TOKEN_IN, "'in'")
        self.parse_expr()
        self.builder.finish_node()

    def _at_pattern(self) -> bool:
        """Decide whether the `{` at point opens a lambda pattern rather than a set."""
        first = self.peek(1)
        if first is K.TOKEN_R_BRACE:
            return self.peek(2) in (K.TOKEN_COLON, K.TOKEN_AT)
        if first is K.TOKEN_ELLIPSIS:
            return True
        if first is K.TOKEN_IDENT:
            return self.peek(2) in (K.TOKEN_COMMA, K.TOKEN_QUESTION, K.TOKEN_R_BRACE)
        return False

    def _parse_lambda(self) -> None:
        self.start_node(K.NODE_LAMBDA)
        if self.peek() is K.TOKEN_IDENT:
            if self.peek(1) is K.TOKEN_AT:
                # name @ { ... }
                self.start_node(K.NODE_PATTERN)
                self.start_node(K.NODE_PAT_BIND)
                self._parse_ident()
                self.bump()
                self.builder.finish_node()
                self._parse_pattern_body()
                self.builder.finish_node()
            else:
                self.start_node(K.NODE_IDENT_PARAM)
                self._parse_ident()
                self.builder.finish_node()
        else:
            # { ... } [@ name]
            self.start_node(K.NODE_PATTERN)
            self._parse_pattern_body()
            if self.peek() is K.TOKEN_AT:
                self.start_node(K.NODE_PAT_BIND)
                self.bump()
                self._parse_ident()
                self.builder.finish_node()
            self.builder.finish_node()
        self.expect(K.TOKEN_COLON, "':' after function parameter")
        self.parse_expr()
        self.builder.finish_node()

    def _parse_pattern_body(self) -> None:
        self.expect(K.TOKEN_L_BRACE, "'{'")
        while (kind := self.peek()) is not K.TOKEN_R_BRACE:
            if kind is K.TOKEN_ELLIPSIS:
                self.bump()
                if self.peek() is not K.TOKEN_R_BRACE:
                    raise self.error("expected '}' after '...'")
                break
            if kind is not K.TOKEN_IDENT:
                raise self.error("expected pattern entry")
            self.start_node(K.NODE_PAT_ENTRY)
            self._parse_ident()
            if self.peek() is K.TOKEN_QUESTION:
                self.bump()
                self.parse_expr()
            self.builder.finish_node()
            if self.peek() is K.TOKEN_COMMA:
                self.bump()
            elif self.peek() is not K.TOKEN_R_BRACE:
                raise self.error("expected ',' or '}' in pattern")
        self.expect(K.TOKEN_R_BRACE, "'}'")

    def _parse_operators(self, min_power: int) -> None:
        checkpoint = self.checkpoint()
        kind = self.peek()
        if kind is K.TOKEN_INVERT or kind is K.TOKEN_SUB:
            power = _INVERT_POWER if kind is K.TOKEN_INVERT else _NEGATE_POWER
            self.builder.start_node(K.NODE_UNARY_OP)
            self.bump()
            self._parse_operators(power)
            self.builder.finish_node()
        else:
            self._parse_apply()

        while True:
            kind = self.peek()
            if kind is K.TOKEN_QUESTION and _HAS_ATTR_POWER >= min_power:
                self.builder.start_node_at(checkpoint, K.NODE_HAS_ATTR)
                self.bump()
                self._parse_attrpath()
                self.builder.finish_node()
                continue
            if kind not in _BINARY_OPS:
                break
            left, right = _BINARY_OPS[kind]
            if left < min_power:
                break
            self.builder.start_node_at(checkpoint, K.NODE_BIN_OP)
            self.bump()
            self._parse_operators(right)
            self.builder.finish_node()

    def _parse_apply(self) -> None:
        checkpoint = self.checkpoint()
        self._parse_select()
        while self.peek() in _TERM_STARTS:
            self.builder.start_node_at(checkpoint, K.NODE_APPLY)
            self._parse_select()
            self.builder.finish_node()

    def _parse_select(self) -> None:
        checkpoint = self.checkpoint()
        self._parse_simple()
        if self.peek() is not K.TOKEN_DOT:
            return
        self.builder.start_node_at(checkpoint, K.NODE_SELECT)
        self.bump()
        self._parse_attrpath()
        token = self.peek_token()
        if token is not None and token.kind is K.TOKEN_IDENT and token.text == "or":
            self.bump()
            self._parse_select()
        self.builder.finish_node()

    def _parse_simple(self) -> None:  # noqa: C901, PLR0912
        kind = self.peek()
        if kind is K.TOKEN_IDENT:
            self._parse_ident()
        elif kind in (K.TOKEN_INTEGER, K.TOKEN_FLOAT, K.TOKEN_URI):
            self.start_node(K.NODE_LITERAL)
            self.bump()
            self.builder.finish_node()
        elif kind is K.TOKEN_PATH:
            self._parse_path()
        elif kind in (K.TOKEN_STRING_START, K.TOKEN_ISTRING_START):
            self._parse_string()
        elif kind is K.TOKEN_L_PAREN:
            self.start_node(K.NODE_PAREN)
            self.bump()
            self.parse_expr()
            self.expect(K.TOKEN_R_PAREN, "')'")
            self.builder.finish_node()
        elif kind is K.TOKEN_L_BRACK:
            self.start_node(K.NODE_LIST)
            self.bump()
            while self.peek() is not K.TOKEN_R_BRACK:
                if self.peek() is None:
                    raise self.error("unterminated list")
                if self.peek() is K.TOKEN_SUB:
                    # [ -1 ]
                    self.start_node(K.NODE_UNARY_OP)
                    self.bump()
                    self._parse_select()
                    self.builder.finish_node()
                else:
                    self._parse_select()
            self.bump()
            self.builder.finish_node()
        elif kind in (K.TOKEN_L_BRACE, K.TOKEN_REC):
            self.start_node(K.NODE_ATTR_SET)
            if kind is K.TOKEN_REC:
                self.bump()
            self.expect(K.TOKEN_L_BRACE, "'{'")
            self._parse_bindings(K.TOKEN_R_BRACE)
            self.expect(K.TOKEN_R_BRACE, "'}'")
            self.builder.finish_node()
        else:
            raise self.error("expected expression")

    def _parse_path(self) -> None:
        self.start_node(K.NODE_PATH)
        self.bump()
        # Interpolated paths continue with adjacent tokens, no trivia between.
        while self.pos < len(self.tokens):
            kind = self.tokens[self.pos].kind
            if kind is K.TOKEN_INTERPOL_START:
                self._parse_interpolation()
            elif kind is K.TOKEN_PATH:
                self.bump()
            else:
                break
        self.builder.finish_node()

    def _parse_string(self) -> None:
        self.start_node(K.NODE_STRING)
        closer = K.TOKEN_STRING_END if self.peek() is K.TOKEN_STRING_START else K.TOKEN_ISTRING_END
        self.bump()
        while (kind := self.peek()) is not closer:
            if kind is K.TOKEN_STRING_CONTENT:
                self.bump()
            elif kind is K.TOKEN_INTERPOL_START:
                self._parse_interpolation()
            else:
                raise self.error("unterminated string")
        self.bump()
        self.builder.finish_node()

    def _parse_interpolation(self) -> None:
        self.start_node(K.NODE_INTERPOL)
        self.bump()
        self.parse_expr()
        self.expect(K.TOKEN_INTERPOL_END, "'}' closing interpolation")
        self.builder.finish_node()

    def _parse_bindings(self, terminator: SyntaxKind) -> None:
        while (kind := self.peek()) is not terminator:
            if kind is None:
                raise self.error("unexpected end of input in bindings")
            if kind is K.TOKEN_INHERIT:
                self._parse_inherit()
            else:
                self._parse_attrpath_value()

    def _parse_inherit(self) -> None:
        self.start_node(K.NODE_INHERIT)
        self.bump()
        if self.peek() is K.TOKEN_L_PAREN:
            self.start_node(K.NODE_INHERIT_FROM)
            self.bump()
            self.parse_expr()
            self.expect(K.TOKEN_R_PAREN, "')'")
            self.builder.finish_node()
        while self.peek() in _ATTR_STARTS:
            self._parse_attr()
        self.expect(K.TOKEN_SEMICOLON, "';' after inherit")
        self.builder.finish_node()

    def _parse_attrpath_value(self) -> None:
        self.start_node(K.NODE_ATTRPATH_VALUE)
        self._parse_attrpath()
        self.expect(K.TOKEN_ASSIGN, "'='")
        self.parse_expr()
        self.expect(K.TOKEN_SEMICOLON, "';'")
        self.builder.finish_node()

    def _parse_attrpath(self) -> None:
        self.start_node(K.NODE_ATTRPATH)
        self._parse_attr()
        while self.peek() is K.TOKEN_DOT:
            self.bump()
            self._parse_attr()
        self.builder.finish_node()

    def _parse_attr(self) -> None:
        kind = self.peek()
        if kind is K.TOKEN_IDENT:
            self._parse_ident()
        elif kind is K.TOKEN_STRING_START:
            self._parse_string()
        elif kind is K.TOKEN_INTERPOL_START:
            self.start_node(K.NODE_DYNAMIC)
            self.bump()
            self.parse_expr()
            self.expect(K.TOKEN_INTERPOL_END, "'}' closing dynamic attribute")
            self.builder.finish_node()
        else:
            raise self.error("expected attribute name")

    def _parse_ident(self) -> None:
        self.start_node(K.NODE_IDENT)
        self.expect(K.TOKEN_IDENT, "identifier")
        self.builder.finish_node()
