"""Node and token kinds of the Nix concrete syntax tree."""

from enum import StrEnum


class SyntaxKind(StrEnum):
    """Kind tag shared by tokens (TOKEN_*) and nodes (NODE_*)."""

    # Trivia
    TOKEN_WHITESPACE = "TOKEN_WHITESPACE"
    TOKEN_COMMENT = "TOKEN_COMMENT"

    # Keywords
    TOKEN_ASSERT = "TOKEN_ASSERT"
    TOKEN_ELSE = "TOKEN_ELSE"
    TOKEN_IF = "TOKEN_IF"
    TOKEN_IN = "TOKEN_IN"
    TOKEN_INHERIT = "TOKEN_INHERIT"
    TOKEN_LET = "TOKEN_LET"
    TOKEN_REC = "TOKEN_REC"
    TOKEN_THEN = "TOKEN_THEN"
    TOKEN_WITH = "TOKEN_WITH"

    # Punctuation
    TOKEN_L_BRACE = "TOKEN_L_BRACE"
    TOKEN_R_BRACE = "TOKEN_R_BRACE"
    TOKEN_L_BRACK = "TOKEN_L_BRACK"
    TOKEN_R_BRACK = "TOKEN_R_BRACK"
    TOKEN_L_PAREN = "TOKEN_L_PAREN"
    TOKEN_R_PAREN = "TOKEN_R_PAREN"
    TOKEN_ASSIGN = "TOKEN_ASSIGN"
    TOKEN_AT = "TOKEN_AT"
    TOKEN_COLON = "TOKEN_COLON"
    TOKEN_COMMA = "TOKEN_COMMA"
    TOKEN_DOT = "TOKEN_DOT"
    TOKEN_ELLIPSIS = "TOKEN_ELLIPSIS"
    TOKEN_QUESTION = "TOKEN_QUESTION"
    TOKEN_SEMICOLON = "TOKEN_SEMICOLON"

    # Operators
    TOKEN_CONCAT = "TOKEN_CONCAT"
    TOKEN_INVERT = "TOKEN_INVERT"
    TOKEN_UPDATE = "TOKEN_UPDATE"
    TOKEN_ADD = "TOKEN_ADD"
    TOKEN_SUB = "TOKEN_SUB"
    TOKEN_MUL = "TOKEN_MUL"
    TOKEN_DIV = "TOKEN_DIV"
    TOKEN_AND_AND = "TOKEN_AND_AND"
    TOKEN_OR_OR = "TOKEN_OR_OR"
    TOKEN_EQUAL = "TOKEN_EQUAL"
    TOKEN_NOT_EQUAL = "TOKEN_NOT_EQUAL"
    TOKEN_LESS = "TOKEN_LESS"
    TOKEN_LESS_OR_EQ = "TOKEN_LESS_OR_EQ"
    TOKEN_MORE = "TOKEN_MORE"
    TOKEN_MORE_OR_EQ = "TOKEN_MORE_OR_EQ"
    TOKEN_IMPLICATION = "TOKEN_IMPLICATION"
    TOKEN_PIPE_RIGHT = "TOKEN_PIPE_RIGHT"
    TOKEN_PIPE_LEFT = "TOKEN_PIPE_LEFT"

    # Literals
    TOKEN_FLOAT = "TOKEN_FLOAT"
    TOKEN_IDENT = "TOKEN_IDENT"
    TOKEN_INTEGER = "TOKEN_INTEGER"
    TOKEN_INTERPOL_END = "TOKEN_INTERPOL_END"
    TOKEN_INTERPOL_START = "TOKEN_INTERPOL_START"
    TOKEN_PATH = "TOKEN_PATH"
    TOKEN_URI = "TOKEN_URI"
    TOKEN_STRING_CONTENT = "TOKEN_STRING_CONTENT"
    TOKEN_STRING_END = "TOKEN_STRING_END"
    TOKEN_STRING_START = "TOKEN_STRING_START"
    TOKEN_ISTRING_END = "TOKEN_ISTRING_END"
    TOKEN_ISTRING_START = "TOKEN_ISTRING_START"

    # Nodes
    NODE_ROOT = "NODE_ROOT"
    NODE_APPLY = "NODE_APPLY"
    NODE_ASSERT = "NODE_ASSERT"
    NODE_ATTRPATH = "NODE_ATTRPATH"
    NODE_ATTRPATH_VALUE = "NODE_ATTRPATH_VALUE"
    NODE_ATTR_SET = "NODE_ATTR_SET"
    NODE_BIN_OP = "NODE_BIN_OP"
    NODE_DYNAMIC = "NODE_DYNAMIC"
    NODE_HAS_ATTR = "NODE_HAS_ATTR"
    NODE_IDENT = "NODE_IDENT"
    NODE_IDENT_PARAM = "NODE_IDENT_PARAM"
    NODE_IF_ELSE = "NODE_IF_ELSE"
    NODE_INHERIT = "NODE_INHERIT"
    NODE_INHERIT_FROM = "NODE_INHERIT_FROM"
    NODE_INTERPOL = "NODE_INTERPOL"
    NODE_LAMBDA = "NODE_LAMBDA"
    NODE_LET_IN = "NODE_LET_IN"
    NODE_LIST = "NODE_LIST"
    NODE_LITERAL = "NODE_LITERAL"
    NODE_PAREN = "NODE_PAREN"
    NODE_PATH = "NODE_PATH"
    NODE_PAT_BIND = "NODE_PAT_BIND"
    NODE_PAT_ENTRY = "NODE_PAT_ENTRY"
    NODE_PATTERN = "NODE_PATTERN"
    NODE_SELECT = "NODE_SELECT"
    NODE_STRING = "NODE_STRING"
    NODE_UNARY_OP = "NODE_UNARY_OP"
    NODE_WITH = "NODE_WITH"

    @property
    def is_trivia(self) -> bool:
        return self in (SyntaxKind.TOKEN_WHITESPACE, SyntaxKind.TOKEN_COMMENT)


KEYWORDS: dict[str, SyntaxKind] = {
    "assert": SyntaxKind.TOKEN_ASSERT,
    "else": SyntaxKind.TOKEN_ELSE,
    "if": SyntaxKind.TOKEN_IF,
    "in": SyntaxKind.TOKEN_IN,
    "inherit": SyntaxKind.TOKEN_INHERIT,
    "let": SyntaxKind.TOKEN_LET,
    "rec": SyntaxKind.TOKEN_REC,
    "then": SyntaxKind.TOKEN_THEN,
    "with": SyntaxKind.TOKEN_WITH,
}

# Longest spelling first so that prefixes never shadow longer operators.
OPERATORS: tuple[tuple[str, SyntaxKind], ...] = (
    ("...", SyntaxKind.TOKEN_ELLIPSIS),
    ("->", SyntaxKind.TOKEN_IMPLICATION),
    ("||", SyntaxKind.TOKEN_OR_OR),
    ("&&", SyntaxKind.TOKEN_AND_AND),
    ("==", SyntaxKind.TOKEN_EQUAL),
    ("!=", SyntaxKind.TOKEN_NOT_EQUAL),
    ("<=", SyntaxKind.TOKEN_LESS_OR_EQ),
    (">=", SyntaxKind.TOKEN_MORE_OR_EQ),
    ("//", SyntaxKind.TOKEN_UPDATE),
    ("++", SyntaxKind.TOKEN_CONCAT),
    ("|>", SyntaxKind.TOKEN_PIPE_RIGHT),
    ("<|", SyntaxKind.TOKEN_PIPE_LEFT),
    ("<", SyntaxKind.TOKEN_LESS),
    (">", SyntaxKind.TOKEN_MORE),
    ("!", SyntaxKind.TOKEN_INVERT),
    ("+", SyntaxKind.TOKEN_ADD),
    ("-", SyntaxKind.TOKEN_SUB),
    ("*", SyntaxKind.TOKEN_MUL),
    ("/", SyntaxKind.TOKEN_DIV),
    ("?", SyntaxKind.TOKEN_QUESTION),
    (".", SyntaxKind.TOKEN_DOT),
    (":", SyntaxKind.TOKEN_COLON),
    (";", SyntaxKind.TOKEN_SEMICOLON),
    (",", SyntaxKind.TOKEN_COMMA),
    ("=", SyntaxKind.TOKEN_ASSIGN),
    ("@", SyntaxKind.TOKEN_AT),
    ("(", SyntaxKind.TOKEN_L_PAREN),
    (")", SyntaxKind.TOKEN_R_PAREN),
    ("[", SyntaxKind.TOKEN_L_BRACK),
    ("]", SyntaxKind.TOKEN_R_BRACK),
)
