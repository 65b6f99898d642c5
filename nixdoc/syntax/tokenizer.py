"""Lossless tokenizer for Nix source text.

Every character of the input ends up in exactly one token, trivia
(whitespace and comments) included, so that the concatenated token texts
reproduce the source. Strings, indented strings and interpolated paths are
lexed with a mode stack; braces are counted per mode so that the ``}``
closing an interpolation is told apart from one closing an attribute set.
"""

import re
from dataclasses import dataclass
from typing import NamedTuple

from nixdoc.exceptions import NixParseError
from nixdoc.syntax.kinds import KEYWORDS, OPERATORS, SyntaxKind

_PATH_CHAR = r"[a-zA-Z0-9._\-+]"

_WHITESPACE_RE = re.compile(r"[ \t\r\n]+")
_LINE_COMMENT_RE = re.compile(r"#[^\r\n]*")
_PATH_CONTINUATION_RE = re.compile(r"[a-zA-Z0-9._\-+/]+")

# Candidates for the longest-match rule; on equal length the earlier wins.
_LITERALS: tuple[tuple[SyntaxKind, re.Pattern[str]], ...] = (
    (SyntaxKind.TOKEN_PATH, re.compile(rf"(?:~|{_PATH_CHAR}*)(?:/{_PATH_CHAR}+)*/(?=\$\{{)")),
    (SyntaxKind.TOKEN_PATH, re.compile(rf"(?:~|{_PATH_CHAR}*)(?:/{_PATH_CHAR}+)+")),
    (SyntaxKind.TOKEN_PATH, re.compile(rf"<{_PATH_CHAR}+(?:/{_PATH_CHAR}+)*>")),
    (SyntaxKind.TOKEN_URI, re.compile(r"[a-zA-Z][a-zA-Z0-9+\-.]*:[a-zA-Z0-9%/?:@&=+$,\-_.!~*']+")),
    (SyntaxKind.TOKEN_FLOAT, re.compile(r"(?:[1-9][0-9]*\.[0-9]*|0?\.[0-9]+)(?:[Ee][+-]?[0-9]+)?")),
    (SyntaxKind.TOKEN_INTEGER, re.compile(r"[0-9]+")),
    (SyntaxKind.TOKEN_IDENT, re.compile(r"[a-zA-Z_][a-zA-Z0-9_'\-]*")),
)


class Token(NamedTuple):
    """A raw token: kind, exact source text and start offset."""

    kind: SyntaxKind
    text: str
    offset: int


@dataclass
class _Frame:
    mode: str  # "expr", "interp", "string", "istring" or "path"
    start: int = 0
    depth: int = 0


def position(source: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-based (line, column) pair."""
    line = source.count("\n", 0, offset) + 1
    column = offset - source.rfind("\n", 0, offset)
    return line, column


def tokenize(source: str) -> list[Token]:
    """Split Nix source into tokens.

    Raises:
        NixParseError: On unterminated strings or comments and on
            characters that cannot start any token.
    """
    return _Lexer(source).run()


class _Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: list[Token] = []
        self.stack: list[_Frame] = [_Frame("expr")]

    def run(self) -> list[Token]:
        while self.pos < len(self.source):
            frame = self.stack[-1]
            if frame.mode == "string":
                self._lex_string(frame)
            elif frame.mode == "istring":
                self._lex_istring(frame)
            elif frame.mode == "path":
                self._lex_path()
            else:
                self._lex_expr(frame)

        for frame in self.stack:
            if frame.mode in ("string", "istring"):
                self._fail("unterminated string", frame.start)
        return self.tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, kind: SyntaxKind, length: int) -> None:
        self.tokens.append(Token(kind, self.source[self.pos : self.pos + length], self.pos))
        self.pos += length

    def _fail(self, message: str, offset: int) -> None:
        line, column = position(self.source, offset)
        raise NixParseError(message, line, column)

    def _startswith(self, prefix: str, offset: int | None = None) -> bool:
        return self.source.startswith(prefix, self.pos if offset is None else offset)

    def _push_interpolation(self) -> None:
        self._emit(SyntaxKind.TOKEN_INTERPOL_START, 2)
        self.stack.append(_Frame("interp", start=self.pos))

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def _lex_expr(self, frame: _Frame) -> None:  # noqa: C901, PLR0911
        src, pos = self.source, self.pos

        if match := _WHITESPACE_RE.match(src, pos):
            self._emit(SyntaxKind.TOKEN_WHITESPACE, match.end() - pos)
            return
        if match := _LINE_COMMENT_RE.match(src, pos):
            self._emit(SyntaxKind.TOKEN_COMMENT, match.end() - pos)
            return
        if self._startswith("/*"):
            end = src.find("*/", pos + 2)
            if end == -1:
                self._fail("unterminated comment", pos)
            self._emit(SyntaxKind.TOKEN_COMMENT, end + 2 - pos)
            return

        if self._startswith("${"):
            self._push_interpolation()
            return
        if self._startswith("{"):
            frame.depth += 1
            self._emit(SyntaxKind.TOKEN_L_BRACE, 1)
            return
        if self._startswith("}"):
            if frame.depth == 0 and frame.mode == "interp":
                self._emit(SyntaxKind.TOKEN_INTERPOL_END, 1)
                self.stack.pop()
            else:
                frame.depth = max(frame.depth - 1, 0)
                self._emit(SyntaxKind.TOKEN_R_BRACE, 1)
            return
        if self._startswith('"'):
            self.stack.append(_Frame("string", start=pos))
            self._emit(SyntaxKind.TOKEN_STRING_START, 1)
            return
        if self._startswith("''"):
            self.stack.append(_Frame("istring", start=pos))
            self._emit(SyntaxKind.TOKEN_ISTRING_START, 2)
            return

        best: tuple[SyntaxKind, int] | None = None
        for kind, pattern in _LITERALS:
            match = pattern.match(src, pos)
            if match and match.end() > pos and (best is None or match.end() - pos > best[1]):
                best = (kind, match.end() - pos)
        if best is not None:
            kind, length = best
            if kind is SyntaxKind.TOKEN_IDENT:
                kind = KEYWORDS.get(src[pos : pos + length], kind)
            self._emit(kind, length)
            if kind is SyntaxKind.TOKEN_PATH and self._startswith("${"):
                self.stack.append(_Frame("path", start=pos))
            return

        for spelling, kind in OPERATORS:
            if self._startswith(spelling):
                self._emit(kind, len(spelling))
                return

        self._fail(f"unexpected character {src[pos]!r}", pos)

    def _lex_path(self) -> None:
        if self._startswith("${"):
            self._push_interpolation()
            return
        if match := _PATH_CONTINUATION_RE.match(self.source, self.pos):
            self._emit(SyntaxKind.TOKEN_PATH, match.end() - self.pos)
            return
        self.stack.pop()

    def _lex_string(self, frame: _Frame) -> None:
        src = self.source
        if self._startswith('"'):
            self._emit(SyntaxKind.TOKEN_STRING_END, 1)
            self.stack.pop()
            return
        if self._startswith("${"):
            self._push_interpolation()
            return

        end = self.pos
        while end < len(src):
            if src[end] == '"' or src.startswith("${", end):
                break
            if src[end] == "\\" or src.startswith("$$", end):
                end += 2
                continue
            end += 1
        if end >= len(src):
            self._fail("unterminated string", frame.start)
        self._emit(SyntaxKind.TOKEN_STRING_CONTENT, end - self.pos)

    def _lex_istring(self, frame: _Frame) -> None:
        src = self.source
        if self._startswith("''") and not self._is_istring_escape(self.pos):
            self._emit(SyntaxKind.TOKEN_ISTRING_END, 2)
            self.stack.pop()
            return
        if self._startswith("${"):
            self._push_interpolation()
            return

        end = self.pos
        while end < len(src):
            if src.startswith("''", end):
                if not self._is_istring_escape(end):
                    break
                end += 4 if src.startswith("''\\", end) else 3
                continue
            if src.startswith("$$", end):
                end += 2
                continue
            if src.startswith("${", end):
                break
            end += 1
        if end >= len(src):
            self._fail("unterminated string", frame.start)
        self._emit(SyntaxKind.TOKEN_STRING_CONTENT, end - self.pos)

    def _is_istring_escape(self, offset: int) -> bool:
        return any(self.source.startswith(escape, offset) for escape in ("'''", "''$", "''\\"))
