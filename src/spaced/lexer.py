"""Lexer for spacing-sensitive arithmetic expressions.

Produces tokens lazily from the input text. Every token records how many
whitespace characters separated it from the previous lexeme; the parser
uses that count as the primary precedence signal.
"""

from __future__ import annotations

from collections.abc import Iterator

from spaced.errors import E_INVALID_NUMBER, LexError
from spaced.source import Span
from spaced.tokens import CharClass, Token, TokenKind, classify


class Lexer:
    """Tokenizes an expression with one token of lookahead."""

    def __init__(self, source: str, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1
        self._peeked: Token | None = None

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        tok = self.next_token()
        if tok is None:
            raise StopIteration
        return tok

    def lex(self) -> list[Token]:
        """Tokenize the remaining input and return the token list."""
        return list(self)

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at end of input."""
        if self._peeked is None:
            self._peeked = self._scan()
        return self._peeked

    def next_token(self) -> Token | None:
        """Consume and return the next token, or None at end of input."""
        if self._peeked is not None:
            tok, self._peeked = self._peeked, None
            return tok
        return self._scan()

    def at_end(self) -> bool:
        return self.peek() is None

    # ── Scanning ─────────────────────────────────────────────────

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _gobble(self, cls: CharClass) -> str:
        """Consume the longest run of characters of class ``cls``."""
        start = self.pos
        while self.pos < len(self.source) and classify(self.source[self.pos]) == cls:
            self._advance()
        return self.source[start:self.pos]

    def _scan(self) -> Token | None:
        spacing = len(self._gobble(CharClass.WHITESPACE))
        if self.pos >= len(self.source):
            return None

        start, line, col = self.pos, self.line, self.col
        cls = classify(self.source[self.pos])

        if cls == CharClass.LETTER:
            kind, value = TokenKind.WORD, self._gobble(CharClass.LETTER)
        elif cls == CharClass.DIGIT:
            text = self._gobble(CharClass.DIGIT)
            kind, value = TokenKind.NUMBER, self._number(text, start, line, col)
        else:
            kind, value = TokenKind.SYMBOL, self._advance()

        span = Span(self.filename, start, self.pos, line, col)
        return Token(kind, value, spacing, span)

    def _number(self, text: str, start: int, line: int, col: int) -> float:
        # The run holds only ASCII digits and '.', so float() cannot
        # accept exponents, signs, underscores or inf/nan spellings here.
        try:
            return float(text)
        except ValueError:
            span = Span(self.filename, start, self.pos, line, col)
            notes = []
            if text.count(".") > 1:
                notes.append("a number may contain at most one '.'")
            raise LexError.at(
                E_INVALID_NUMBER,
                f"invalid number literal '{text}'",
                span,
                notes=notes,
            ) from None
