"""Parser for spacing-sensitive arithmetic expressions.

Precedence climbing over a two-part key (see ``spaced.precedence``): the
whitespace in front of an operator's right operand decides how tightly it
binds, and the usual multiplicative/additive tiers only break ties.
``1 * 2+3`` therefore parses as ``(1 * (2 + 3))``.
"""

from __future__ import annotations

from spaced.ast_nodes import Binary, Expr, Literal, Unary
from spaced.errors import (
    E_EXPECTED_PRIMARY,
    E_NESTED_TOO_DEEP,
    E_TRAILING_INPUT,
    E_UNEXPECTED_END,
    ParseError,
)
from spaced.lexer import Lexer
from spaced.precedence import (
    BINARY_OPERATORS,
    LOOSEST,
    UNARY_ARGUMENT,
    Precedence,
    at_least,
    tighter_than,
)
from spaced.source import Span
from spaced.tokens import Token, TokenKind

_UNARY_WORDS = frozenset({"sqrt"})


class Parser:
    """Parses the token stream of a single expression into an AST."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer

    # ── Token access ─────────────────────────────────────────────

    def _eof_span(self) -> Span:
        lx = self.lexer
        return Span(lx.filename, lx.pos, lx.pos, lx.line, lx.col)

    def _text(self, tok: Token) -> str:
        return self.lexer.source[tok.span.start:tok.span.end]

    def _advance(self, expected: str) -> Token:
        tok = self.lexer.next_token()
        if tok is None:
            raise ParseError.at(
                E_UNEXPECTED_END,
                f"unexpected end of input, expected {expected}",
                self._eof_span(),
            )
        return tok

    def _peek_spacing(self, after: str) -> int:
        """Spacing of the next token, which must exist."""
        tok = self.lexer.peek()
        if tok is None:
            raise ParseError.at(
                E_UNEXPECTED_END,
                f"unexpected end of input after '{after}'",
                self._eof_span(),
                label="expected an expression",
            )
        return tok.spacing

    def _peek_operator(self) -> tuple[Token, Precedence] | None:
        """Next token and its precedence if it is a binary operator."""
        tok = self.lexer.peek()
        if tok is None or tok.kind != TokenKind.SYMBOL:
            return None
        algebraic = BINARY_OPERATORS.get(tok.value)
        if algebraic is None:
            return None
        return tok, Precedence(tok.spacing, algebraic)

    # ── Entry point ──────────────────────────────────────────────

    def parse(self) -> Expr:
        """Parse exactly one expression, rejecting anything left over."""
        try:
            expr = self.parse_expression(LOOSEST)
        except RecursionError:
            lx = self.lexer
            raise ParseError.at(
                E_NESTED_TOO_DEEP,
                "expression nested too deeply",
                Span(lx.filename, 0, len(lx.source), 1, 1),
            ) from None
        rest = self.lexer.peek()
        if rest is not None:
            raise ParseError.at(
                E_TRAILING_INPUT,
                f"unexpected '{self._text(rest)}' after complete expression",
                rest.span,
                label="expected end of input",
            )
        return expr

    def parse_expression(self, floor: Precedence) -> Expr:
        lhs = self.parse_primary()
        return self.parse_precedence(lhs, floor)

    # ── Primary expressions ──────────────────────────────────────

    def parse_primary(self) -> Expr:
        """Parse a number literal or a chain of unary operator applications."""
        # (operator, argument floor) from outermost to innermost
        pending: list[tuple[Token, Precedence]] = []
        tok = self._advance("an expression")
        while tok.is_symbol("-") or (tok.kind == TokenKind.WORD and tok.value in _UNARY_WORDS):
            # The argument binds tighter than any binary operator with the
            # same spacing as the argument itself.
            floor = Precedence(self._peek_spacing(tok.value), UNARY_ARGUMENT)
            pending.append((tok, floor))
            tok = self._advance("an expression")

        if tok.kind != TokenKind.NUMBER:
            raise ParseError.at(
                E_EXPECTED_PRIMARY,
                f"expected an expression, found '{self._text(tok)}'",
                tok.span,
                notes=["an expression starts with a number, '-' or 'sqrt'"],
            )

        expr: Expr = Literal(tok.value, tok.span)
        for op_tok, floor in reversed(pending):
            operand = self.parse_precedence(expr, floor)
            expr = Unary(op_tok.value, operand, op_tok.span.to(operand.span))
        return expr

    # ── Precedence climbing ──────────────────────────────────────

    def parse_precedence(self, lhs: Expr, floor: Precedence) -> Expr:
        """Fold binary operators at or above ``floor`` onto ``lhs``."""
        while True:
            peeked = self._peek_operator()
            if peeked is None or not at_least(peeked[1], floor):
                return lhs
            op_tok, prec = peeked
            self.lexer.next_token()

            # Right operand spacing with this operator's tier: trailing
            # operators must beat this to be absorbed into the rhs.
            rhs_floor = Precedence(self._peek_spacing(op_tok.value), prec.algebraic)
            rhs = self.parse_primary()

            while True:
                nxt = self._peek_operator()
                if nxt is None or not tighter_than(nxt[1], rhs_floor):
                    break
                rhs = self.parse_precedence(rhs, rhs_floor)

            lhs = Binary(op_tok.value, lhs, rhs, lhs.span.to(rhs.span))


def parse(text: str, filename: str = "<input>") -> Expr:
    """Lex and parse ``text`` into an expression AST.

    Raises ``LexError`` for malformed numerals and ``ParseError`` when the
    input is not exactly one expression.
    """
    return Parser(Lexer(text, filename)).parse()
