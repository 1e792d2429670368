"""Tests for the spacing-sensitive expression parser."""

from __future__ import annotations

import sys

import pytest

from spaced import parse
from spaced.ast_nodes import Binary, Literal, Unary
from spaced.errors import CompileError, LexError, ParseError
from spaced.formatter import ExprFormatter


def render(source: str) -> str:
    """Helper: parse source and return its canonical rendering."""
    return ExprFormatter().format(parse(source))


def parse_fails(source: str, code: str) -> ParseError:
    """Helper: assert that source fails to parse with the given code."""
    with pytest.raises(ParseError) as ei:
        parse(source)
    assert ei.value.code == code, ei.value.diagnostics
    return ei.value


class TestAlgebraicPrecedence:
    def test_literal(self):
        assert render("1.2 + 3.4") == "(1.2 + 3.4)"

    def test_multiplicative_binds_tighter_at_equal_spacing(self):
        assert render("1+2*3") == "(1 + (2 * 3))"
        assert render("1 + 2 * 3") == "(1 + (2 * 3))"

    def test_left_associative(self):
        assert render("1-2-3") == "((1 - 2) - 3)"
        assert render("8 / 4 / 2") == "((8 / 4) / 2)"


class TestSpacingPrecedence:
    def test_tight_addition_beats_loose_multiplication(self):
        assert render("1 * 2+3") == "(1 * (2 + 3))"

    def test_equivalent_spacing_patterns(self):
        assert render("1* 2+ 3") == "(1 * (2 + 3))"

    def test_loose_multiplication_applies_last(self):
        assert render("1+2 * 3") == "((1 + 2) * 3)"

    def test_spacing_dominates_algebraic_class(self):
        assert render("1*    3+4   -   5/6") == "(1 * ((3 + 4) - (5 / 6)))"

    def test_spacing_tie_falls_back_to_algebraic_class(self):
        assert render("1*    3+4    -   5/6") == "((1 * (3 + 4)) - (5 / 6))"


class TestUnary:
    def test_sqrt(self):
        assert render("sqrt 1") == "(sqrt 1)"

    def test_nested_sqrt_binds_primary(self):
        assert render("sqrt sqrt 1 + 1") == "((sqrt (sqrt 1)) + 1)"

    def test_inner_spacing_widens_inner_argument(self):
        assert render("sqrt sqrt  1 + 1") == "(sqrt (sqrt (1 + 1)))"

    def test_outer_spacing_widens_outer_argument(self):
        assert render("sqrt   sqrt 1 + 1") == "(sqrt ((sqrt 1) + 1))"

    def test_negation(self):
        assert render("- 1") == "(- 1)"
        assert render("-1 + 2") == "((- 1) + 2)"
        assert render("- 1+2") == "(- (1 + 2))"

    def test_negation_as_right_operand(self):
        assert render("1 - -2") == "(1 - (- 2))"

    def test_long_negation_chain(self):
        assert render("-" * 1000 + "1") == "(- " * 1000 + "1" + ")" * 1000

    def test_long_sqrt_chain(self):
        expr = parse("sqrt " * 1000 + "1")
        for _ in range(1000):
            assert isinstance(expr, Unary)
            expr = expr.operand
        assert isinstance(expr, Literal)

    def test_chain_then_binary(self):
        assert render("- - 1 + 2") == "((- (- 1)) + 2)"
        assert render("- -  1 + 2") == "(- (- (1 + 2)))"

    def test_node_types(self):
        expr = parse("sqrt 4 * 2")
        assert isinstance(expr, Binary)
        assert isinstance(expr.left, Unary)
        assert expr.left.op == "sqrt"
        assert expr.right == Literal(2.0, expr.right.span)


class TestParseFailures:
    def test_empty_input(self):
        parse_fails("", "E200")

    def test_whitespace_only(self):
        parse_fails("   ", "E200")

    def test_unrecognized_symbol(self):
        parse_fails(")", "E201")

    def test_unknown_word(self):
        err = parse_fails("cbrt 8", "E201")
        assert "'cbrt'" in str(err)

    def test_trailing_garbage(self):
        err = parse_fails("1 + 2 )", "E202")
        span = err.diagnostics[0].labels[0].span
        assert (span.start, span.col) == (6, 7)

    def test_two_numbers(self):
        parse_fails("1 2", "E202")

    def test_unknown_operator_is_trailing(self):
        parse_fails("1 % 2", "E202")

    def test_missing_right_operand(self):
        parse_fails("1 +", "E200")

    def test_missing_unary_argument(self):
        parse_fails("sqrt", "E200")
        parse_fails("1 * -", "E200")

    def test_nesting_beyond_stack_is_parse_error(self):
        # each operator is tighter than the one before, so every rhs
        # absorbs the rest of the input one level deeper
        levels = sys.getrecursionlimit() + 200
        source = "1" + "".join(" " * k + "+" + " " * k + "1" for k in range(levels, 0, -1))
        parse_fails(source, "E203")

    def test_lex_error_propagates(self):
        with pytest.raises(LexError):
            parse("1 + 1.2.3")

    def test_error_kinds_are_distinct(self):
        assert issubclass(ParseError, CompileError)
        assert issubclass(LexError, CompileError)
        assert not issubclass(LexError, ParseError)


class TestParseResult:
    def test_deterministic(self):
        source = "1*    3+4   -   5/6"
        assert parse(source) == parse(source)

    def test_spans_cover_subexpressions(self):
        expr = parse("1 + 22")
        assert (expr.span.start, expr.span.end) == (0, 6)
        assert (expr.right.span.start, expr.right.span.end) == (4, 6)

    def test_unary_span_starts_at_operator(self):
        expr = parse("  sqrt 9")
        assert (expr.span.start, expr.span.end) == (2, 8)

    def test_filename(self):
        with pytest.raises(ParseError) as ei:
            parse(")", "calc.txt")
        assert str(ei.value.diagnostics[0].labels[0].span) == "calc.txt:1:1"
