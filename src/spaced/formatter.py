"""Textual renderings of a parsed expression.

``ExprFormatter.format`` gives the canonical fully parenthesised form, one
space around every token: ``(1 * (2 + 3))``, ``(sqrt 1)``.
``ExprFormatter.outline`` gives an indented one-node-per-line tree.
"""

from __future__ import annotations

import math
from decimal import Decimal

from spaced.ast_nodes import Binary, Expr, Literal, Unary

STYLES = ("parens", "tree")


def format_number(value: float) -> str:
    """Shortest round-trip decimal form, no exponent, no trailing ``.0``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class ExprFormatter:
    """Renders expression ASTs as text."""

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def render(self, expr: Expr, style: str = "parens") -> str:
        if style == "parens":
            return self.format(expr)
        if style == "tree":
            return self.outline(expr)
        raise ValueError(f"unknown output style {style!r}")

    def format(self, expr: Expr) -> str:
        parts: list[str] = []
        # Nodes and literal text pieces, popped in output order
        stack: list[Expr | str] = [expr]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Literal):
                parts.append(format_number(item.value))
            elif isinstance(item, Unary):
                stack.extend([")", item.operand, f"({item.op} "])
            elif isinstance(item, Binary):
                stack.extend([")", item.right, f" {item.op} ", item.left, "("])
            else:
                raise TypeError(f"not an expression node: {type(item).__name__}")
        return "".join(parts)

    def outline(self, expr: Expr) -> str:
        lines: list[str] = []
        stack: list[tuple[Expr, int]] = [(expr, 0)]
        while stack:
            node, depth = stack.pop()
            pad = self.indent * depth
            if isinstance(node, Literal):
                lines.append(f"{pad}Literal {format_number(node.value)}")
            elif isinstance(node, Unary):
                lines.append(f"{pad}Unary {node.op}")
                stack.append((node.operand, depth + 1))
            elif isinstance(node, Binary):
                lines.append(f"{pad}Binary {node.op}")
                stack.extend([(node.right, depth + 1), (node.left, depth + 1)])
            else:
                raise TypeError(f"not an expression node: {type(node).__name__}")
        return "\n".join(lines)
