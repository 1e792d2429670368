"""AST node definitions for parsed expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from spaced.source import Span


@dataclass(frozen=True)
class Literal:
    value: float
    span: Span


@dataclass(frozen=True)
class Unary:
    op: str  # "-" or "sqrt"
    operand: Expr
    span: Span


@dataclass(frozen=True)
class Binary:
    op: str
    left: Expr
    right: Expr
    span: Span


Expr = Union[Literal, Unary, Binary]
