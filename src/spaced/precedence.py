"""Two-part operator precedence: source spacing first, algebraic tier second.

For both fields a *smaller* number binds *tighter*, which is the reverse of
natural numeric order. Comparisons therefore go through the explicit
functions below instead of ``<``/``>`` on the pair.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

# Algebraic tiers
UNARY_ARGUMENT = 0
MULTIPLICATIVE = 1
ADDITIVE = 2

BINARY_OPERATORS: dict[str, int] = {
    "*": MULTIPLICATIVE,
    "/": MULTIPLICATIVE,
    "+": ADDITIVE,
    "-": ADDITIVE,
}


@dataclass(frozen=True)
class Precedence:
    spacing: int
    algebraic: int


# Floor that every real operator meets
LOOSEST = Precedence(spacing=sys.maxsize, algebraic=sys.maxsize)


def compare(a: Precedence, b: Precedence) -> int:
    """Return 1 if ``a`` binds tighter than ``b``, -1 if looser, 0 if equal."""
    if a.spacing != b.spacing:
        return 1 if a.spacing < b.spacing else -1
    if a.algebraic != b.algebraic:
        return 1 if a.algebraic < b.algebraic else -1
    return 0


def at_least(prec: Precedence, floor: Precedence) -> bool:
    """True if ``prec`` binds at least as tightly as ``floor``."""
    return compare(prec, floor) >= 0


def tighter_than(prec: Precedence, floor: Precedence) -> bool:
    """True if ``prec`` binds strictly tighter than ``floor``."""
    return compare(prec, floor) > 0
