"""Token kinds, character classes and token representation for the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Union

import regex as re

if TYPE_CHECKING:
    from spaced.source import Span


class TokenKind(Enum):
    NUMBER = auto()
    SYMBOL = auto()
    WORD = auto()


class CharClass(Enum):
    LETTER = auto()
    DIGIT = auto()
    WHITESPACE = auto()
    SYMBOL = auto()


_DIGITS = frozenset("0123456789.")
# Unicode White_Space and Alphabetic properties, not str.isspace/isalpha
_LETTER_RE = re.compile(r"[\p{Alphabetic}_]")
_WHITESPACE_RE = re.compile(r"\p{White_Space}")


def classify(ch: str) -> CharClass:
    """Classify a single character for lexeme grouping."""
    if _LETTER_RE.match(ch):
        return CharClass.LETTER
    if ch in _DIGITS:
        return CharClass.DIGIT
    if _WHITESPACE_RE.match(ch):
        return CharClass.WHITESPACE
    return CharClass.SYMBOL


@dataclass(frozen=True)
class Token:
    """A lexeme plus the count of whitespace characters preceding it.

    ``value`` is a ``float`` for NUMBER tokens and the source text for
    SYMBOL (always one character) and WORD tokens.
    """

    kind: TokenKind
    value: Union[float, str]
    spacing: int
    span: Span

    def is_symbol(self, ch: str) -> bool:
        return self.kind == TokenKind.SYMBOL and self.value == ch
