"""Arithmetic expression parser where whitespace decides precedence."""

from spaced.parser import parse

__version__ = "0.1.0"

__all__ = ["__version__", "parse"]
