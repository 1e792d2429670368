"""Compiler-style diagnostics and the lexer/parser exception hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spaced.source import Source, Span


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# Diagnostic codes
E_INVALID_NUMBER = "E100"
E_UNEXPECTED_END = "E200"
E_EXPECTED_PRIMARY = "E201"
E_TRAILING_INPUT = "E202"
E_NESTED_TOO_DEEP = "E203"

# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific input location."""

    span: Span
    message: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and notes."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics against the input they were produced from."""

    def __init__(self, source: Source | None = None, *, color: bool = True) -> None:
        self.source = source
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        color = _COLORS[diag.severity]

        # Header: error[E201]: message
        lines.append(
            f"{self._c(color)}{diag.severity.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            span = label.span
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {span}")
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")
            if self.source is None:
                continue

            gutter = f"{span.line:>4}"
            lines.append(
                f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} "
                f"{self.source.line_at(span.line)}"
            )
            # Zero-width spans (end of input) still get one caret
            carets = "^" * max(1, span.end - span.start)
            padding = " " * (span.col - 1)
            lines.append(
                f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                f"{padding}{self._c(color)}{carets}{self._c(_RESET)}"
            )
            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class CompileError(Exception):
    """Failure carrying one or more diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")

    @classmethod
    def at(cls, code: str, message: str, span: Span, *, label: str = "",
           notes: list[str] | None = None) -> CompileError:
        """Build an error carrying a single labelled diagnostic."""
        diag = Diagnostic(
            severity=Severity.ERROR,
            code=code,
            message=message,
            labels=[DiagnosticLabel(span=span, message=label)],
            notes=notes or [],
        )
        return cls([diag])

    @property
    def code(self) -> str:
        return self.diagnostics[0].code


class LexError(CompileError):
    """A lexeme could not be converted into a token."""


class ParseError(CompileError):
    """The token stream does not form exactly one expression."""
