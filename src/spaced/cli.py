"""spaced command-line interface."""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from spaced import __version__
from spaced.ast_nodes import Expr
from spaced.config import SpacedConfig, discover_config
from spaced.errors import CompileError, DiagnosticRenderer
from spaced.formatter import STYLES, ExprFormatter
from spaced.lexer import Lexer
from spaced.parser import Parser
from spaced.source import Source

_FILENAME = "<input>"


def _read_expression(expression: str | None, use_stdin: bool) -> str:
    if use_stdin:
        if expression is not None:
            raise click.UsageError("pass either EXPRESSION or --stdin, not both")
        text = sys.stdin.read()
        return text[:-1] if text.endswith("\n") else text
    if expression is None:
        raise click.UsageError("missing EXPRESSION (or pass --stdin)")
    return expression


def _report(error: CompileError, text: str, color: bool) -> NoReturn:
    renderer = DiagnosticRenderer(Source(text, _FILENAME), color=color)
    for diag in error.diagnostics:
        click.echo(renderer.render(diag), err=True)
    raise SystemExit(1)


def _parse_or_exit(text: str, color: bool) -> Expr:
    try:
        return Parser(Lexer(text, _FILENAME)).parse()
    except CompileError as e:
        _report(e, text, color)


@click.group()
@click.version_option(__version__, prog_name="spaced")
@click.pass_context
def main(ctx: click.Context) -> None:
    """Parse arithmetic where spacing outranks operator precedence."""
    try:
        ctx.obj = discover_config()
    except ValueError as e:
        raise click.ClickException(f"invalid config: {e}")


@main.command()
@click.argument("expression", required=False)
@click.option("--style", type=click.Choice(STYLES), default=None,
              help="Output style (default from spaced.toml, else parens).")
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
@click.option("--stdin", "use_stdin", is_flag=True, help="Read the expression from stdin.")
@click.pass_obj
def parse(config: SpacedConfig, expression: str | None, style: str | None,
          color: bool | None, use_stdin: bool) -> None:
    """Parse EXPRESSION and print its fully parenthesized form."""
    text = _read_expression(expression, use_stdin)
    if color is None:
        color = config.diagnostics.color
    expr = _parse_or_exit(text, color)
    click.echo(ExprFormatter().render(expr, style or config.output.style))


@main.command()
@click.argument("expression")
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
@click.pass_obj
def tokens(config: SpacedConfig, expression: str, color: bool | None) -> None:
    """List the tokens of EXPRESSION with their preceding spacing."""
    if color is None:
        color = config.diagnostics.color
    try:
        toks = Lexer(expression, _FILENAME).lex()
    except CompileError as e:
        _report(e, expression, color)
    for tok in toks:
        text = expression[tok.span.start:tok.span.end]
        click.echo(f"{tok.kind.name:<6} {text:<8} spacing={tok.spacing}")


@main.command()
@click.argument("expression")
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
@click.pass_obj
def view(config: SpacedConfig, expression: str, color: bool | None) -> None:
    """View the AST of EXPRESSION."""
    if color is None:
        color = config.diagnostics.color
    _dump_ast(_parse_or_exit(expression, color), 0)


def _dump_ast(root: object, depth: int) -> None:
    """Print a readable AST dump."""
    stack: list[tuple[object, int]] = [(root, depth)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, str):
            click.echo(node)
            continue
        indent = "  " * depth
        click.echo(f"{indent}{type(node).__name__}")
        children: list[tuple[object, int]] = []
        for field_name in node.__dataclass_fields__:  # type: ignore[attr-defined]
            if field_name == "span":
                continue
            value = getattr(node, field_name)
            if hasattr(value, "__dataclass_fields__"):
                children.append((f"{indent}  {field_name}:", depth))
                children.append((value, depth + 2))
            else:
                children.append((f"{indent}  {field_name}: {value!r}", depth))
        stack.extend(reversed(children))
