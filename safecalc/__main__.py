"""CLI for the safecalc expression evaluator.

Usage:
    python -m safecalc eval "2 + 3 * 4"          # Print the result
    python -m safecalc eval -- "-(2 + 3)"        # Leading '-' needs '--'
    python -m safecalc rpn "2 ^ 3 ^ 2"           # Show tokens and postfix order
    python -m safecalc repl                      # Interactive calculator
    python -m safecalc --log-level DEBUG eval "1 + 2"
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from safecalc.config import Settings, configure_logging, load_settings
from safecalc.converter import to_postfix
from safecalc.engine import check_characters, evaluate_expression
from safecalc.errors import EvalError
from safecalc.evaluator import evaluate, precise
from safecalc.models import Number, Token
from safecalc.session import ERROR_DISPLAY, Session, UnaryFunction, format_result, trace
from safecalc.tokenizer import tokenize

app = typer.Typer(
    name="safecalc",
    help="Safe arithmetic expression evaluator (no eval)",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_COMMANDS = (":q", ":quit", ":exit")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="DEBUG, INFO, WARNING, ERROR"),
    width: Optional[int] = typer.Option(None, "--width", "-w", min=1, help="Display width in characters"),
) -> None:
    """Load settings from SAFECALC_* env vars, then apply CLI overrides."""
    settings = load_settings()
    if log_level:
        settings.log_level = log_level.upper()
    if width:
        settings.display_width = width
    configure_logging(settings.log_level, console)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else load_settings()


@app.command("eval")
def cmd_eval(
    ctx: typer.Context,
    expression: str = typer.Argument(help="Expression, e.g. '2 + 3 * 4'"),
) -> None:
    """Evaluate an expression and print the result."""
    settings = _settings(ctx)
    trace(expression)
    try:
        value = evaluate_expression(expression)
    except EvalError as e:
        typer.echo(ERROR_DISPLAY)
        console.print(f"[red]{e.kind.value}[/red]: {e}")
        raise typer.Exit(1)

    text = format_result(value, settings.display_width)
    typer.echo(text)
    if text == ERROR_DISPLAY:
        console.print(f"[red]non-finite result[/red]: {value}")
        raise typer.Exit(1)


def _token_kind(tok: Token) -> str:
    if isinstance(tok, Number):
        return "number"
    return "operator" if tok.is_operator else "paren"


def _token_table(title: str, tokens: list[Token]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Token", style="green", min_width=6)
    table.add_column("Kind", min_width=8)
    table.add_column("Prec", justify="right")
    for i, tok in enumerate(tokens):
        prec = "--" if isinstance(tok, Number) or not tok.is_operator else str(tok.precedence)
        table.add_row(str(i), str(tok) if isinstance(tok, Number) else tok.value, _token_kind(tok), prec)
    return table


@app.command("rpn")
def cmd_rpn(
    ctx: typer.Context,
    expression: str = typer.Argument(help="Expression to convert"),
) -> None:
    """Show the token stream, the postfix sequence and the result."""
    settings = _settings(ctx)
    try:
        check_characters(expression)
        tokens = tokenize(expression)
        postfix = to_postfix(tokens)
        value = precise(evaluate(postfix))
    except EvalError as e:
        console.print(f"[red]{e.kind.value}[/red]: {e}")
        raise typer.Exit(1)

    out = Console()
    out.print(_token_table("Tokens", tokens))
    out.print(_token_table("Postfix", postfix))
    out.print(f"Result: [bold]{format_result(value, settings.display_width)}[/bold]")


@app.command("repl")
def cmd_repl(ctx: typer.Context) -> None:
    """Interactive calculator. ':sqrt', ':recip', ':percent' act on the last result."""
    session = Session(width=_settings(ctx).display_width)
    console.print("[dim]safecalc: :sqrt :recip :percent, :q to quit[/dim]")

    while True:
        try:
            line = console.input("> ")
        except (EOFError, KeyboardInterrupt):
            break
        cmd = line.strip()
        if cmd in _QUIT_COMMANDS:
            break
        if cmd.startswith(":"):
            try:
                function = UnaryFunction(cmd[1:])
            except ValueError:
                console.print(f"[yellow]Unknown command: {cmd}[/yellow]")
                continue
            typer.echo(session.apply(function))
            continue
        result = session.submit(line)
        if result is not None:
            typer.echo(result)


if __name__ == "__main__":
    app()
