"""Grammar command: print grammar text without running the compiler."""

from __future__ import annotations

from pathlib import Path

import click

from ..errors import GenerationError
from ..rules import ParserGrammar


@click.command("grammar")
@click.argument(
    "rules_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--only",
    type=click.Choice(["lexer", "parser"]),
    default=None,
    help="Print only the lexer or only the parser grammar (default: both)",
)
def grammar_cmd(rules_path: Path, only: str | None):
    """Print the grammar text rendered from RULES_PATH."""
    try:
        parser = ParserGrammar.load(rules_path)
    except GenerationError as e:
        raise click.ClickException(str(e)) from e
    if only in (None, "lexer"):
        click.echo(parser.lexer.to_antlr())
    if only in (None, "parser"):
        click.echo(parser.to_antlr())


__all__ = ["grammar_cmd"]
