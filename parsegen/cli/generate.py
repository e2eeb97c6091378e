"""Generate command: rule model -> parser package."""

from __future__ import annotations

from pathlib import Path

import click

from ..codegen import generate
from ..config import Settings, configure_logging
from ..errors import GenerationError
from ..rules import ParserGrammar


@click.command("generate")
@click.argument(
    "rules_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    "output",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output package directory (default: $PARSEGEN_OUTPUT_DIR or ./generated)",
)
@click.option(
    "--compile/--no-compile",
    "run_compiler",
    default=True,
    help="Run the grammar compiler before assembling the wrapper modules",
)
@click.option("--antlr", "antlr", default=None, help="Grammar compiler command (default: $PARSEGEN_ANTLR or antlr4)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: $PARSEGEN_LOG_LEVEL or WARNING)",
)
def generate_cmd(
    rules_path: Path,
    output: Path | None,
    run_compiler: bool,
    antlr: str | None,
    log_level: str | None,
):
    """Generate a parser package from the YAML rule model RULES_PATH."""
    settings = Settings.from_env().with_antlr(antlr)
    configure_logging(log_level or settings.log_level)
    try:
        parser = ParserGrammar.load(rules_path)
        written = generate(parser, output, settings=settings, compile=run_compiler)
    except GenerationError as e:
        raise click.ClickException(str(e)) from e
    for path in written:
        click.echo(f"Wrote {path}")
    click.echo(f"Generated {parser.name} ({len(parser.rules)} rules)")


__all__ = ["generate_cmd"]
