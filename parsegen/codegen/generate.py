"""End-to-end generation: grammar text, compiler run, module assembly."""

from __future__ import annotations

import logging
from pathlib import Path

from ..antlr import run_antlr
from ..config import Settings
from ..errors import PreconditionFailure
from ..paths import OutputPaths
from ..rules import ParserGrammar
from .assemble import Assembler

logger = logging.getLogger(__name__)


def generate(
    parser: ParserGrammar,
    root: str | Path | None = None,
    *,
    settings: Settings | None = None,
    compile: bool = True,
) -> list[Path]:
    """Generate a parser package for ``parser`` under ``root``.

    Args:
        parser: Rule model; must declare at least one parser rule.
        root: Output directory (default: ``settings.output_dir``).
        settings: Compiler command and defaults (default: from environment).
        compile: Run the grammar compiler before assembling. Disable to
            regenerate only the wrapper modules.

    Returns:
        Paths of the assembled modules.

    Raises:
        PreconditionFailure: The rule model has no rules (checked before any I/O).
        ExternalToolFailure: The compiler rejected the lexer or parser grammar.
        IOFailure: A grammar, template or module could not be read or written.
        StructuralMismatch: The parser template no longer has the expected shape.
    """
    if not parser.rules:
        raise PreconditionFailure(f"Parser '{parser.name}' declares no rules")
    settings = settings or Settings.from_env()
    paths = OutputPaths(settings.output_dir if root is None else root, parser)
    logger.debug("Generating %s into %s", parser.name, paths.root)

    if compile:
        run_antlr(paths, settings)
    written = Assembler(paths).write()
    logger.info("Generated %s (%d modules)", parser.name, len(written))
    return written


__all__ = ["generate"]
