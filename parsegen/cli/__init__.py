"""CLI command group for parsegen.

This module exposes the root Click command group `parsegen` which aggregates
subcommands implemented in sibling modules.

Example usage:

        parsegen generate calc.yml -o calc
        parsegen grammar calc.yml --only lexer
        parsegen dump calc input.txt
        parsegen find calc expr input.txt
"""

from __future__ import annotations

import click

from .dump import dump_cmd, find_cmd
from .generate import generate_cmd
from .grammar import grammar_cmd


@click.group()
def parsegen():  # pragma: no cover - thin group wrapper
    """Parser package generation commands."""


# Register subcommands
parsegen.add_command(generate_cmd)
parsegen.add_command(grammar_cmd)
parsegen.add_command(dump_cmd)
parsegen.add_command(find_cmd)

__all__ = ["parsegen"]
