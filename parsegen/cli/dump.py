"""Dump and find commands over trees built by a generated package."""

from __future__ import annotations

from pathlib import Path

import click

from ..loader import load_generated
from ..tree import code_range, dump, find_nodes

_package = click.argument(
    "package",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
_source = click.argument(
    "source_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


def _parse(package: Path, source_path: Path):
    source = source_path.read_text(encoding="utf-8")
    try:
        module = load_generated(package)
    except (ImportError, FileNotFoundError) as e:
        raise click.ClickException(f"Cannot load generated package {package}: {e}") from e
    return source, module.Parser.parse(source)


@click.command("dump")
@_package
@_source
def dump_cmd(package: Path, source_path: Path):
    """Parse SOURCE_PATH with the generated PACKAGE and print the tree."""
    source, root = _parse(package, source_path)
    dump(source, root)


@click.command("find")
@_package
@click.argument("node_type")
@_source
def find_cmd(package: Path, node_type: str, source_path: Path):
    """Print the source text of every NODE_TYPE node in SOURCE_PATH."""
    source, root = _parse(package, source_path)
    matches = find_nodes(node_type, root)
    for node in matches:
        text = code_range(source, node.span) if node.span else ""
        click.echo(text.replace("\r\n", "\\n").replace("\n", "\\n"))
    click.echo(f"{len(matches)} {node_type} node(s)", err=True)


__all__ = ["dump_cmd", "find_cmd"]
