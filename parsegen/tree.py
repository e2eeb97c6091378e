"""Tree node types and traversal helpers for generated parsers.

Generated visitors turn compiler parse trees into two node shapes:

* :class:`RuleNode` - a plain node: ``type``, ``children``, ``span``
* :class:`OptionsNode` - the grouped/optional family produced for labelled
  alternatives. Its real payload lives in ``option``; display and descent
  use ``option`` rather than the node's own fields.

Traversal helpers only read the tree, so they are safe to call concurrently.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import IO, Literal

import click


@dataclass(frozen=True)
class Span:
    """Inclusive character range into the source text.

    ``end`` is None when the node's derivation was empty.
    """

    start: int
    end: int | None = None


@dataclass(eq=False)
class RuleNode:
    type: str
    children: list[Node] = field(default_factory=list)
    span: Span | None = None


@dataclass(eq=False)
class OptionsNode:
    type: str
    option: RuleNode
    span: Span | None = None
    family: Literal["options"] = field(default="options", init=False)

    @property
    def children(self) -> list[Node]:
        return [self.option]


Node = RuleNode | OptionsNode


def code_range(source: str, span: Span) -> str:
    """Return the source text covered by ``span`` (both ends inclusive)."""
    if span.end is None:
        return ""
    return source[span.start : span.end + 1]


def find_nodes(type: str, root: Node) -> list[Node]:
    """Return every node whose ``type`` equals ``type``, in pre-order.

    Nodes reachable through several paths are reported once.
    """
    result: list[Node] = []
    seen: set[int] = set()
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if node.type == type:
            result.append(node)
        stack.extend(reversed(node.children))
    return result


def _display(node: Node) -> tuple[str, Span | None, list[Node], bool]:
    match node:
        case OptionsNode(option=option):
            return option.type, option.span, option.children, True
        case RuleNode():
            return node.type, node.span, node.children, False
    raise TypeError(f"Not a tree node: {type(node).__name__}")


def _walk(root: Node) -> Iterator[tuple[int, Node]]:
    stack: list[tuple[int, Node]] = [(0, root)]
    while stack:
        level, node = stack.pop()
        yield level, node
        _, _, children, _ = _display(node)
        stack.extend((level + 1, child) for child in reversed(children))


def dump_lines(source: str, root: Node, *, styled: bool = False) -> Iterator[str]:
    """Yield one indented line per node, parent before children."""
    for level, node in _walk(root):
        name, span, _, is_options = _display(node)
        if styled:
            name = click.style(name, fg="green" if is_options else "cyan")
        line = "  " * level + name
        if span is not None and span.end is not None:
            text = code_range(source, span).replace("\r\n", "\\n").replace("\n", "\\n")
            line += ": " + (click.style(text, fg="yellow") if styled else text)
        yield line


def dump(source: str, root: Node, file: IO[str] | None = None, color: bool | None = None) -> None:
    """Print the tree rooted at ``root`` with the source text each node spans.

    Colors are stripped automatically when ``file`` is not a terminal.
    """
    for line in dump_lines(source, root, styled=True):
        click.echo(line, file=file, color=color)


__all__ = [
    "Node",
    "OptionsNode",
    "RuleNode",
    "Span",
    "code_range",
    "dump",
    "dump_lines",
    "find_nodes",
]
