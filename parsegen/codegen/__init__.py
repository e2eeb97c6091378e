"""Code generation for parser packages.

Turns a rule model into a Python package wrapping the grammar compiler's
output: a ``Parser`` facade assembled from a template and a tree-building
``Visitor`` rendered from the rules.
"""

from __future__ import annotations

from .assemble import Assembler, GeneratedModule, write_modules
from .binder import bind_entry_point
from .generate import generate
from .rewrite import SymbolRewriter, rename_symbol
from .visitor import render_visitor

__all__ = [
    "Assembler",
    "GeneratedModule",
    "SymbolRewriter",
    "bind_entry_point",
    "generate",
    "rename_symbol",
    "render_visitor",
    "write_modules",
]
