"""Exact-match symbol renaming over a parsed Python module.

Placeholder names in the parser template (``__LEXER__``, ``__PARSER__``) are
reserved, so renaming by exact text is safe without scope resolution.
"""

from __future__ import annotations

import ast
import logging

from ..errors import StructuralMismatch

logger = logging.getLogger(__name__)


class SymbolRewriter(ast.NodeTransformer):
    """Rename identifiers and string type annotations equal to ``original``.

    Every AST field that holds an identifier is covered: names, attributes,
    import aliases and module paths, definition names, parameters, keyword
    arguments, ``global``/``nonlocal`` declarations, exception and pattern
    captures, and type parameters. ``matches`` counts every rewritten position
    after :meth:`visit` runs.
    """

    def __init__(self, original: str, replacement: str):
        if not replacement.isidentifier():
            raise StructuralMismatch(f"'{replacement}' is not a valid identifier")
        self.original = original
        self.replacement = replacement
        self.matches = 0

    def _rename(self, name: str | None) -> str | None:
        if name == self.original:
            self.matches += 1
            return self.replacement
        return name

    def _rename_all(self, names: list[str]) -> list[str]:
        return [self._rename(name) for name in names]

    # Identifier positions -------------------------------------------------
    def visit_Name(self, node: ast.Name) -> ast.Name:
        node.id = self._rename(node.id)
        return node

    def visit_Attribute(self, node: ast.Attribute) -> ast.Attribute:
        self.generic_visit(node)
        node.attr = self._rename(node.attr)
        return node

    def visit_alias(self, node: ast.alias) -> ast.alias:
        # Dotted imports (``import a.b``) rename per segment.
        node.name = ".".join(self._rename_all(node.name.split(".")))
        node.asname = self._rename(node.asname)
        return node

    def visit_ImportFrom(self, node: ast.ImportFrom) -> ast.ImportFrom:
        if node.module:
            node.module = ".".join(self._rename_all(node.module.split(".")))
        self.generic_visit(node)
        return node

    def visit_ClassDef(self, node: ast.ClassDef) -> ast.ClassDef:
        node.name = self._rename(node.name)
        self.generic_visit(node)
        return node

    def visit_keyword(self, node: ast.keyword) -> ast.keyword:
        node.arg = self._rename(node.arg)
        self.generic_visit(node)
        return node

    def visit_Global(self, node: ast.Global) -> ast.Global:
        node.names = self._rename_all(node.names)
        return node

    visit_Nonlocal = visit_Global

    def visit_ExceptHandler(self, node: ast.ExceptHandler) -> ast.ExceptHandler:
        node.name = self._rename(node.name)
        self.generic_visit(node)
        return node

    def visit_MatchAs(self, node: ast.MatchAs) -> ast.MatchAs:
        node.name = self._rename(node.name)
        self.generic_visit(node)
        return node

    visit_MatchStar = visit_MatchAs

    def visit_MatchMapping(self, node: ast.MatchMapping) -> ast.MatchMapping:
        node.rest = self._rename(node.rest)
        self.generic_visit(node)
        return node

    def visit_MatchClass(self, node: ast.MatchClass) -> ast.MatchClass:
        node.kwd_attrs = self._rename_all(node.kwd_attrs)
        self.generic_visit(node)
        return node

    def visit_TypeVar(self, node: ast.TypeVar) -> ast.TypeVar:
        node.name = self._rename(node.name)
        self.generic_visit(node)
        return node

    visit_ParamSpec = visit_TypeVar
    visit_TypeVarTuple = visit_TypeVar

    # Declared-type positions ---------------------------------------------
    def _annotation(self, annotation: ast.expr | None) -> ast.expr | None:
        if (
            isinstance(annotation, ast.Constant)
            and isinstance(annotation.value, str)
            and annotation.value == self.original
        ):
            self.matches += 1
            return ast.copy_location(ast.Constant(self.replacement), annotation)
        return annotation

    def visit_arg(self, node: ast.arg) -> ast.arg:
        node.arg = self._rename(node.arg)
        node.annotation = self._annotation(node.annotation)
        self.generic_visit(node)
        return node

    def visit_FunctionDef(self, node: ast.FunctionDef) -> ast.FunctionDef:
        node.name = self._rename(node.name)
        node.returns = self._annotation(node.returns)
        self.generic_visit(node)
        return node

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_AnnAssign(self, node: ast.AnnAssign) -> ast.AnnAssign:
        node.annotation = self._annotation(node.annotation)
        self.generic_visit(node)
        return node


def rename_symbol(
    tree: ast.AST, original: str, replacement: str, *, required: bool = True
) -> None:
    """Rename ``original`` to ``replacement`` in place throughout ``tree``.

    Raises StructuralMismatch when nothing matched and ``required`` is set:
    a placeholder that no longer appears means the template was edited.
    """
    rewriter = SymbolRewriter(original, replacement)
    rewriter.visit(tree)
    logger.debug(
        "Renamed %s -> %s at %d position(s)", original, replacement, rewriter.matches
    )
    if required and rewriter.matches == 0:
        raise StructuralMismatch(f"Template has no occurrence of '{original}'")


__all__ = ["SymbolRewriter", "rename_symbol"]
