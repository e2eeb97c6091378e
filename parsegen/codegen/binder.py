"""Bind the parse entry rule into the template's ``process`` method."""

from __future__ import annotations

import ast
import keyword

from ..errors import StructuralMismatch

ENTRY_CLASS = "Parser"
ENTRY_METHOD = "process"
RECEIVER = "self._parser"


def _find_class(module: ast.Module, name: str) -> ast.ClassDef:
    for stmt in module.body:
        if isinstance(stmt, ast.ClassDef) and stmt.name == name:
            return stmt
    raise StructuralMismatch(f"Template has no class '{name}'")


def _find_method(cls: ast.ClassDef, name: str) -> ast.FunctionDef:
    for stmt in cls.body:
        if isinstance(stmt, ast.FunctionDef) and stmt.name == name:
            return stmt
    raise StructuralMismatch(f"Class '{cls.name}' has no method '{name}'")


def bind_entry_point(
    module: ast.Module,
    rule_name: str,
    *,
    class_name: str = ENTRY_CLASS,
    method_name: str = ENTRY_METHOD,
) -> ast.Assign | ast.AnnAssign:
    """Make the method's first assignment call the entry rule ``rule_name``.

    The first statement of ``class_name.method_name`` must assign a single
    name, e.g. ``tree = None``; its value becomes ``self._parser.<rule>()``.
    Returns the rewritten statement.
    """
    if not rule_name.isidentifier() or keyword.iskeyword(rule_name):
        raise StructuralMismatch(f"'{rule_name}' cannot be called as an entry rule")
    method = _find_method(_find_class(module, class_name), method_name)
    if not method.body:
        raise StructuralMismatch(f"'{class_name}.{method_name}' has no statements")
    first = method.body[0]

    if isinstance(first, ast.Assign):
        if len(first.targets) != 1 or not isinstance(first.targets[0], ast.Name):
            raise StructuralMismatch(
                f"First statement of '{class_name}.{method_name}' must declare exactly one variable"
            )
    elif isinstance(first, ast.AnnAssign):
        if not isinstance(first.target, ast.Name):
            raise StructuralMismatch(
                f"First statement of '{class_name}.{method_name}' must declare a simple variable"
            )
    else:
        raise StructuralMismatch(
            f"First statement of '{class_name}.{method_name}' is a "
            f"{type(first).__name__}, expected a variable declaration"
        )

    call = ast.parse(f"{RECEIVER}.{rule_name}()", mode="eval").body
    first.value = ast.copy_location(call, first.value or first)
    ast.fix_missing_locations(first)
    return first


__all__ = ["bind_entry_point"]
