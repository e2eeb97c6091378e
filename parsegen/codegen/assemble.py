"""Assemble the parser facade and visitor modules for one rule model.

The parser module starts from a fresh copy of the packaged template
(``templates/parser.py.tpl``) and is patched in memory:

1. copy the template and parse it
2. import the compiler-generated lexer and parser classes
3. rename the ``__LEXER__``/``__PARSER__`` placeholders
4. bind the root rule into ``Parser.process``

The visitor module is rendered directly from the rule model. Nothing touches
the output directory until :meth:`Assembler.write`, which replaces all
modules or none of them.
"""

from __future__ import annotations

import ast
import logging
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import suppress
from dataclasses import dataclass
from importlib import resources
from importlib.abc import Traversable
from pathlib import Path

from ..errors import IOFailure, StructuralMismatch
from ..paths import ANTLR_DIRNAME, OutputPaths
from ..rules import ParserGrammar
from .binder import bind_entry_point
from .rewrite import rename_symbol
from .visitor import HEADER, render_visitor

logger = logging.getLogger(__name__)

LEXER_PLACEHOLDER = "__LEXER__"
PARSER_PLACEHOLDER = "__PARSER__"
TEMPLATE_NAME = "parser.py.tpl"

PACKAGE_INIT = '''{header}
"""Generated parser package."""

from .parser import Parser

__all__ = ["Parser"]
'''


def template_source() -> Traversable:
    return resources.files("parsegen") / "templates" / TEMPLATE_NAME


@dataclass(frozen=True)
class GeneratedModule:
    path: Path
    source: str


class Assembler:
    """Build and persist the generated modules for ``paths.parser``."""

    def __init__(self, paths: OutputPaths, template: Traversable | Path | None = None):
        self.paths = paths
        self.template = template if template is not None else template_source()

    @property
    def parser(self) -> ParserGrammar:
        return self.paths.parser

    # Parser module --------------------------------------------------------
    def copy_template(self) -> ast.Module:
        """Return a fresh, parsed copy of the template."""
        try:
            text = self.template.read_text(encoding="utf-8")
        except OSError as e:
            raise IOFailure(f"Cannot copy template {self.template}: {e}") from e
        try:
            module = ast.parse(text, filename=str(self.template))
        except SyntaxError as e:
            raise StructuralMismatch(f"Template {self.template} is not valid Python: {e}") from e
        logger.debug("Copied template %s", self.template)
        return module

    def attach_imports(self, module: ast.Module) -> None:
        """Import the compiler-generated lexer and parser classes."""
        imports = [
            ast.ImportFrom(
                module=f"{ANTLR_DIRNAME}.{name}",
                names=[ast.alias(name=name)],
                level=1,
            )
            for name in (self.parser.lexer.name, self.parser.name)
        ]
        # Ahead of the template's own relative imports, after everything else.
        index = len(module.body)
        for position, stmt in enumerate(module.body):
            if isinstance(stmt, ast.ImportFrom) and stmt.level > 0:
                index = position
                break
            if not isinstance(stmt, ast.Import | ast.ImportFrom | ast.Expr):
                index = position
                break
        module.body[index:index] = imports
        ast.fix_missing_locations(module)

    def build_parser_module(self) -> GeneratedModule:
        root_rule = self.parser.root_rule
        module = self.copy_template()
        self.attach_imports(module)
        rename_symbol(module, LEXER_PLACEHOLDER, self.parser.lexer.name)
        rename_symbol(module, PARSER_PLACEHOLDER, self.parser.name)
        bind_entry_point(module, root_rule.name)
        source = HEADER.format(name=self.parser.name) + "\n" + ast.unparse(module) + "\n"
        return GeneratedModule(self.paths.parser_module, source)

    # Companion modules ----------------------------------------------------
    def build_visitor_module(self) -> GeneratedModule:
        return GeneratedModule(self.paths.visitor_module, render_visitor(self.parser))

    def build_package_init(self) -> GeneratedModule:
        header = HEADER.format(name=self.parser.name)
        return GeneratedModule(self.paths.package_init, PACKAGE_INIT.format(header=header))

    def assemble(self) -> list[GeneratedModule]:
        """Build every module in memory; parser and visitor are built concurrently."""
        with ThreadPoolExecutor(max_workers=2) as pool:
            parser_module = pool.submit(self.build_parser_module)
            visitor_module = pool.submit(self.build_visitor_module)
            modules = [parser_module.result(), visitor_module.result()]
        modules.append(self.build_package_init())
        return modules

    # Persistence ----------------------------------------------------------
    def write(self, modules: Sequence[GeneratedModule] | None = None) -> list[Path]:
        """Persist ``modules`` (default: a fresh :meth:`assemble`) all-or-nothing."""
        if modules is None:
            modules = self.assemble()
        return write_modules(modules)


def write_modules(modules: Sequence[GeneratedModule]) -> list[Path]:
    """Write every module or none of them.

    Each module is staged to a hidden sibling file first; targets are only
    replaced once every stage succeeded. A failure while replacing restores
    the targets already replaced.
    """
    staged: list[tuple[GeneratedModule, Path]] = []
    replaced: list[tuple[Path, str | None]] = []
    try:
        for module in modules:
            module.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = module.path.with_name(f".{module.path.name}.tmp")
            staged.append((module, tmp))
            tmp.write_text(module.source, encoding="utf-8")
        for module, tmp in staged:
            previous = (
                module.path.read_text(encoding="utf-8") if module.path.exists() else None
            )
            os.replace(tmp, module.path)
            replaced.append((module.path, previous))
    except OSError as e:
        for _, tmp in staged:
            with suppress(OSError):
                tmp.unlink(missing_ok=True)
        for path, previous in reversed(replaced):
            with suppress(OSError):
                if previous is None:
                    path.unlink(missing_ok=True)
                else:
                    path.write_text(previous, encoding="utf-8")
        raise IOFailure(f"Cannot write generated modules: {e}") from e
    for module in modules:
        logger.info("Wrote %s", module.path)
    return [module.path for module in modules]


__all__ = ["Assembler", "GeneratedModule", "template_source", "write_modules"]
