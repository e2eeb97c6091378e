"""Output path resolution for generated parser packages.

The :class:`OutputPaths` value object maps an output root and a rule model to
every file a generation run touches:

* ``root/__init__.py``, ``root/parser.py``, ``root/visitor.py`` - assembled modules
* ``root/antlr/`` - grammar text files and compiler output

Construction is side-effect free; call :meth:`OutputPaths.ensure_dirs` to
create the directories.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .rules import ParserGrammar

ANTLR_DIRNAME = "antlr"
PARSER_MODULE = "parser.py"
VISITOR_MODULE = "visitor.py"
PACKAGE_MARKER = "__init__.py"


@dataclass
class OutputPaths:
    """Resolve the files written for one rule model under ``root``."""

    root: Path | str
    parser: ParserGrammar

    antlr_dir: Path = field(init=False)

    def __post_init__(self) -> None:
        self.root = Path(self.root).expanduser().resolve()
        self.antlr_dir = self.root / ANTLR_DIRNAME

    # Grammar text -------------------------------------------------------
    @property
    def lexer_grammar(self) -> Path:
        return self.antlr_dir / f"{self.parser.lexer.name}.g4"

    @property
    def parser_grammar(self) -> Path:
        return self.antlr_dir / f"{self.parser.name}.g4"

    # Assembled modules --------------------------------------------------
    @property
    def package_init(self) -> Path:
        return self.root / PACKAGE_MARKER

    @property
    def parser_module(self) -> Path:
        return self.root / PARSER_MODULE

    @property
    def visitor_module(self) -> Path:
        return self.root / VISITOR_MODULE

    def ensure_dirs(self) -> None:
        self.antlr_dir.mkdir(parents=True, exist_ok=True)


__all__ = ["OutputPaths", "ANTLR_DIRNAME"]
