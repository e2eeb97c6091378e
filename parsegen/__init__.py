"""parsegen: build typed parser packages from declarative rule models.

The generation pipeline writes ANTLR grammar text, runs the grammar compiler,
and assembles a parser facade and tree-building visitor around its output.
The tree helpers (:func:`find_nodes`, :func:`dump`) work on any generated
tree independently of the pipeline.
"""

from __future__ import annotations

from .codegen import generate
from .errors import (
    ExternalToolFailure,
    GenerationError,
    IOFailure,
    PreconditionFailure,
    StructuralMismatch,
)
from .rules import Alternative, LexerGrammar, ParserGrammar, ParserRule, TokenRule
from .tree import Node, OptionsNode, RuleNode, Span, code_range, dump, find_nodes

__all__ = [
    "Alternative",
    "ExternalToolFailure",
    "GenerationError",
    "IOFailure",
    "LexerGrammar",
    "Node",
    "OptionsNode",
    "ParserGrammar",
    "ParserRule",
    "PreconditionFailure",
    "RuleNode",
    "Span",
    "StructuralMismatch",
    "TokenRule",
    "code_range",
    "dump",
    "find_nodes",
    "generate",
]
