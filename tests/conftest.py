"""Shared pytest fixtures for parsegen tests."""

import shlex
import sys
from pathlib import Path

import pytest
import yaml

from parsegen.codegen import generate
from parsegen.config import Settings
from parsegen.rules import ParserGrammar

CALC_RULES = {
    "lexer": {
        "name": "CalcLexer",
        "rules": [
            {"name": "NUMBER", "pattern": "[0-9]+"},
            {"name": "PLUS", "pattern": "'+'"},
            {"name": "STAR", "pattern": "'*'"},
            {"name": "WS", "pattern": "[ \\t\\r\\n]+", "skip": True},
        ],
    },
    "parser": {
        "name": "CalcParser",
        "rules": [
            {"name": "program", "alternatives": [{"body": "expr EOF"}]},
            {
                "name": "expr",
                "alternatives": [
                    {"label": "Mul", "body": "expr STAR expr"},
                    {"label": "Add", "body": "expr PLUS expr"},
                    {"label": "Number", "body": "NUMBER"},
                ],
            },
        ],
    },
}


def fake_antlr(exit_code: int = 0, fail_on: str | None = None) -> tuple[str, ...]:
    """Command standing in for the grammar compiler.

    Exits with ``exit_code`` when the grammar file argument ends with
    ``fail_on`` (or always when ``fail_on`` is None), printing to stderr.
    """
    code = (
        "import sys\n"
        f"fail = {fail_on!r} is None or sys.argv[-1].endswith({fail_on!r})\n"
        f"code = {exit_code} if fail else 0\n"
        "if code:\n"
        "    sys.stderr.write('boom: ' + sys.argv[-1])\n"
        "sys.exit(code)\n"
    )
    return (sys.executable, "-c", code)


@pytest.fixture
def calc_rules() -> dict:
    return CALC_RULES


@pytest.fixture
def calc_grammar() -> ParserGrammar:
    return ParserGrammar.from_mapping(CALC_RULES)


@pytest.fixture
def calc_rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "calc.yml"
    path.write_text(yaml.safe_dump(CALC_RULES), encoding="utf-8")
    return path


@pytest.fixture
def make_settings(tmp_path: Path):
    """Factory for settings pointing at a fake compiler and a temp output dir."""

    def _make(exit_code: int = 0, fail_on: str | None = None) -> Settings:
        return Settings(
            antlr_command=fake_antlr(exit_code, fail_on),
            output_dir=tmp_path / "generated",
        )

    return _make


@pytest.fixture
def antlr_command():
    """Factory for a shell-quoted fake compiler command (``--antlr`` option)."""

    def _make(exit_code: int = 0, fail_on: str | None = None) -> str:
        return shlex.join(fake_antlr(exit_code, fail_on))

    return _make


HELLO_PARSER = '''
from parsegen.tree import RuleNode, Span


class Parser:
    @staticmethod
    def parse(source):
        return RuleNode("program", [RuleNode("word", span=Span(6, 10))], span=Span(0, 4))
'''


@pytest.fixture
def hello_package(tmp_path: Path) -> Path:
    """A hand-written stand-in for a generated package."""
    package = tmp_path / "hello"
    package.mkdir()
    (package / "__init__.py").write_text("from .parser import Parser\n", encoding="utf-8")
    (package / "parser.py").write_text(HELLO_PARSER, encoding="utf-8")
    return package


CALC_LEXER_STANDIN = '''
class CalcLexer:
    def __init__(self, input):
        self.source = str(input)
'''

CALC_PARSER_STANDIN = '''
import re

from antlr4 import ParserRuleContext
from antlr4.Token import CommonToken

NUMBER, PLUS, STAR = 1, 2, 3
KINDS = {"+": PLUS, "*": STAR}


class ProgramContext(ParserRuleContext):
    def accept(self, visitor):
        return visitor.visitProgram(self)


class NumberContext(ParserRuleContext):
    def accept(self, visitor):
        return visitor.visitNumber(self)


class AddContext(ParserRuleContext):
    def accept(self, visitor):
        return visitor.visitAdd(self)


class MulContext(ParserRuleContext):
    def accept(self, visitor):
        return visitor.visitMul(self)


class CalcParser:
    """Left-to-right ``NUMBER (op NUMBER)*`` parser with ANTLR-shaped contexts."""

    def __init__(self, tokens):
        self.source = tokens.tokenSource.source

    def _tokens(self):
        for index, match in enumerate(re.finditer(r"[0-9]+|[+*]", self.source)):
            token = CommonToken(
                type=KINDS.get(match.group(), NUMBER),
                start=match.start(),
                stop=match.end() - 1,
            )
            token.tokenIndex = index
            token.text = match.group()
            yield token

    def _number(self, token):
        ctx = NumberContext()
        ctx.addTokenNode(token)
        ctx.start = ctx.stop = token
        return ctx

    def program(self):
        tokens = list(self._tokens())
        expr = self._number(tokens[0])
        for op, number in zip(tokens[1::2], tokens[2::2]):
            ctx = AddContext() if op.type == PLUS else MulContext()
            ctx.addChild(expr)
            ctx.addTokenNode(op)
            ctx.addChild(self._number(number))
            ctx.start, ctx.stop = expr.start, number
            expr = ctx
        program = ProgramContext()
        program.addChild(expr)
        program.start, program.stop = expr.start, expr.stop
        return program
'''

CALC_VISITOR_STANDIN = '''
from antlr4.tree.Tree import ParseTreeVisitor


class CalcParserVisitor(ParseTreeVisitor):
    def visitProgram(self, ctx):
        return self.visitChildren(ctx)

    def visitMul(self, ctx):
        return self.visitChildren(ctx)

    def visitAdd(self, ctx):
        return self.visitChildren(ctx)

    def visitNumber(self, ctx):
        return self.visitChildren(ctx)
'''


@pytest.fixture
def calc_package(tmp_path: Path, calc_grammar, make_settings) -> Path:
    """Assembled calc package with hand-written stand-ins for the compiler output."""
    root = tmp_path / "calc"
    generate(calc_grammar, root, settings=make_settings(), compile=False)
    antlr = root / "antlr"
    antlr.mkdir()
    (antlr / "__init__.py").write_text("", encoding="utf-8")
    (antlr / "CalcLexer.py").write_text(CALC_LEXER_STANDIN, encoding="utf-8")
    (antlr / "CalcParser.py").write_text(CALC_PARSER_STANDIN, encoding="utf-8")
    (antlr / "CalcParserVisitor.py").write_text(CALC_VISITOR_STANDIN, encoding="utf-8")
    return root
