from pathlib import Path

import pytest

from parsegen.codegen import generate
from parsegen.errors import ExternalToolFailure, IOFailure, PreconditionFailure
from parsegen.rules import LexerGrammar, ParserGrammar


def test_generate_writes_package(calc_grammar, make_settings, tmp_path):
    settings = make_settings()
    written = generate(calc_grammar, settings=settings)

    root = tmp_path / "generated"
    assert written == [root / "parser.py", root / "visitor.py", root / "__init__.py"]
    assert (root / "antlr" / "CalcLexer.g4").read_text(encoding="utf-8").startswith(
        "lexer grammar CalcLexer;"
    )
    assert (root / "antlr" / "CalcParser.g4").exists()
    assert (root / "antlr" / "__init__.py").exists()


def test_generate_explicit_root(calc_grammar, make_settings, tmp_path):
    out = tmp_path / "elsewhere"
    generate(calc_grammar, out, settings=make_settings())
    assert (out / "parser.py").exists()
    assert not (tmp_path / "generated").exists()


def test_generate_empty_rules_fails_before_io(make_settings, tmp_path):
    parser = ParserGrammar(name="EmptyParser", lexer=LexerGrammar(name="EmptyLexer"))
    with pytest.raises(PreconditionFailure, match="no rules"):
        generate(parser, settings=make_settings())
    assert not (tmp_path / "generated").exists()


def test_generate_without_compile_skips_grammar_files(calc_grammar, make_settings, tmp_path):
    generate(calc_grammar, settings=make_settings(exit_code=1), compile=False)
    root = tmp_path / "generated"
    assert (root / "parser.py").exists()
    assert not (root / "antlr").exists()


@pytest.mark.parametrize(
    "fail_on, grammar", [("CalcLexer.g4", "lexer"), ("CalcParser.g4", "parser")]
)
def test_compiler_failure_names_grammar(calc_grammar, make_settings, tmp_path, fail_on, grammar):
    with pytest.raises(ExternalToolFailure) as exc_info:
        generate(calc_grammar, settings=make_settings(exit_code=3, fail_on=fail_on))

    error = exc_info.value
    assert error.grammar == grammar
    assert error.returncode == 3
    assert f"on {grammar} grammar" in str(error)
    assert "boom" in error.output
    root = tmp_path / "generated"
    assert not (root / "parser.py").exists()
    assert not (root / "visitor.py").exists()


def test_generate_is_atomic_on_write_failure(calc_grammar, make_settings, tmp_path, monkeypatch):
    original = Path.write_text

    def failing_write_text(self, *args, **kwargs):
        if self.name == ".visitor.py.tmp":
            raise OSError("no space left on device")
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "write_text", failing_write_text)

    with pytest.raises(IOFailure):
        generate(calc_grammar, settings=make_settings())
    root = tmp_path / "generated"
    assert not (root / "parser.py").exists()
    assert not (root / "visitor.py").exists()
    assert not list(root.glob(".*.tmp"))


def test_generate_twice_is_deterministic(calc_grammar, make_settings, tmp_path):
    settings = make_settings()
    generate(calc_grammar, settings=settings)
    root = tmp_path / "generated"
    first = {p.name: p.read_bytes() for p in root.glob("*.py")}
    generate(calc_grammar, settings=settings)
    second = {p.name: p.read_bytes() for p in root.glob("*.py")}
    assert first == second
