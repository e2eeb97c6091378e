import pytest

from parsegen.antlr import antlr_arguments, run_antlr, write_grammars
from parsegen.config import Settings
from parsegen.errors import ExternalToolFailure, IOFailure
from parsegen.paths import OutputPaths


@pytest.fixture
def paths(tmp_path, calc_grammar) -> OutputPaths:
    return OutputPaths(tmp_path / "out", calc_grammar)


def test_paths_are_deterministic(paths, tmp_path):
    root = (tmp_path / "out").resolve()
    assert paths.lexer_grammar == root / "antlr" / "CalcLexer.g4"
    assert paths.parser_grammar == root / "antlr" / "CalcParser.g4"
    assert paths.parser_module == root / "parser.py"
    assert paths.visitor_module == root / "visitor.py"
    assert paths.package_init == root / "__init__.py"


def test_write_grammars(paths, calc_grammar):
    lexer_file, parser_file = write_grammars(paths)
    assert lexer_file.read_text(encoding="utf-8") == calc_grammar.lexer.to_antlr()
    assert parser_file.read_text(encoding="utf-8") == calc_grammar.to_antlr()
    assert (paths.antlr_dir / "__init__.py").read_text(encoding="utf-8") == ""


def test_write_grammars_io_failure(tmp_path, calc_grammar):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(IOFailure):
        write_grammars(OutputPaths(blocker, calc_grammar))


def test_lexer_arguments(paths):
    args = antlr_arguments(paths, "lexer")
    assert args[0] == "-Dlanguage=Python3"
    assert "-no-visitor" in args and "-no-listener" in args
    assert args[-1] == str(paths.lexer_grammar)


def test_parser_arguments(paths):
    args = antlr_arguments(paths, "parser")
    assert "-visitor" in args and "-no-listener" in args
    assert args[args.index("-lib") + 1] == str(paths.antlr_dir)
    assert args[-1] == str(paths.parser_grammar)


def test_missing_compiler(paths):
    settings = Settings(antlr_command=("parsegen-no-such-antlr-binary",))
    with pytest.raises(ExternalToolFailure) as exc_info:
        run_antlr(paths, settings)
    assert exc_info.value.grammar == "lexer"
    assert exc_info.value.returncode == 127


def test_run_antlr_success(paths, make_settings):
    run_antlr(paths, make_settings())
    assert paths.lexer_grammar.exists() and paths.parser_grammar.exists()


def test_empty_compiler_command(paths):
    with pytest.raises(ExternalToolFailure) as exc_info:
        run_antlr(paths, Settings(antlr_command=()))
    assert exc_info.value.grammar == "lexer"
    assert exc_info.value.returncode == 127
    assert "no grammar compiler command" in exc_info.value.output
