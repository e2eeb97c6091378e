"""Grammar text emission and grammar compiler invocation.

The compiler is a black box: it is run as a subprocess against each grammar
file and judged only by its exit code. The lexer is compiled first because
the parser grammar reads its token vocabulary (``<Lexer>.tokens``).

We generate our own tree-building visitor on top of the compiler's visitor
interface, so the listener is never requested.
"""

from __future__ import annotations

import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .config import Settings
from .errors import ExternalToolFailure, IOFailure
from .paths import OutputPaths

logger = logging.getLogger(__name__)

TARGET_LANGUAGE = "Python3"


def _write_text(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    logger.debug("Wrote %s", path)
    return path


def write_grammars(paths: OutputPaths) -> tuple[Path, Path]:
    """Write the lexer and parser grammar files; return their paths."""
    parser = paths.parser
    try:
        paths.ensure_dirs()
        marker = paths.antlr_dir / "__init__.py"
        if not marker.exists():
            marker.write_text("", encoding="utf-8")
        with ThreadPoolExecutor(max_workers=2) as pool:
            lexer_file = pool.submit(
                _write_text, paths.lexer_grammar, parser.lexer.to_antlr()
            )
            parser_file = pool.submit(
                _write_text, paths.parser_grammar, parser.to_antlr()
            )
            return lexer_file.result(), parser_file.result()
    except OSError as e:
        raise IOFailure(f"Cannot write grammar files under {paths.antlr_dir}: {e}") from e


def antlr_arguments(paths: OutputPaths, grammar: str) -> list[str]:
    """Compiler arguments for the ``lexer`` or ``parser`` grammar."""
    common = [
        f"-Dlanguage={TARGET_LANGUAGE}",
        "-o",
        str(paths.antlr_dir),
        "-Xexact-output-dir",
        "-no-listener",
    ]
    if grammar == "lexer":
        return [*common, "-no-visitor", str(paths.lexer_grammar)]
    return [*common, "-lib", str(paths.antlr_dir), "-visitor", str(paths.parser_grammar)]


def _compile(command: tuple[str, ...], paths: OutputPaths, grammar: str) -> None:
    if not command:
        raise ExternalToolFailure(grammar, 127, "no grammar compiler command configured")
    cmd = [*command, *antlr_arguments(paths, grammar)]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ExternalToolFailure(grammar, 127, f"{command[0]}: command not found") from e
    if result.returncode != 0:
        raise ExternalToolFailure(
            grammar, result.returncode, (result.stderr or "") + (result.stdout or "")
        )
    logger.info("Compiled %s grammar", grammar)


def run_antlr(paths: OutputPaths, settings: Settings | None = None) -> None:
    """Emit both grammars and compile them, lexer first."""
    settings = settings or Settings.from_env()
    write_grammars(paths)
    _compile(settings.antlr_command, paths, "lexer")
    _compile(settings.antlr_command, paths, "parser")


__all__ = ["antlr_arguments", "run_antlr", "write_grammars"]
