"""Error taxonomy for parser generation.

Every failure raised by the generation pipeline derives from
:class:`GenerationError` and names the stage it came from, so a caller can
report it without re-running in verbose mode. None of these are retried:
generation is deterministic, and rerunning on the same input fails the same
way.
"""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for fatal generation failures."""

    stage: str = "generate"

    def __init__(self, message: str, *, stage: str | None = None):
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class PreconditionFailure(GenerationError):
    """Raised when the rule model is unusable (e.g. it declares no rules)."""

    stage = "precondition"


class ExternalToolFailure(GenerationError):
    """Raised when the grammar compiler exits with a non-zero code."""

    stage = "antlr"

    def __init__(self, grammar: str, returncode: int, output: str = ""):
        message = f"antlr on {grammar} grammar exited with code {returncode}"
        if output.strip():
            message += f":\n{output.strip()}"
        super().__init__(message)
        self.grammar = grammar
        self.returncode = returncode
        self.output = output


class IOFailure(GenerationError):
    """Raised when a template copy or a generated file write fails."""

    stage = "io"


class StructuralMismatch(GenerationError):
    """Raised when the template no longer has the shape the assembler expects."""

    stage = "template"


__all__ = [
    "GenerationError",
    "PreconditionFailure",
    "ExternalToolFailure",
    "IOFailure",
    "StructuralMismatch",
]
