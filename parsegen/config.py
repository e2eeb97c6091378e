"""Environment-driven settings for parsegen.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory:

* ``PARSEGEN_ANTLR`` - command used to invoke the grammar compiler
  (default ``antlr4``, as installed by ``antlr4-tools``)
* ``PARSEGEN_OUTPUT_DIR`` - default output root (default ``generated``)
* ``PARSEGEN_LOG_LEVEL`` - logging level name (default ``WARNING``)
"""

from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

import dotenv

DEFAULT_ANTLR_COMMAND = "antlr4"
DEFAULT_OUTPUT_DIR = "generated"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    antlr_command: tuple[str, ...] = (DEFAULT_ANTLR_COMMAND,)
    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, *, load_dotenv: bool = True) -> Settings:
        """Build settings from ``PARSEGEN_*`` environment variables."""
        if load_dotenv:
            dotenv.load_dotenv(".env")
        command = os.getenv("PARSEGEN_ANTLR", DEFAULT_ANTLR_COMMAND)
        return cls(
            antlr_command=tuple(shlex.split(command)) or (DEFAULT_ANTLR_COMMAND,),
            output_dir=Path(os.getenv("PARSEGEN_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
            log_level=os.getenv("PARSEGEN_LOG_LEVEL", "WARNING").upper(),
        )

    def with_antlr(self, command: str | None) -> Settings:
        """Override the compiler command; blank commands keep the current one."""
        argv = tuple(shlex.split(command)) if command else ()
        if not argv:
            return self
        return Settings(
            antlr_command=argv,
            output_dir=self.output_dir,
            log_level=self.log_level,
        )


def configure_logging(level: str | int = "WARNING") -> None:  # idempotent
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    if getattr(configure_logging, "_done", False):  # type: ignore[attr-defined]
        logging.getLogger("parsegen").setLevel(level)
        return
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logging.getLogger("parsegen").setLevel(level)
    configure_logging._done = True  # type: ignore[attr-defined]


__all__ = ["Settings", "configure_logging"]
