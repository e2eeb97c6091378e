"""Pydantic models for the declarative rule model that drives generation.

A rule model pairs a lexer grammar with a parser grammar. The first parser
rule is the *root rule*: the generated facade calls it to seed a full parse.

Example YAML document (see ``examples/calc.yml``)::

  lexer:
    name: CalcLexer
    rules:
      - name: NUMBER
        pattern: "[0-9]+"
      - name: WS
        pattern: "[ \\t\\r\\n]+"
        skip: true
  parser:
    name: CalcParser
    rules:
      - name: program
        alternatives:
          - body: expr EOF
      - name: expr
        alternatives:
          - label: Add
            body: expr PLUS expr
          - label: Number
            body: NUMBER

A rule whose alternatives are all labelled is an *options* rule; its
alternatives become grouped nodes in the generated tree.
"""

from __future__ import annotations

import keyword
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import PreconditionFailure

LEXER_NAME_PATTERN = r"^[A-Z][A-Za-z0-9_]*$"
PARSER_NAME_PATTERN = r"^[a-z][A-Za-z0-9_]*$"
LABEL_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*$"
GRAMMAR_NAME_PATTERN = r"^[A-Z][A-Za-z0-9_]*$"


def _reject_keyword(value: str) -> str:
    if keyword.iskeyword(value):
        raise ValueError(f"'{value}' is a Python keyword and cannot name a rule")
    return value


def _duplicates(names: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for name in names:
        if name in seen and name not in dupes:
            dupes.append(name)
        seen.add(name)
    return dupes


class TokenRule(BaseModel):
    """A lexer rule: ``NAME: pattern;``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(pattern=LEXER_NAME_PATTERN)
    pattern: str = Field(min_length=1)
    skip: bool = False
    fragment: bool = False

    def to_antlr(self) -> str:
        prefix = "fragment " if self.fragment else ""
        action = " -> skip" if self.skip else ""
        return f"{prefix}{self.name}: {self.pattern}{action};"


class LexerGrammar(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(pattern=GRAMMAR_NAME_PATTERN)
    rules: list[TokenRule] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self) -> LexerGrammar:
        dupes = _duplicates([rule.name for rule in self.rules])
        if dupes:
            raise ValueError(f"Duplicate lexer rule names: {', '.join(dupes)}")
        return self

    def to_antlr(self) -> str:
        lines = [f"lexer grammar {self.name};", ""]
        lines.extend(rule.to_antlr() for rule in self.rules)
        return "\n".join(lines) + "\n"


class Alternative(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    body: str = ""
    label: str | None = Field(default=None, pattern=LABEL_PATTERN)

    @field_validator("label")
    @classmethod
    def _label_not_keyword(cls, value: str | None) -> str | None:
        return None if value is None else _reject_keyword(value)


class ParserRule(BaseModel):
    """A parser rule with one or more alternatives."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(pattern=PARSER_NAME_PATTERN)
    alternatives: list[Alternative] = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _name_not_keyword(cls, value: str) -> str:
        return _reject_keyword(value)

    @model_validator(mode="after")
    def _labels_all_or_nothing(self) -> ParserRule:
        labelled = [alt.label is not None for alt in self.alternatives]
        if any(labelled) and not all(labelled):
            raise ValueError(
                f"Rule '{self.name}' labels some alternatives but not all of them"
            )
        return self

    @property
    def is_options(self) -> bool:
        """True when every alternative carries a label."""
        return all(alt.label is not None for alt in self.alternatives)

    @property
    def labels(self) -> list[str]:
        return [alt.label for alt in self.alternatives if alt.label is not None]

    def to_antlr(self) -> str:
        lines = [self.name]
        for index, alt in enumerate(self.alternatives):
            lead = ":" if index == 0 else "|"
            body = f" {alt.body}" if alt.body else ""
            label = f" # {alt.label}" if alt.label else ""
            lines.append(f"    {lead}{body}{label}")
        lines.append("    ;")
        return "\n".join(lines)


class ParserGrammar(BaseModel):
    """The rule model: a parser grammar and the lexer it reads tokens from."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(pattern=GRAMMAR_NAME_PATTERN)
    lexer: LexerGrammar
    rules: list[ParserRule] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self) -> ParserGrammar:
        if self.name == self.lexer.name:
            raise ValueError("Parser and lexer grammars must have different names")
        dupes = _duplicates([rule.name for rule in self.rules])
        if dupes:
            raise ValueError(f"Duplicate parser rule names: {', '.join(dupes)}")
        labels = [label for rule in self.rules for label in rule.labels]
        dupes = _duplicates([label.lower() for label in labels])
        if dupes:
            raise ValueError(f"Duplicate alternative labels: {', '.join(dupes)}")
        clashes = {label.lower() for label in labels} & {
            rule.name.lower() for rule in self.rules
        }
        if clashes:
            raise ValueError(
                f"Alternative labels clash with rule names: {', '.join(sorted(clashes))}"
            )
        return self

    @property
    def root_rule(self) -> ParserRule:
        if not self.rules:
            raise PreconditionFailure(f"Parser '{self.name}' declares no rules")
        return self.rules[0]

    @property
    def visitor_name(self) -> str:
        return f"{self.name}Visitor"

    def to_antlr(self) -> str:
        lines = [
            f"parser grammar {self.name};",
            "",
            f"options {{ tokenVocab={self.lexer.name}; }}",
        ]
        for rule in self.rules:
            lines.append("")
            lines.append(rule.to_antlr())
        return "\n".join(lines) + "\n"

    @classmethod
    def from_mapping(cls, data: Any) -> ParserGrammar:
        """Validate a ``{lexer: ..., parser: ...}`` mapping."""
        if not isinstance(data, dict) or not isinstance(data.get("parser"), dict):
            raise PreconditionFailure("Rule model must be a mapping with 'lexer' and 'parser'")
        parser = dict(data["parser"])
        parser["lexer"] = data.get("lexer")
        try:
            return cls.model_validate(parser)
        except ValidationError as e:
            raise PreconditionFailure(f"Invalid rule model:\n{e}") from e

    @classmethod
    def load(cls, path: str | Path) -> ParserGrammar:
        """Load a rule model from a YAML file."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except OSError as e:
            raise PreconditionFailure(f"Cannot read rule model {path}: {e}") from e
        except yaml.YAMLError as e:
            raise PreconditionFailure(f"Rule model {path} is not valid YAML: {e}") from e
        return cls.from_mapping(data)


__all__ = [
    "Alternative",
    "LexerGrammar",
    "ParserGrammar",
    "ParserRule",
    "TokenRule",
]
