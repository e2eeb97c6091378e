"""Render the companion visitor module from the rule model.

The module is built directly from rule data: one ``visit<Rule>`` method per
plain rule and one ``visit<Label>`` method per labelled alternative, matching
the method names the compiler's ``<Parser>Visitor`` declares.
"""

from __future__ import annotations

from ..rules import ParserGrammar

HEADER = "# Generated by parsegen from {name}. Do not edit."


def visit_method_name(name: str) -> str:
    """Compiler-generated visitor method name for a rule or label."""
    return "visit" + name[:1].upper() + name[1:]


def render_visitor(parser: ParserGrammar) -> str:
    interface = parser.visitor_name
    lines = [
        HEADER.format(name=parser.name),
        '"""Tree-building visitor for generated parse trees."""',
        "",
        "from __future__ import annotations",
        "",
        "from parsegen.runtime import ASTBuilder",
        "",
        f"from .antlr.{interface} import {interface}",
        "",
        "",
        f"class Visitor(ASTBuilder, {interface}):",
        f'    """Build parsegen trees from {parser.name} parse trees."""',
    ]
    for rule in parser.rules:
        if rule.is_options:
            for label in rule.labels:
                lines += [
                    "",
                    f"    def {visit_method_name(label)}(self, ctx):",
                    f"        return self.build_option({rule.name!r}, {label!r}, ctx)",
                ]
        else:
            lines += [
                "",
                f"    def {visit_method_name(rule.name)}(self, ctx):",
                f"        return self.build_rule({rule.name!r}, ctx)",
            ]
    lines += ["", "", "visit = Visitor()", ""]
    return "\n".join(lines)


__all__ = ["render_visitor", "visit_method_name"]
