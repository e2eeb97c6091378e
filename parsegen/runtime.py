"""Runtime support imported by generated visitor modules.

:class:`ASTBuilder` converts ANTLR parse trees into :mod:`parsegen.tree`
nodes. A generated ``Visitor`` subclasses it together with the compiler's
``<Parser>Visitor`` and routes each ``visit<Rule>`` method to
:meth:`ASTBuilder.build_rule` or :meth:`ASTBuilder.build_option`.
"""

from __future__ import annotations

from antlr4 import ParserRuleContext
from antlr4.tree.Tree import ParseTreeVisitor

from .tree import Node, OptionsNode, RuleNode, Span


def context_span(ctx: ParserRuleContext) -> Span | None:
    """Character span covered by ``ctx``; ``end`` is None for empty derivations."""
    start, stop = ctx.start, ctx.stop
    if start is None:
        return None
    if stop is None or stop.tokenIndex < start.tokenIndex:
        return Span(start.start)
    return Span(start.start, stop.stop)


class ASTBuilder(ParseTreeVisitor):
    """Build :class:`RuleNode`/:class:`OptionsNode` trees from rule contexts."""

    def child_nodes(self, ctx: ParserRuleContext) -> list[Node]:
        # Terminal nodes carry no rule type and are left out of the tree.
        nodes: list[Node] = []
        for child in ctx.children or ():
            if isinstance(child, ParserRuleContext):
                node = child.accept(self)
                if node is not None:
                    nodes.append(node)
        return nodes

    def build_rule(self, type: str, ctx: ParserRuleContext) -> RuleNode:
        return RuleNode(type=type, children=self.child_nodes(ctx), span=context_span(ctx))

    def build_option(self, rule: str, label: str, ctx: ParserRuleContext) -> OptionsNode:
        span = context_span(ctx)
        option = RuleNode(type=label, children=self.child_nodes(ctx), span=span)
        return OptionsNode(type=rule, option=option, span=span)


__all__ = ["ASTBuilder", "context_span"]
