"""Render a Cypher AST to statement text.

:class:`RenderingVisitor` emits fixed fragments when entering and
leaving nodes and inserts a separator between the elements of every
:class:`~cypherdsl.visitable.TypedSubtree`. :class:`Renderer` is the
convenience entry point that renders a whole statement with a fresh
visitor.

Example:
    >>> from cypherdsl import cypher
    >>> n = cypher.node("Person").named("n")
    >>> statement = cypher.statement(
    ...     cypher.match(n, where=n.property("name").is_equal_to("X")),
    ...     returning=cypher.returning(n),
    ... )
    >>> Renderer().render(statement)
    "MATCH (n:`Person`) WHERE n.name = 'X' RETURN n"
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from cypherdsl.config import RendererConfig
from cypherdsl.logger import LOGGER
from cypherdsl.visitable import NodeKind, Visitable
from cypherdsl.visitor import Visitor

LABEL_SEPARATOR = ":"
TYPE_SEPARATOR = ":"
UNQUOTED_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def escape_name(unescaped_name: Optional[str]) -> Optional[str]:
    """Quote a label, relationship type or variable name with backticks.

    Backticks inside the name are doubled.

    Args:
        unescaped_name: The name to escape.

    Returns:
        None when the name is None, otherwise the quoted name, safe to be
        used in statements.
    """
    if unescaped_name is None:
        return None
    return "`{}`".format(unescaped_name.replace("`", "``"))


def sanitize_name(
    unescaped_name: Optional[str], always_escape: bool = True
) -> Optional[str]:
    """Escape ``unescaped_name`` if needed.

    With ``always_escape`` off, names that are valid bare identifiers are
    returned unchanged.
    """
    if unescaped_name is None:
        return None
    if not always_escape and UNQUOTED_IDENTIFIER.fullmatch(unescaped_name):
        return unescaped_name
    return escape_name(unescaped_name)


@dataclass
class RenderContext:
    """Mutable state of one rendering pass.

    Attributes:
        parts: Rendered fragments, in order.
        separator_on_level: Tree levels whose nodes are separated.
        separator: Separator waiting to be written before the next
            sibling, if any.
        current_level: Depth of the node being visited.
    """

    parts: list[str] = field(default_factory=list)
    separator_on_level: set[int] = field(default_factory=set)
    separator: Optional[str] = None
    current_level: int = 0

    def append(self, *fragments: str) -> None:
        self.parts.extend(fragments)

    @property
    def content(self) -> str:
        return "".join(self.parts)


class RenderingVisitor(Visitor):
    """Visitor that turns a Cypher AST into text.

    The visitor keeps track of the levels in the tree on which elements
    must be separated. Entering a typed subtree switches separators on
    for the level of its children; fully leaving it switches them off.
    Because this is tracked by absolute depth, two typed subtrees must
    never be open on the same level at once, which the grammar
    guarantees.

    A visitor instance renders one tree. Use a new instance, or pass a
    new :class:`RenderContext`, for every pass.
    """

    def __init__(self, config: Optional[RendererConfig] = None) -> None:
        self.config: RendererConfig = config or RendererConfig()
        super().__init__()
        LOGGER.debug(msg=f"Created rendering visitor with {self.config}")

    def new_context(self) -> RenderContext:
        return RenderContext()

    def _enable_separator(
        self, context: RenderContext, level: int, on: bool
    ) -> None:
        if on:
            context.separator_on_level.add(level)
        else:
            context.separator_on_level.discard(level)
        context.separator = None

    def _needs_separator(self, context: RenderContext) -> bool:
        return context.current_level in context.separator_on_level

    def pre_enter(self, node: Visitable, context: RenderContext) -> None:
        context.current_level += 1
        next_level: int = context.current_level + 1
        if node.is_typed_subtree:
            self._enable_separator(context, next_level, True)

        if self._needs_separator(context) and context.separator is not None:
            context.append(context.separator)
            context.separator = None

    def post_leave(self, node: Visitable, context: RenderContext) -> None:
        if self._needs_separator(context):
            context.separator = self.config.separator

        if node.is_typed_subtree:
            self._enable_separator(context, context.current_level + 1, False)

        context.current_level -= 1

    def _names(self, names: tuple[str, ...], separator: str) -> str:
        escaped = (
            sanitize_name(name, self.config.always_escape_names)
            for name in names
        )
        return separator.join(name for name in escaped if name is not None)

    def enter(self, node: Visitable, context: RenderContext) -> None:
        match node.kind:
            case NodeKind.MATCH:
                if node.optional:
                    context.append("OPTIONAL ")
                context.append("MATCH ")
            case NodeKind.WHERE:
                context.append(" WHERE ")
            case NodeKind.RETURN:
                context.append("RETURN ")
                if node.distinct:
                    context.append("DISTINCT ")
            case NodeKind.DELETE:
                if node.detach:
                    context.append("DETACH ")
                context.append("DELETE ")
            case NodeKind.ORDER:
                context.append(" ORDER BY ")
            case NodeKind.SKIP:
                context.append(" SKIP ")
            case NodeKind.LIMIT:
                context.append(" LIMIT ")
            case NodeKind.SORT_DIRECTION:
                context.append(" ", node.direction.value)
            case NodeKind.PROPERTY:
                context.append(
                    node.container.name, ".", sanitize_name(node.name, False)
                )
            case NodeKind.FUNCTION_INVOCATION:
                context.append(node.function_name, "(")
            case NodeKind.COMPARATOR:
                context.append(" ", node.symbol, " ")
            case NodeKind.COMPOUND_CONDITION:
                context.append("(")
            case NodeKind.LOGICAL_OPERATOR:
                context.append(" ", node.operator.value, " ")
            case NodeKind.NOT_CONDITION:
                context.append("NOT (")
            case NodeKind.LITERAL:
                context.append(node.as_string())
            case NodeKind.SYMBOLIC_NAME:
                context.append(node.name)
            case NodeKind.NODE:
                context.append(
                    "(",
                    node.symbolic_name.name if node.symbolic_name else "",
                    LABEL_SEPARATOR if node.is_labeled else "",
                    self._names(node.labels, LABEL_SEPARATOR),
                    ")",
                )
            case NodeKind.RELATIONSHIP_DETAIL:
                context.append(
                    node.direction.symbol_left,
                    "[",
                    node.symbolic_name.name if node.symbolic_name else "",
                    TYPE_SEPARATOR if node.is_typed else "",
                    self._names(node.types, TYPE_SEPARATOR),
                    "]",
                    node.direction.symbol_right,
                )
            case _:
                pass

    def leave(self, node: Visitable, context: RenderContext) -> None:
        match node.kind:
            case NodeKind.MATCH | NodeKind.DELETE:
                context.append(" ")
            case NodeKind.ALIASED_EXPRESSION:
                context.append(" AS ", sanitize_name(node.alias, False))
            case NodeKind.FUNCTION_INVOCATION:
                context.append(")")
            case NodeKind.IS_NULL:
                context.append(" IS ", "NOT " if node.negated else "", "NULL")
            case NodeKind.COMPOUND_CONDITION | NodeKind.NOT_CONDITION:
                context.append(")")
            case _:
                pass

    def get_rendered_content(
        self, context: Optional[RenderContext] = None
    ) -> str:
        """Return everything rendered so far.

        Args:
            context: Context of an explicit pass. Defaults to the
                visitor's own context.
        """
        if context is None:
            context = self.context
        return context.content


class Renderer:
    """Renders statements, creating a fresh visitor for each one."""

    def __init__(self, config: Optional[RendererConfig] = None) -> None:
        self.config: RendererConfig = config or RendererConfig()

    def render(self, statement: Visitable) -> str:
        """Render ``statement`` to Cypher text.

        Args:
            statement: Root of the AST, usually a Statement.

        Returns:
            The rendered text without leading or trailing whitespace.
        """
        visitor = RenderingVisitor(self.config)
        statement.accept(visitor)
        rendered: str = visitor.get_rendered_content().strip()
        LOGGER.debug(msg=f"Rendered statement: {rendered}")
        return rendered


def render(statement: Visitable, config: Optional[RendererConfig] = None) -> str:
    """Render ``statement`` with a default or given configuration."""
    return Renderer(config).render(statement)
