"""Helpers for assembling statements.

These functions wrap the AST constructors so callers can write::

    n = cypher.node("Person").named("n")
    statement = cypher.statement(
        cypher.match(n, where=n.property("age").gt(30)),
        returning=cypher.returning(n.property("name"), limit=10),
    )
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from cypherdsl.ast_models import (
    AliasedExpression,
    CompoundCondition,
    Condition,
    Delete,
    Expression,
    ExpressionList,
    FunctionInvocation,
    Limit,
    LogicalOperator,
    Match,
    Node,
    NotCondition,
    NumberLiteral,
    Order,
    Pattern,
    Property,
    Relationship,
    Return,
    Skip,
    SortDirection,
    SortItem,
    Statement,
    SymbolicName,
    Where,
    as_expression,
    combine,
    literal_of,
)
from cypherdsl.exceptions import InvalidStatementError

__all__ = [
    "aliased",
    "any_node",
    "and_",
    "count",
    "delete",
    "function",
    "id_of",
    "literal_of",
    "match",
    "name",
    "node",
    "not_",
    "optional_match",
    "or_",
    "property_of",
    "returning",
    "sort",
    "statement",
]


def node(*labels: str) -> Node:
    """Create a node pattern with the given labels."""
    return Node(labels=labels)


def any_node(symbolic_name: Optional[str] = None) -> Node:
    """Create a node pattern without labels, optionally named."""
    if symbolic_name is None:
        return Node()
    return Node().named(symbolic_name)


def name(value: str) -> SymbolicName:
    """Create a symbolic name, e.g. to refer to an alias."""
    return SymbolicName(name=value)


def property_of(container: str | SymbolicName | Node, property_name: str) -> Property:
    """Create a property access on a variable name or a named node."""
    if isinstance(container, Node):
        return container.property(property_name)
    if isinstance(container, str):
        container = SymbolicName(name=container)
    return Property(container=container, name=property_name)


def function(function_name: str, *arguments: Any) -> FunctionInvocation:
    """Invoke ``function_name`` with the given arguments."""
    return FunctionInvocation(
        function_name=function_name,
        arguments=ExpressionList(
            elements=tuple(as_expression(argument) for argument in arguments)
        ),
    )


def count(expression: Any) -> FunctionInvocation:
    """Invoke ``count`` on ``expression``."""
    return function("count", expression)


def id_of(element: Node) -> FunctionInvocation:
    """Invoke ``id`` on a named node."""
    return function("id", element)


def _conditions(
    operator: LogicalOperator, conditions: Iterable[Condition]
) -> CompoundCondition:
    conditions = tuple(conditions)
    if len(conditions) < 2:
        raise InvalidStatementError(
            f"{operator.value} needs at least two conditions, got {len(conditions)}"
        )
    combined: Condition = conditions[0]
    for condition in conditions[1:]:
        combined = combine(combined, operator, condition)
    return combined


def and_(*conditions: Condition) -> CompoundCondition:
    """Join all ``conditions`` with AND."""
    return _conditions(LogicalOperator.AND, conditions)


def or_(*conditions: Condition) -> CompoundCondition:
    """Join all ``conditions`` with OR."""
    return _conditions(LogicalOperator.OR, conditions)


def not_(condition: Condition) -> NotCondition:
    """Negate ``condition``."""
    return NotCondition(condition=condition)


def _pattern_match(
    elements: tuple[Node | Relationship, ...],
    where: Optional[Condition],
    optional: bool,
) -> Match:
    if not elements:
        raise InvalidStatementError("A MATCH clause needs at least one pattern element")
    return Match(
        pattern=Pattern(elements=elements),
        where=None if where is None else Where(condition=where),
        optional=optional,
    )


def match(
    *elements: Node | Relationship, where: Optional[Condition] = None
) -> Match:
    """Create a MATCH clause over the given pattern elements."""
    return _pattern_match(elements, where, optional=False)


def optional_match(
    *elements: Node | Relationship, where: Optional[Condition] = None
) -> Match:
    """Create an OPTIONAL MATCH clause over the given pattern elements."""
    return _pattern_match(elements, where, optional=True)


def sort(
    expression: Any, direction: Optional[SortDirection] = None
) -> SortItem:
    """Create a sort item; without a direction the database default applies."""
    return SortItem(expression=as_expression(expression), direction=direction)


def _expression_list(items: tuple[Any, ...]) -> ExpressionList:
    return ExpressionList(elements=tuple(as_expression(item) for item in items))


def returning(
    *items: Any,
    distinct: bool = False,
    order_by: Iterable[SortItem | Expression] = (),
    skip: Optional[int] = None,
    limit: Optional[int] = None,
) -> Return:
    """Create a RETURN clause.

    Args:
        *items: Expressions, named nodes or aliased expressions to return.
        distinct: Render ``RETURN DISTINCT``.
        order_by: Sort items; bare expressions are sorted without an
            explicit direction.
        skip: Number of rows to skip.
        limit: Maximum number of rows.

    Returns:
        The Return clause.
    """
    if not items:
        raise InvalidStatementError("A RETURN clause needs at least one item")
    sort_items: tuple[SortItem, ...] = tuple(
        item if isinstance(item, SortItem) else sort(item) for item in order_by
    )
    return Return(
        items=_expression_list(items),
        distinct=distinct,
        order=Order(elements=sort_items) if sort_items else None,
        skip=None if skip is None else Skip(value=NumberLiteral(value=skip)),
        limit=None if limit is None else Limit(value=NumberLiteral(value=limit)),
    )


def delete(*items: Any, detach: bool = False) -> Delete:
    """Create a DELETE (or DETACH DELETE) clause."""
    if not items:
        raise InvalidStatementError("A DELETE clause needs at least one item")
    return Delete(items=_expression_list(items), detach=detach)


def statement(
    *matches: Match,
    returning: Optional[Return] = None,
    delete: Optional[Delete] = None,
) -> Statement:
    """Assemble a statement from its clauses."""
    if not matches and returning is None and delete is None:
        raise InvalidStatementError("A statement needs at least one clause")
    return Statement(matches=matches, delete=delete, returning=returning)


def aliased(expression: Any, alias: str) -> AliasedExpression:
    """Rename ``expression`` with ``AS alias``."""
    return as_expression(expression).as_(alias)
