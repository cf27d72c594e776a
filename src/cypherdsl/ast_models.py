"""Pydantic models for the Cypher statement AST.

The models are immutable value objects. Each concrete class declares a
:class:`~cypherdsl.visitable.NodeKind` and reports its children in the
order they appear in the rendered statement. Helper methods on the
expression and condition classes build new nodes; they never modify the
receiver.

Example:
    >>> from cypherdsl.ast_models import Node
    >>> person = Node(labels=("Person",)).named("n")
    >>> condition = person.property("name").is_equal_to("Alice")
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import Field, field_validator, model_validator

from cypherdsl.exceptions import InvalidStatementError, UnsupportedLiteralError
from cypherdsl.visitable import NodeKind, TypedSubtree, Visitable


def literal_of(value: Any) -> Literal:
    """Create the literal node for a Python value.

    Args:
        value: None, a bool, int, float, str, a list or tuple of those,
            or an existing literal.

    Returns:
        The matching :class:`Literal` subclass instance.

    Raises:
        UnsupportedLiteralError: If there is no literal form for ``value``.
    """
    match value:
        case Literal():
            return value
        case None:
            return NullLiteral()
        case bool():
            return BooleanLiteral(value=value)
        case float() if not math.isfinite(value):
            raise UnsupportedLiteralError(
                f"Cypher has no literal for the float {value!r}"
            )
        case int() | float():
            return NumberLiteral(value=value)
        case str():
            return StringLiteral(value=value)
        case list() | tuple():
            return ListLiteral(elements=tuple(literal_of(v) for v in value))
        case _:
            raise UnsupportedLiteralError(
                f"Cannot create a literal from {type(value).__name__}: {value!r}"
            )


def as_expression(value: Any) -> Expression:
    """Coerce ``value`` to an expression.

    Expressions pass through, named nodes become their symbolic name and
    plain Python values become literals.
    """
    if isinstance(value, Expression):
        return value
    if isinstance(value, Node):
        if value.symbolic_name is None:
            raise InvalidStatementError(
                "A node must be named to be used as an expression."
            )
        return value.symbolic_name
    return literal_of(value)


class Expression(Visitable):
    """Base class for everything that evaluates to a value."""

    def _compare(self, comparator: str, other: Any) -> Comparison:
        return Comparison(
            left=self, comparator=comparator, right=as_expression(other)
        )

    def is_equal_to(self, other: Any) -> Comparison:
        return self._compare("=", other)

    def is_not_equal_to(self, other: Any) -> Comparison:
        return self._compare("<>", other)

    def gt(self, other: Any) -> Comparison:
        return self._compare(">", other)

    def gte(self, other: Any) -> Comparison:
        return self._compare(">=", other)

    def lt(self, other: Any) -> Comparison:
        return self._compare("<", other)

    def lte(self, other: Any) -> Comparison:
        return self._compare("<=", other)

    def starts_with(self, other: Any) -> Comparison:
        return self._compare("STARTS WITH", other)

    def ends_with(self, other: Any) -> Comparison:
        return self._compare("ENDS WITH", other)

    def contains(self, other: Any) -> Comparison:
        return self._compare("CONTAINS", other)

    def matches(self, pattern: Any) -> Comparison:
        """Regular expression match (``=~``)."""
        return self._compare("=~", pattern)

    def is_null(self) -> IsNull:
        return IsNull(expression=self)

    def is_not_null(self) -> IsNull:
        return IsNull(expression=self, negated=True)

    def as_(self, alias: str) -> AliasedExpression:
        return AliasedExpression(expression=self, alias=alias)

    def ascending(self) -> SortItem:
        return SortItem(expression=self, direction=SortDirection.ASC)

    def descending(self) -> SortItem:
        return SortItem(expression=self, direction=SortDirection.DESC)


class Condition(Expression):
    """Base class for boolean expressions usable in a WHERE clause."""

    def and_(self, other: Condition) -> CompoundCondition:
        return combine(self, LogicalOperator.AND, other)

    def or_(self, other: Condition) -> CompoundCondition:
        return combine(self, LogicalOperator.OR, other)

    def xor(self, other: Condition) -> CompoundCondition:
        return combine(self, LogicalOperator.XOR, other)

    def not_(self) -> NotCondition:
        return NotCondition(condition=self)


class SymbolicName(Expression):
    """A variable bound to a node, a relationship or an aliased value."""

    kind: ClassVar[NodeKind] = NodeKind.SYMBOLIC_NAME

    name: str


class Property(Expression):
    """Property access on a symbolic name, ``n.name``."""

    kind: ClassVar[NodeKind] = NodeKind.PROPERTY

    container: SymbolicName
    name: str


class Literal(Expression):
    """Base class of literal values.

    The rendered form of a literal is decided by the literal itself
    through :meth:`as_string`.
    """

    kind: ClassVar[NodeKind] = NodeKind.LITERAL

    def as_string(self) -> str:
        raise NotImplementedError(
            f"Called as_string with {self.__class__.__name__}"
        )


class StringLiteral(Literal):
    """A single-quoted string. Backslashes and quotes are escaped."""

    value: str

    def as_string(self) -> str:
        escaped: str = self.value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"


class NumberLiteral(Literal):
    """An integer or a finite float.

    Floats keep Python's shortest round-trip form, except that the
    exponent carries no ``+`` sign (``1e20``), which Cypher does not accept.
    """

    value: int | float

    @field_validator("value")
    @classmethod
    def validate_value(cls, v):
        """Infinity and NaN have no literal form."""
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError(f"Cypher has no literal for the float {v!r}")
        return v

    def as_string(self) -> str:
        if isinstance(self.value, float):
            return repr(self.value).replace("e+", "e")
        return str(self.value)


class BooleanLiteral(Literal):
    """``true`` or ``false``."""

    value: bool

    def as_string(self) -> str:
        return "true" if self.value else "false"


class NullLiteral(Literal):
    """The ``NULL`` literal."""

    value: None = None

    def as_string(self) -> str:
        return "NULL"


class ListLiteral(Literal):
    """A list of literals, rendered as ``[a, b]``."""

    elements: tuple[Literal, ...] = ()

    def as_string(self) -> str:
        return "[" + ", ".join(e.as_string() for e in self.elements) + "]"


class ExpressionList(TypedSubtree):
    """Comma separated expressions, e.g. return items or function arguments."""

    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_LIST

    elements: tuple[Expression, ...] = ()


class FunctionInvocation(Expression):
    """A call such as ``count(n)``."""

    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_INVOCATION

    function_name: str
    arguments: ExpressionList = Field(default_factory=ExpressionList)

    def children(self) -> tuple[Visitable, ...]:
        return (self.arguments,)


class AliasedExpression(Expression):
    """An expression renamed with ``AS``."""

    kind: ClassVar[NodeKind] = NodeKind.ALIASED_EXPRESSION

    expression: Expression
    alias: str

    def children(self) -> tuple[Visitable, ...]:
        return (self.expression,)


class Comparator(Visitable):
    """The operator in the middle of a :class:`Comparison`."""

    kind: ClassVar[NodeKind] = NodeKind.COMPARATOR

    symbol: str


class Comparison(Condition):
    """A binary comparison such as ``n.age > 30``."""

    kind: ClassVar[NodeKind] = NodeKind.COMPARISON

    left: Expression
    comparator: str
    right: Expression

    def children(self) -> tuple[Visitable, ...]:
        return (self.left, Comparator(symbol=self.comparator), self.right)


class LogicalOperator(Enum):
    """Keyword joining the conditions of a compound condition."""

    AND = "AND"
    OR = "OR"
    XOR = "XOR"


class LogicalOperatorNode(Visitable):
    """The keyword placed between the conditions of a compound condition."""

    kind: ClassVar[NodeKind] = NodeKind.LOGICAL_OPERATOR

    operator: LogicalOperator


class CompoundCondition(Condition):
    """Two or more conditions joined by one logical operator.

    Always rendered in parentheses, so nesting compound conditions with
    different operators keeps the intended precedence.
    """

    kind: ClassVar[NodeKind] = NodeKind.COMPOUND_CONDITION

    operator: LogicalOperator
    conditions: tuple[Condition, ...]

    @field_validator("conditions")
    @classmethod
    def validate_conditions(cls, v):
        """A compound condition needs at least two operands."""
        if len(v) < 2:
            raise ValueError("A compound condition needs at least two conditions")
        return v

    def children(self) -> tuple[Visitable, ...]:
        operator_node = LogicalOperatorNode(operator=self.operator)
        out: list[Visitable] = [self.conditions[0]]
        for condition in self.conditions[1:]:
            out.append(operator_node)
            out.append(condition)
        return tuple(out)


def combine(
    left: Condition, operator: LogicalOperator, right: Condition
) -> CompoundCondition:
    """Join two conditions, flattening operands that use the same operator."""
    conditions: list[Condition] = []
    for condition in (left, right):
        if (
            isinstance(condition, CompoundCondition)
            and condition.operator is operator
        ):
            conditions.extend(condition.conditions)
        else:
            conditions.append(condition)
    return CompoundCondition(operator=operator, conditions=tuple(conditions))


class NotCondition(Condition):
    """A negated condition, rendered as ``NOT (...)``."""

    kind: ClassVar[NodeKind] = NodeKind.NOT_CONDITION

    condition: Condition

    def children(self) -> tuple[Visitable, ...]:
        return (self.condition,)


class IsNull(Condition):
    """``IS NULL`` or, when negated, ``IS NOT NULL``."""

    kind: ClassVar[NodeKind] = NodeKind.IS_NULL

    expression: Expression
    negated: bool = False

    def children(self) -> tuple[Visitable, ...]:
        return (self.expression,)


class RelationshipDirection(Enum):
    """Direction of a relationship together with its arrow glyphs."""

    LEFT_TO_RIGHT = ("-", "->")
    RIGHT_TO_LEFT = ("<-", "-")
    UNDIRECTED = ("-", "-")

    @property
    def symbol_left(self) -> str:
        return self.value[0]

    @property
    def symbol_right(self) -> str:
        return self.value[1]


class Node(Visitable):
    """A node pattern, ``(n:Person:Employee)``.

    Attributes:
        symbolic_name: Optional variable bound to the node.
        labels: Labels in declaration order.
    """

    kind: ClassVar[NodeKind] = NodeKind.NODE

    symbolic_name: Optional[SymbolicName] = None
    labels: tuple[str, ...] = ()

    @property
    def is_labeled(self) -> bool:
        return len(self.labels) > 0

    def named(self, name: str | SymbolicName) -> Node:
        if isinstance(name, str):
            name = SymbolicName(name=name)
        return self.model_copy(update={"symbolic_name": name})

    def _relationship(
        self, other: Node, direction: RelationshipDirection, types: tuple[str, ...]
    ) -> Relationship:
        return Relationship(
            left=self,
            details=RelationshipDetail(direction=direction, types=types),
            right=other,
        )

    def relationship_to(self, other: Node, *types: str) -> Relationship:
        return self._relationship(other, RelationshipDirection.LEFT_TO_RIGHT, types)

    def relationship_from(self, other: Node, *types: str) -> Relationship:
        return self._relationship(other, RelationshipDirection.RIGHT_TO_LEFT, types)

    def relationship_between(self, other: Node, *types: str) -> Relationship:
        return self._relationship(other, RelationshipDirection.UNDIRECTED, types)

    def property(self, name: str) -> Property:
        """Access a property of this node. The node must be named."""
        if self.symbolic_name is None:
            raise InvalidStatementError(
                f"Cannot access property {name!r} of an unnamed node."
            )
        return Property(container=self.symbolic_name, name=name)


class RelationshipDetail(Visitable):
    """The bracketed part of a relationship pattern, ``-[r:KNOWS]->``."""

    kind: ClassVar[NodeKind] = NodeKind.RELATIONSHIP_DETAIL

    direction: RelationshipDirection = RelationshipDirection.UNDIRECTED
    symbolic_name: Optional[SymbolicName] = None
    types: tuple[str, ...] = ()

    @property
    def is_typed(self) -> bool:
        return len(self.types) > 0


class Relationship(Visitable):
    """A relationship between two nodes.

    ``left`` may itself be a relationship, which chains patterns such as
    ``(a)-[:KNOWS]->(b)-[:LIVES_IN]->(c)``.
    """

    kind: ClassVar[NodeKind] = NodeKind.RELATIONSHIP

    left: Node | Relationship
    details: RelationshipDetail
    right: Node

    def children(self) -> tuple[Visitable, ...]:
        return (self.left, self.details, self.right)

    def named(self, name: str | SymbolicName) -> Relationship:
        if isinstance(name, str):
            name = SymbolicName(name=name)
        details = self.details.model_copy(update={"symbolic_name": name})
        return self.model_copy(update={"details": details})

    def property(self, name: str) -> Property:
        if self.details.symbolic_name is None:
            raise InvalidStatementError(
                f"Cannot access property {name!r} of an unnamed relationship."
            )
        return Property(container=self.details.symbolic_name, name=name)

    def _relationship(
        self, other: Node, direction: RelationshipDirection, types: tuple[str, ...]
    ) -> Relationship:
        return Relationship(
            left=self,
            details=RelationshipDetail(direction=direction, types=types),
            right=other,
        )

    def relationship_to(self, other: Node, *types: str) -> Relationship:
        """Continue the chain with an outgoing relationship to ``other``."""
        return self._relationship(other, RelationshipDirection.LEFT_TO_RIGHT, types)

    def relationship_from(self, other: Node, *types: str) -> Relationship:
        """Continue the chain with an incoming relationship from ``other``."""
        return self._relationship(other, RelationshipDirection.RIGHT_TO_LEFT, types)

    def relationship_between(self, other: Node, *types: str) -> Relationship:
        """Continue the chain with an undirected relationship to ``other``."""
        return self._relationship(other, RelationshipDirection.UNDIRECTED, types)


class Pattern(TypedSubtree):
    """Comma separated pattern elements of a MATCH clause."""

    kind: ClassVar[NodeKind] = NodeKind.PATTERN

    elements: tuple[Node | Relationship, ...] = ()


class Where(Visitable):
    """The ``WHERE`` part of a MATCH clause."""

    kind: ClassVar[NodeKind] = NodeKind.WHERE

    condition: Condition

    def children(self) -> tuple[Visitable, ...]:
        return (self.condition,)


class Match(Visitable):
    """A ``MATCH`` or ``OPTIONAL MATCH`` clause with its optional WHERE."""

    kind: ClassVar[NodeKind] = NodeKind.MATCH

    pattern: Pattern
    where: Optional[Where] = None
    optional: bool = False

    def children(self) -> tuple[Visitable, ...]:
        if self.where is None:
            return (self.pattern,)
        return (self.pattern, self.where)


class SortDirection(Enum):
    """Direction of a sort item."""

    ASC = "ASC"
    DESC = "DESC"


class SortDirectionNode(Visitable):
    """The ``ASC``/``DESC`` keyword after a sort expression."""

    kind: ClassVar[NodeKind] = NodeKind.SORT_DIRECTION

    direction: SortDirection


class SortItem(Visitable):
    """An expression to order by, with an optional direction."""

    kind: ClassVar[NodeKind] = NodeKind.SORT_ITEM

    expression: Expression
    direction: Optional[SortDirection] = None

    def children(self) -> tuple[Visitable, ...]:
        if self.direction is None:
            return (self.expression,)
        return (self.expression, SortDirectionNode(direction=self.direction))


class Order(TypedSubtree):
    """The sort items of ``ORDER BY``."""

    kind: ClassVar[NodeKind] = NodeKind.ORDER

    elements: tuple[SortItem, ...] = ()


def _row_count(v: NumberLiteral) -> NumberLiteral:
    if not isinstance(v.value, int) or v.value < 0:
        raise ValueError(f"Expected a non-negative integer, got {v.value!r}")
    return v


class Skip(Visitable):
    """``SKIP n``; ``n`` must be a non-negative integer."""

    kind: ClassVar[NodeKind] = NodeKind.SKIP

    value: NumberLiteral

    @field_validator("value")
    @classmethod
    def validate_value(cls, v):
        return _row_count(v)

    def children(self) -> tuple[Visitable, ...]:
        return (self.value,)


class Limit(Visitable):
    """``LIMIT n``; ``n`` must be a non-negative integer."""

    kind: ClassVar[NodeKind] = NodeKind.LIMIT

    value: NumberLiteral

    @field_validator("value")
    @classmethod
    def validate_value(cls, v):
        return _row_count(v)

    def children(self) -> tuple[Visitable, ...]:
        return (self.value,)


class Return(Visitable):
    """The ``RETURN`` clause, including ORDER BY, SKIP and LIMIT."""

    kind: ClassVar[NodeKind] = NodeKind.RETURN

    items: ExpressionList
    distinct: bool = False
    order: Optional[Order] = None
    skip: Optional[Skip] = None
    limit: Optional[Limit] = None

    def children(self) -> tuple[Visitable, ...]:
        return tuple(
            child
            for child in (self.items, self.order, self.skip, self.limit)
            if child is not None
        )


class Delete(Visitable):
    """A ``DELETE`` or ``DETACH DELETE`` clause."""

    kind: ClassVar[NodeKind] = NodeKind.DELETE

    items: ExpressionList
    detach: bool = False

    def children(self) -> tuple[Visitable, ...]:
        return (self.items,)


class Statement(Visitable):
    """Root of the AST: reading clauses followed by DELETE and/or RETURN."""

    kind: ClassVar[NodeKind] = NodeKind.STATEMENT

    matches: tuple[Match, ...] = ()
    delete: Optional[Delete] = None
    returning: Optional[Return] = None

    @model_validator(mode="after")
    def validate_not_empty(self) -> Statement:
        if not self.matches and self.delete is None and self.returning is None:
            raise ValueError("A statement needs at least one clause")
        return self

    def children(self) -> tuple[Visitable, ...]:
        out: list[Visitable] = list(self.matches)
        if self.delete is not None:
            out.append(self.delete)
        if self.returning is not None:
            out.append(self.returning)
        return tuple(out)


for _model in (
    Expression,
    Condition,
    ListLiteral,
    ExpressionList,
    FunctionInvocation,
    AliasedExpression,
    Comparison,
    CompoundCondition,
    NotCondition,
    IsNull,
    Node,
    RelationshipDetail,
    Relationship,
    Pattern,
    Where,
    Match,
    SortItem,
    Order,
    Skip,
    Limit,
    Return,
    Delete,
    Statement,
):
    _model.model_rebuild()
