"""Tests for the AST Pydantic models.

This module tests construction, validation and immutability of the
models, the helper methods that build new nodes, and the traversal and
printing utilities shared by every node.
"""

import pytest
from pydantic import ValidationError

from cypherdsl import cypher
from cypherdsl.ast_models import (
    BooleanLiteral,
    Comparison,
    CompoundCondition,
    Delete,
    ExpressionList,
    IsNull,
    Limit,
    LogicalOperator,
    Match,
    Node,
    NotCondition,
    NullLiteral,
    NumberLiteral,
    Pattern,
    Property,
    Relationship,
    RelationshipDirection,
    Return,
    Skip,
    SortDirection,
    SortItem,
    Statement,
    StringLiteral,
    SymbolicName,
    as_expression,
)
from cypherdsl.exceptions import InvalidStatementError, UnsupportedLiteralError
from cypherdsl.visitable import NodeKind


@pytest.fixture
def person():
    """A Person node bound to ``p``."""
    return cypher.node("Person").named("p")


@pytest.fixture
def statement(person):
    """A statement with a relationship pattern, a WHERE and a RETURN."""
    friend = cypher.node("Person").named("f")
    return cypher.statement(
        cypher.match(
            person.relationship_to(friend, "KNOWS"),
            where=person.property("age").gt(30),
        ),
        returning=cypher.returning(
            person.property("name"), friend.property("name")
        ),
    )


class TestConstruction:
    """Test building nodes directly and through helper methods."""

    def test_node_defaults(self):
        node = Node()
        assert node.symbolic_name is None
        assert node.labels == ()
        assert not node.is_labeled

    def test_labels_are_kept_in_order(self):
        node = Node(labels=["B", "A", "C"])
        assert node.labels == ("B", "A", "C")
        assert node.is_labeled

    def test_named_returns_new_node(self):
        node = cypher.node("Person")
        named = node.named("n")
        assert node.symbolic_name is None
        assert named.symbolic_name == SymbolicName(name="n")
        assert named.labels == ("Person",)

    def test_property_of_named_node(self, person):
        prop = person.property("name")
        assert isinstance(prop, Property)
        assert prop.container.name == "p"
        assert prop.name == "name"

    def test_property_of_unnamed_node_raises(self):
        with pytest.raises(InvalidStatementError):
            Node(labels=("Person",)).property("name")

    def test_relationship_directions(self, person):
        other = cypher.any_node("o")
        assert (
            person.relationship_to(other).details.direction
            == RelationshipDirection.LEFT_TO_RIGHT
        )
        assert (
            person.relationship_from(other).details.direction
            == RelationshipDirection.RIGHT_TO_LEFT
        )
        assert (
            person.relationship_between(other).details.direction
            == RelationshipDirection.UNDIRECTED
        )

    def test_relationship_named(self, person):
        relationship = person.relationship_to(cypher.any_node("o"), "KNOWS").named("r")
        assert relationship.details.symbolic_name.name == "r"
        assert relationship.details.types == ("KNOWS",)
        assert relationship.property("since").container.name == "r"

    def test_relationship_chain_directions(self, person):
        first = person.relationship_to(cypher.any_node("a"))
        chain = first.relationship_between(cypher.any_node("b"), "KNOWS")
        assert chain.left == first
        assert chain.details.direction == RelationshipDirection.UNDIRECTED
        assert chain.details.types == ("KNOWS",)
        assert (
            chain.relationship_from(cypher.any_node("c")).details.direction
            == RelationshipDirection.RIGHT_TO_LEFT
        )

    def test_unnamed_relationship_property_raises(self, person):
        with pytest.raises(InvalidStatementError):
            person.relationship_to(cypher.any_node("o")).property("since")

    def test_direction_symbols(self):
        assert RelationshipDirection.LEFT_TO_RIGHT.symbol_left == "-"
        assert RelationshipDirection.LEFT_TO_RIGHT.symbol_right == "->"
        assert RelationshipDirection.RIGHT_TO_LEFT.symbol_left == "<-"
        assert RelationshipDirection.RIGHT_TO_LEFT.symbol_right == "-"
        assert RelationshipDirection.UNDIRECTED.symbol_left == "-"
        assert RelationshipDirection.UNDIRECTED.symbol_right == "-"

    def test_comparison_children_order(self, person):
        comparison = person.property("age").gte(21)
        left, comparator, right = comparison.children()
        assert left == person.property("age")
        assert comparator.kind is NodeKind.COMPARATOR
        assert comparator.symbol == ">="
        assert right == NumberLiteral(value=21)

    def test_sort_items(self, person):
        ascending = person.property("name").ascending()
        assert isinstance(ascending, SortItem)
        assert ascending.direction is SortDirection.ASC
        assert person.property("name").descending().direction is SortDirection.DESC
        assert len(cypher.sort(person).children()) == 1


class TestConditions:
    """Test combining conditions."""

    def test_and_creates_compound(self, person):
        a = person.property("a").is_null()
        b = person.property("b").is_not_null()
        combined = a.and_(b)
        assert isinstance(combined, CompoundCondition)
        assert combined.operator is LogicalOperator.AND
        assert combined.conditions == (a, b)

    def test_same_operator_flattens(self, person):
        a, b, c, d = (person.property(x).is_null() for x in "abcd")
        combined = a.and_(b).and_(c.and_(d))
        assert combined.conditions == (a, b, c, d)

    def test_different_operator_nests(self, person):
        a, b, c = (person.property(x).is_null() for x in "abc")
        combined = a.or_(b).and_(c)
        assert combined.operator is LogicalOperator.AND
        assert isinstance(combined.conditions[0], CompoundCondition)
        assert combined.conditions[0].operator is LogicalOperator.OR

    def test_operator_interleaves_children(self, person):
        a, b, c = (person.property(x).is_null() for x in "abc")
        children = a.or_(b).or_(c).children()
        assert [child.kind for child in children] == [
            NodeKind.IS_NULL,
            NodeKind.LOGICAL_OPERATOR,
            NodeKind.IS_NULL,
            NodeKind.LOGICAL_OPERATOR,
            NodeKind.IS_NULL,
        ]

    def test_not(self, person):
        condition = person.property("a").is_null()
        negated = condition.not_()
        assert isinstance(negated, NotCondition)
        assert negated.children() == (condition,)

    def test_is_null_negation_flag(self, person):
        assert isinstance(person.property("a").is_null(), IsNull)
        assert not person.property("a").is_null().negated
        assert person.property("a").is_not_null().negated


class TestValidation:
    """Test that malformed nodes are rejected."""

    def test_compound_needs_two_conditions(self, person):
        with pytest.raises(ValidationError):
            CompoundCondition(
                operator=LogicalOperator.AND,
                conditions=(person.property("a").is_null(),),
            )

    @pytest.mark.parametrize("row_count_type", [Skip, Limit])
    @pytest.mark.parametrize("value", [-3, 2.5, 2.0])
    def test_row_counts_must_be_non_negative_integers(self, row_count_type, value):
        with pytest.raises(ValidationError):
            row_count_type(value=NumberLiteral(value=value))

    @pytest.mark.parametrize("row_count_type", [Skip, Limit])
    def test_zero_row_count(self, row_count_type):
        assert row_count_type(value=NumberLiteral(value=0)).value.value == 0

    def test_empty_statement(self):
        with pytest.raises(ValidationError):
            Statement()

    def test_wrong_field_type(self):
        with pytest.raises(ValidationError):
            Match(pattern="(n)")

    def test_nodes_are_frozen(self, person):
        with pytest.raises(ValidationError):
            person.labels = ("Other",)

    def test_nodes_are_hashable_values(self, person):
        assert hash(person) == hash(cypher.node("Person").named("p"))
        assert person == cypher.node("Person").named("p")


class TestLiteralOf:
    """Test creating literals from Python values."""

    @pytest.mark.parametrize(
        "value,literal_type",
        [
            (None, NullLiteral),
            (True, BooleanLiteral),
            (3, NumberLiteral),
            (2.5, NumberLiteral),
            ("x", StringLiteral),
        ],
    )
    def test_scalar_types(self, value, literal_type):
        assert isinstance(cypher.literal_of(value), literal_type)

    def test_bool_is_not_a_number(self):
        assert cypher.literal_of(False).as_string() == "false"

    def test_literal_passes_through(self):
        literal = StringLiteral(value="x")
        assert cypher.literal_of(literal) is literal

    def test_unsupported_value(self):
        with pytest.raises(UnsupportedLiteralError):
            cypher.literal_of(object())

    def test_as_expression_of_unnamed_node(self):
        with pytest.raises(InvalidStatementError):
            as_expression(Node())


class TestTraversal:
    """Test AST traversal functionality."""

    def test_walk_starts_at_root(self, statement):
        all_nodes = list(statement.walk())
        assert isinstance(all_nodes[0], Statement)
        assert len(all_nodes) > 10

    def test_find_all_by_type(self, statement):
        nodes = statement.find_all(Node)
        assert [node.symbolic_name.name for node in nodes] == ["p", "f"]
        assert len(statement.find_all(Property)) == 3

    def test_find_first(self, statement):
        match = statement.find_first(Match)
        assert isinstance(match, Match)
        assert isinstance(match.pattern, Pattern)
        assert isinstance(statement.find_first(Relationship), Relationship)
        assert isinstance(statement.find_first(Comparison), Comparison)
        assert statement.find_first(Delete) is None

    def test_typed_subtree_flags(self, statement):
        flagged = {
            node.kind for node in statement.walk() if node.is_typed_subtree
        }
        assert flagged == {NodeKind.PATTERN, NodeKind.EXPRESSION_LIST}

    def test_statement_children_order(self, person):
        statement = cypher.statement(
            cypher.match(person),
            delete=cypher.delete(person),
            returning=cypher.returning(person),
        )
        assert [child.kind for child in statement.children()] == [
            NodeKind.MATCH,
            NodeKind.DELETE,
            NodeKind.RETURN,
        ]

    def test_return_children_skip_missing_parts(self, person):
        returning = cypher.returning(person, limit=3)
        assert isinstance(returning, Return)
        assert [child.kind for child in returning.children()] == [
            NodeKind.EXPRESSION_LIST,
            NodeKind.LIMIT,
        ]

    def test_expression_list_children(self):
        expressions = ExpressionList(
            elements=(SymbolicName(name="a"), SymbolicName(name="b"))
        )
        assert expressions.children() == expressions.elements


class TestPrettyPrint:
    """Test pretty printing functionality."""

    def test_pretty_contains_node_types(self, statement):
        output = statement.pretty()
        assert "Statement" in output
        assert "Match" in output
        assert "Relationship" in output
        assert "Return" in output

    def test_pretty_shows_scalar_fields(self, person):
        assert "labels=('Person',)" in cypher.match(person).pretty()
        assert "name='p'" in cypher.name("p").pretty()

    def test_pretty_shows_enum_names(self, person):
        output = person.relationship_to(cypher.any_node("o"), "KNOWS").pretty()
        assert "direction=LEFT_TO_RIGHT" in output
