"""Cypher statement model and renderer.

Build an AST from the models in :mod:`cypherdsl.ast_models` (or with the
helpers in :mod:`cypherdsl.cypher`) and turn it into Cypher text with
:class:`cypherdsl.renderer.Renderer`.
"""

__version__ = "0.1.0"

from cypherdsl import cypher
from cypherdsl.ast_models import (
    AliasedExpression,
    BooleanLiteral,
    CompoundCondition,
    Comparison,
    Condition,
    Delete,
    Expression,
    ExpressionList,
    FunctionInvocation,
    IsNull,
    Limit,
    ListLiteral,
    Literal,
    LogicalOperator,
    Match,
    Node,
    NotCondition,
    NullLiteral,
    NumberLiteral,
    Order,
    Pattern,
    Property,
    Relationship,
    RelationshipDetail,
    RelationshipDirection,
    Return,
    Skip,
    SortDirection,
    SortItem,
    Statement,
    StringLiteral,
    SymbolicName,
    Where,
)
from cypherdsl.config import RendererConfig, load_config
from cypherdsl.exceptions import (
    AmbiguousDispatchError,
    CypherDslError,
    InvalidStatementError,
    UnsupportedLiteralError,
)
from cypherdsl.renderer import (
    RenderContext,
    Renderer,
    RenderingVisitor,
    escape_name,
    render,
)
from cypherdsl.visitable import NodeKind, TypedSubtree, Visitable
from cypherdsl.visitor import Visitor
