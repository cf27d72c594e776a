"""Base classes for the nodes of the Cypher AST.

Every node is an immutable pydantic model deriving from :class:`Visitable`.
A node reports its children in traversal order and whether those children
form a homogeneous, separator-delimited list (:class:`TypedSubtree`).
Visitors never inspect the Python type of a node: they dispatch on the
``kind`` tag, which is unique per concrete node class.
"""

from __future__ import annotations

import io
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generator, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from rich import print as rprint
from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from cypherdsl.exceptions import AmbiguousDispatchError
from cypherdsl.logger import LOGGER

if TYPE_CHECKING:
    from cypherdsl.visitor import Visitor

VisitableType = TypeVar("VisitableType", bound="Visitable")


class NodeKind(str, Enum):
    """The closed set of AST variants a visitor can dispatch on."""

    STATEMENT = "statement"
    MATCH = "match"
    WHERE = "where"
    RETURN = "return"
    DELETE = "delete"
    ORDER = "order"
    SORT_ITEM = "sort_item"
    SORT_DIRECTION = "sort_direction"
    SKIP = "skip"
    LIMIT = "limit"
    PATTERN = "pattern"
    NODE = "node"
    RELATIONSHIP = "relationship"
    RELATIONSHIP_DETAIL = "relationship_detail"
    SYMBOLIC_NAME = "symbolic_name"
    PROPERTY = "property"
    FUNCTION_INVOCATION = "function_invocation"
    EXPRESSION_LIST = "expression_list"
    ALIASED_EXPRESSION = "aliased_expression"
    LITERAL = "literal"
    COMPARISON = "comparison"
    COMPARATOR = "comparator"
    COMPOUND_CONDITION = "compound_condition"
    LOGICAL_OPERATOR = "logical_operator"
    NOT_CONDITION = "not_condition"
    IS_NULL = "is_null"


# kind -> the one class allowed to declare it
KIND_REGISTRY: dict[NodeKind, Type[Visitable]] = {}


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class Visitable(BaseModel):
    """Abstract base class for every node of the Cypher AST.

    Subclasses that represent a concrete grammar production declare a
    ``kind``. Intermediate bases (``Expression``, ``Condition``) leave it
    unset and are never dispatched on directly.

    Attributes:
        kind: Variant tag used by visitors for dispatch.
        typed_subtree: Whether the children form a separated list.
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[Optional[NodeKind]] = None
    typed_subtree: ClassVar[bool] = False

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        kind: Optional[NodeKind] = cls.__dict__.get("kind")
        if kind is None:
            return
        registered: Optional[Type[Visitable]] = KIND_REGISTRY.get(kind)
        if registered is not None and _qualified_name(
            registered
        ) != _qualified_name(cls):
            raise AmbiguousDispatchError(
                f"{cls.__qualname__} declares kind {kind.value!r}, "
                f"which is already declared by {registered.__qualname__}"
            )
        KIND_REGISTRY[kind] = cls
        LOGGER.debug(msg=f"Registered {cls.__qualname__} as {kind.value}")

    def children(self) -> tuple[Visitable, ...]:
        """Return the child nodes in traversal order.

        Leaves return an empty tuple.
        """
        return ()

    @property
    def is_typed_subtree(self) -> bool:
        return self.typed_subtree

    def accept(self, visitor: Visitor, context: Any = None) -> Any:
        """Let ``visitor`` walk the subtree rooted at this node.

        Args:
            visitor: The visitor to run.
            context: Accumulator threaded through the walk. The visitor's
                own context is used when omitted.

        Returns:
            The context after the walk.
        """
        return visitor.visit(self, context)

    def walk(self) -> Generator[Visitable, None, None]:
        """Perform a depth-first, pre-order traversal of the tree.

        Yields:
            This node, then every descendant.
        """
        yield self
        for child in self.children():
            yield from child.walk()

    def find_all(self, node_type: Type[VisitableType]) -> list[VisitableType]:
        """Find every node of the given class in this subtree."""
        return [node for node in self.walk() if isinstance(node, node_type)]

    def find_first(
        self, node_type: Type[VisitableType]
    ) -> Optional[VisitableType]:
        """Find the first node of the given class in this subtree.

        Returns:
            The first match in pre-order, or None.
        """
        for node in self.walk():
            if isinstance(node, node_type):
                return node
        return None

    def _tree_label(self) -> str:
        attributes: list[str] = []
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            if isinstance(value, Visitable) or value is None:
                continue
            if isinstance(value, tuple) and any(
                isinstance(item, Visitable) for item in value
            ):
                continue
            if isinstance(value, Enum):
                attributes.append(f"{field_name}={value.name}")
            else:
                attributes.append(f"{field_name}={value!r}")
        label: str = type(self).__name__
        if attributes:
            label += f" ({', '.join(attributes)})"
        return label

    def tree(self) -> Tree:
        """Generate a Rich Tree representation of this node and its children."""
        t: Tree = Tree(Text(self._tree_label()))
        for child in self.children():
            t.children.append(child.tree())
        return t

    def pretty(self) -> str:
        """Render :meth:`tree` to plain text."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=120, color_system=None)
        console.print(self.tree())
        return buffer.getvalue()

    def print_tree(self) -> None:
        """Print the tree to the console using Rich formatting."""
        rprint(self.tree())  # pragma: no cover


class TypedSubtree(Visitable):
    """A node whose children all play the same role.

    Renderers put a separator between the elements of a typed subtree.
    Subclasses narrow the element type.
    """

    typed_subtree: ClassVar[bool] = True

    elements: tuple[Visitable, ...] = ()

    def children(self) -> tuple[Visitable, ...]:
        return tuple(self.elements)
