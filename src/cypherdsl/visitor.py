"""Tree-walking base for visitors over the Cypher AST.

The walk is the same for every visitor::

    pre_enter(node)
    enter(node)
    ... each child, recursively ...
    leave(node)
    post_leave(node)

``pre_enter`` and ``post_leave`` run for every node and are where
structural bookkeeping lives. ``enter`` and ``leave`` produce the
per-node behaviour; concrete visitors implement them with a ``match``
on ``node.kind`` and fall through to a no-op for kinds they do not
care about.
"""

from __future__ import annotations

from typing import Any

from cypherdsl.visitable import Visitable


class Visitor:
    """Base class for visitors.

    A visitor owns a default context created by :meth:`new_context`.
    Passing an explicit context to :meth:`visit` walks a subtree with
    separate state.
    """

    def __init__(self) -> None:
        self.context: Any = self.new_context()

    def new_context(self) -> Any:
        """Create the accumulator threaded through a walk."""
        return None

    def visit(self, node: Visitable, context: Any = None) -> Any:
        """Walk ``node`` and its descendants.

        Args:
            node: Root of the subtree to walk.
            context: Accumulator to use instead of the visitor's own.

        Returns:
            The context used for the walk.
        """
        if context is None:
            context = self.context
        self.pre_enter(node, context)
        self.enter(node, context)
        for child in node.children():
            self.visit(child, context)
        self.leave(node, context)
        self.post_leave(node, context)
        return context

    def pre_enter(self, node: Visitable, context: Any) -> None:
        """Called before :meth:`enter` for every node."""

    def enter(self, node: Visitable, context: Any) -> None:
        """Called before the children of ``node`` are visited."""

    def leave(self, node: Visitable, context: Any) -> None:
        """Called after the children of ``node`` are visited."""

    def post_leave(self, node: Visitable, context: Any) -> None:
        """Called after :meth:`leave` for every node."""
