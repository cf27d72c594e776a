"""Custom exceptions for the cypherdsl package.

This module defines the exception classes raised while defining AST node
types and while assembling statements from them. Rendering itself does
not raise: a well-formed tree always renders.
"""


class CypherDslError(Exception):
    """Base class for all errors raised by cypherdsl.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message):
        """Initialize the exception with an error message.

        Args:
            message: Description of the error that occurred.
        """
        self.message = message
        super().__init__(self.message)


class AmbiguousDispatchError(CypherDslError):
    """Exception raised when two node classes declare the same kind.

    Visitors dispatch on ``node.kind``. If two distinct classes shared a
    kind, a visitor could not tell them apart, so the second definition
    is rejected as soon as the class is created.
    """


class UnsupportedLiteralError(CypherDslError):
    """Exception raised when a Python value has no Cypher literal form."""


class InvalidStatementError(CypherDslError):
    """Exception raised when the construction helpers are asked to build
    a structurally invalid statement or condition.
    """
