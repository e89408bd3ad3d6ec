"""Ordering-specific exceptions.

Argument failures use Protean's own ``ValidationError``. Every other refusal
raised by the domain is one of the classes below, each carrying a
``messages`` dict keyed by the offending field.
"""


class OrderingError(Exception):
    """Base class for errors raised by the Ordering domain."""

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)


class Unauthenticated(OrderingError):
    """The request carried no credential, or one that did not verify."""


class Forbidden(OrderingError):
    """The caller is authenticated but does not own the target resource."""


class NotFound(OrderingError):
    """A referenced user, product or order does not exist."""


class InvalidState(OrderingError):
    """The aggregate's current state does not allow the operation."""


class Conflict(OrderingError):
    """The requested change collides with existing state (duplicate entry)."""
