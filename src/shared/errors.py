"""Application errors shared by the catalogue and contact contexts.

Validation failures and missing records use Protean's own
``ValidationError`` and ``ObjectNotFoundError``. The errors below cover the
outcomes Protean has no exception for. Each carries a ``messages`` dict
shaped like ``ValidationError.messages`` so API handlers render them alike.
"""


class ApplicationError(Exception):
    """Base class for errors raised by application services."""

    def __init__(self, messages: dict[str, list[str]]):
        super().__init__(messages)
        self.messages = messages


class ConflictError(ApplicationError):
    """The request collides with an existing record."""


class ForbiddenError(ApplicationError):
    """The caller is known but not allowed to perform the operation."""


class AuthenticationError(ApplicationError):
    """The caller presented credentials that could not be verified."""
