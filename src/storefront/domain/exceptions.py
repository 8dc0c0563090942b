"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers can catch them uniformly and map each one to a
response category.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An argument or business rule was violated (invalid argument)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidStateError(DomainException):
    """The operation is not allowed in the current state (e.g. empty cart)."""


class ConflictError(DomainException):
    """A uniqueness constraint was violated or a competing operation is running."""


class UnauthenticatedError(DomainException):
    """The caller identity is missing."""
