"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
None of them is retried: repeating the same call without new input fails
the same way.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An input value is malformed or out of range."""


class InvalidStateError(DomainException):
    """The product's current status does not allow the operation."""


class CapacityExceededError(DomainException):
    """Slot amount would exceed the product price, or a bid asks for more
    units than a slot has left."""


class EntityNotFoundError(DomainException):
    """A product, slot price tier or user does not exist."""


class ConflictError(DomainException):
    """A uniqueness rule was broken or a concurrent writer got there first."""
