"""Domain-level exceptions.

All failures of the fulfillment core are expressed as subclasses of
DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.  Every one of them means the attempt had no
net effect on stock or orders, except ``AmbiguousCommit`` whose outcome
is unknown by definition.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidInput(DomainException):
    """A request was malformed; rejected before any transaction opened."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnknownWarehouse(EntityNotFoundError):
    pass


class UnknownProduct(EntityNotFoundError):
    pass


class UnknownOrder(EntityNotFoundError):
    pass


class NoSuchEntry(EntityNotFoundError):
    """No stock entry exists for a (warehouse, product) pair."""


class InsufficientStock(DomainException):
    """A reservation could not be satisfied from the available quantity."""

    def __init__(self, product_id: int, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product #{product_id} "
            f"(need {requested}, have {available} available)"
        )


class InvalidStateTransition(DomainException):
    """An order status change is not allowed from its current status."""


class NotCancellable(InvalidStateTransition):
    """Only PLACED orders can be cancelled."""


class TransactionConflict(DomainException):
    """A concurrent mutation forced the storage layer to abort.

    Nothing was committed, so the whole operation may be retried.
    """


class AmbiguousCommit(DomainException):
    """The commit failed in a way that leaves its outcome unknown.

    Must not be retried automatically; needs manual reconciliation.
    """


class ConstraintViolation(InvalidInput):
    """The database refused a write that breaks a uniqueness or check rule."""


class StorageError(DomainException):
    """The database rejected the operation; nothing was committed."""
