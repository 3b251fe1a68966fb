"""Error taxonomy shared by the domain, the use cases and the persistence layer.

Two families live here:

* ``DomainError`` and subclasses: business-level conditions raised by
  entities and use cases.  The HTTP layer maps them to 4xx responses.
* ``PersistenceError`` and subclasses: storage failures surfaced by the
  unit of work and its transactions.  The original driver exception is
  always chained (``raise ... from exc``) and also kept on ``.cause``.

Invalid arguments (bad paging values, unknown predicate fields, ``None``
where an entity is required) are plain ``ValueError`` and are raised
before any I/O.  Absence on reads is ``None``, never an exception.
"""

from __future__ import annotations

from typing import Any


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class DomainError(Exception):
    """Base class for business-rule failures."""


class ValidationError(DomainError):
    """An entity or request value violates a domain rule."""


class EntityNotFoundError(DomainError):
    """A use case required an entity that does not exist."""

    def __init__(self, entity: str, entity_id: Any) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found.")


class ConflictError(DomainError):
    """The requested write would duplicate an existing natural key."""


class BusinessRuleError(DomainError):
    """The operation is not allowed in the entity's current state."""


# ---------------------------------------------------------------------------
# Persistence errors
# ---------------------------------------------------------------------------


class PersistenceError(Exception):
    """Base class for failures raised by the backing store."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class SaveChangesError(PersistenceError):
    """Flushing staged changes failed; nothing from the batch was persisted."""

    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__("Failed to save changes to the database.", cause)


class TransactionError(PersistenceError):
    """Explicit transaction misuse or failure."""


class CommitError(TransactionError):
    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__("Failed to commit transaction.", cause)


class RollbackError(TransactionError):
    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__("Failed to rollback transaction.", cause)


__all__ = [
    "DomainError",
    "ValidationError",
    "EntityNotFoundError",
    "ConflictError",
    "BusinessRuleError",
    "PersistenceError",
    "SaveChangesError",
    "TransactionError",
    "CommitError",
    "RollbackError",
]
