"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class SnapshotImportError(DomainError):
    """Backup snapshot is malformed and was not applied."""


class StorageUnavailable(DomainError):
    """Persistent store could not be read or written."""


class DecodeError(DomainError):
    """Stored document does not conform to the expected schema."""


def entry_not_found(entry_id: str) -> str:
    """Return message for missing entry."""
    return f"Entry '{entry_id}' not found"


def missing_field(field: str) -> str:
    """Return message for a required field left empty."""
    return f"{field} is required"


def not_positive(field: str, value) -> str:
    """Return message for a numeric field that must be positive."""
    return f"{field} must be a positive number, got '{value}'"


def snapshot_missing_keys(keys: list[str]) -> str:
    """Return message for a snapshot lacking required collections."""
    return f"Backup is missing required section{'s' if len(keys) != 1 else ''}: {', '.join(keys)}"
