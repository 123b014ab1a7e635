"""Shared domain error messages and error types."""

from uuid import UUID


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidNameError(ValidationError):
    """Display name failed validation."""


class NotFoundError(DomainError):
    """Requested entry does not exist."""


class DecodeError(DomainError):
    """Malformed backup snapshot or persisted blob."""


def entry_not_found(entry_id: UUID) -> str:
    """Return message for missing entry."""
    return f"Entry {entry_id} not found"


def invalid_display_name_length(name: str, min_length: int, max_length: int) -> str:
    """Return message for a display name outside the allowed length."""
    return (
        f"Display name '{name}' must be between {min_length} and "
        f"{max_length} characters"
    )


def unchanged_display_name(name: str) -> str:
    """Return message when the new display name equals the current one."""
    return f"Display name is already '{name}'"


def unsupported_version(kind: str, version: object, expected: int) -> str:
    """Return message for a payload with an unknown schema version."""
    return f"Unsupported {kind} version {version!r} (expected {expected})"


def duplicate_entry_id(entry_id: UUID) -> str:
    """Return message for an entry collection containing an id twice."""
    return f"Entry id {entry_id} appears more than once"
