"""Domain-layer error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .names import NameKind

# ============================================================================
#                           General catalog errors
# ============================================================================


class CatalogError(Exception):
    """Base class for catalog faults that are deterministic (never retried)."""


# ============================================================================
#                           Name validation errors
# ============================================================================


class NameValidationError(CatalogError, ValueError):
    """Raised when a name does not satisfy its character-class rule.

    Attributes:
        name: The offending input, unmodified.
        kind: The rule that was violated.
        allowed: Human-readable description of the allowed characters.
    """

    def __init__(self, name: str, kind: NameKind, allowed: str) -> None:
        super().__init__(f"'{name}' is not a valid {kind.label}. {allowed}")
        self.name = name
        self.kind = kind
        self.allowed = allowed


# ============================================================================
#                              Shard errors
# ============================================================================


class InvalidShardError(CatalogError, ValueError):
    """Raised when a shard's server or database name cannot be stored.

    Attributes:
        field: ``"server"`` or ``"database"``.
        value: The offending value, unmodified.
        reason: What is wrong with it.
    """

    def __init__(self, field: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid shard {field} {value!r}: {reason}.")
        self.field = field
        self.value = value
        self.reason = reason
