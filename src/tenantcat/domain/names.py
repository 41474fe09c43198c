"""Character-class rules for tenant and venue names.

Names are checked before a tenant database is provisioned or registered so that
they are safe to use in database names, URLs and catalog rows. Matching is ASCII
only and applies to the whole string; nothing is ever trimmed or truncated.
"""

from __future__ import annotations

import re
from enum import Enum

from .errors import NameValidationError

__all__ = [
    "MAX_NAME_LENGTH",
    "NameKind",
    "is_legal_name",
    "is_legal_name_fragment",
    "is_legal_venue_type_name",
    "validate",
    "validate_legal_name",
    "validate_legal_name_fragment",
    "validate_legal_venue_type_name",
]

LEGAL_NAME_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9 \-_]*[^\s]", re.ASCII)
LEGAL_NAME_FRAGMENT_PATTERN = re.compile(r"[A-Za-z0-9 \-_]+", re.ASCII)
LEGAL_VENUE_TYPE_NAME_PATTERN = re.compile(r"[A-Za-z]+", re.ASCII)

NAME_CHARS = "letters, digits, spaces, hyphens ('-') and underscores ('_')"

#: Longest name accepted by any rule; catalog name columns are this wide.
MAX_NAME_LENGTH = 128


class NameKind(Enum):
    """The name rules known to the validator."""

    LEGAL_NAME = "legal-name"
    LEGAL_NAME_FRAGMENT = "fragment"
    LEGAL_VENUE_TYPE_NAME = "venue-type"

    @property
    def label(self) -> str:
        """Short description used in error messages."""
        return _LABELS[self]

    @property
    def allowed(self) -> str:
        """Description of the characters the rule accepts."""
        return _ALLOWED[self]


_LABELS = {
    NameKind.LEGAL_NAME: "name",
    NameKind.LEGAL_NAME_FRAGMENT: "name fragment",
    NameKind.LEGAL_VENUE_TYPE_NAME: "venue type name",
}

_ALLOWED = {
    NameKind.LEGAL_NAME: (
        f"Names may contain {NAME_CHARS}, must start with a letter or digit, "
        "must not end with whitespace and may be at most "
        f"{MAX_NAME_LENGTH} characters long."
    ),
    NameKind.LEGAL_NAME_FRAGMENT: (
        f"Name fragments may contain {NAME_CHARS} "
        f"(at most {MAX_NAME_LENGTH} characters)."
    ),
    NameKind.LEGAL_VENUE_TYPE_NAME: (
        "Venue type names may contain letters (A-Z, a-z) only "
        f"(at most {MAX_NAME_LENGTH} characters)."
    ),
}

_PATTERNS = {
    NameKind.LEGAL_NAME: LEGAL_NAME_PATTERN,
    NameKind.LEGAL_NAME_FRAGMENT: LEGAL_NAME_FRAGMENT_PATTERN,
    NameKind.LEGAL_VENUE_TYPE_NAME: LEGAL_VENUE_TYPE_NAME_PATTERN,
}


def _matches(name: str, kind: NameKind) -> bool:
    # the trailing `[^\s]` of the name rule would otherwise admit any non-ASCII char
    if not isinstance(name, str) or not name.isascii():
        return False
    if len(name) > MAX_NAME_LENGTH:
        return False
    return _PATTERNS[kind].fullmatch(name) is not None


def is_legal_name(name: str) -> bool:
    """Return True if `name` is a legal tenant or venue name."""
    return _matches(name, NameKind.LEGAL_NAME)


def is_legal_name_fragment(fragment: str) -> bool:
    """Return True if `fragment` may appear inside a legal name."""
    return _matches(fragment, NameKind.LEGAL_NAME_FRAGMENT)


def is_legal_venue_type_name(name: str) -> bool:
    """Return True if `name` is a legal venue type name (letters only)."""
    return _matches(name, NameKind.LEGAL_VENUE_TYPE_NAME)


def validate(name: str, kind: NameKind) -> None:
    """Validate `name` against the rule selected by `kind`.

    Args:
        name: The string to check.
        kind: Which rule to apply.

    Raises:
        NameValidationError: If the name does not satisfy the rule.
    """
    if not _matches(name, kind):
        raise NameValidationError(name, kind, kind.allowed)


def validate_legal_name(name: str) -> None:
    """Validate a tenant or venue name. See `validate`."""
    validate(name, NameKind.LEGAL_NAME)


def validate_legal_name_fragment(fragment: str) -> None:
    """Validate a partial name, e.g. a search term. See `validate`."""
    validate(fragment, NameKind.LEGAL_NAME_FRAGMENT)


def validate_legal_venue_type_name(name: str) -> None:
    """Validate a venue type name. See `validate`."""
    validate(name, NameKind.LEGAL_VENUE_TYPE_NAME)
