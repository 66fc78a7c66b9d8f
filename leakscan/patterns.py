"""Building blocks for secret regular expressions."""

from __future__ import annotations


def numeric(size: str) -> str:
    """Digits, repeated size times (size may be a range such as '8,12')."""
    return f"[0-9]{{{size}}}"


def hexadecimal(size: str) -> str:
    """Lower-case hexadecimal digits."""
    return f"[a-f0-9]{{{size}}}"


def alpha_numeric(size: str) -> str:
    """Lower-case letters and digits."""
    return f"[a-z0-9]{{{size}}}"


def alpha_numeric_extended_short(size: str) -> str:
    """Lower-case letters, digits, underscore and hyphen."""
    return f"[a-z0-9_-]{{{size}}}"


def alpha_numeric_extended(size: str) -> str:
    """Lower-case letters, digits, '=', underscore and hyphen."""
    return rf"[a-z0-9=_\-]{{{size}}}"


def alpha_numeric_extended_long(size: str) -> str:
    """Lower-case letters, digits, '/', '=', underscore, '+' and hyphen."""
    return rf"[a-z0-9\/=_\+\-]{{{size}}}"


def hex8_4_4_4_12() -> str:
    """A lower-case UUID-shaped hexadecimal string."""
    return "[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"