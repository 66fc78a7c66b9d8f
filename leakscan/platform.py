"""Source-code hosting platforms used to build links to findings."""

from __future__ import annotations

import enum


class Platform(enum.Enum):
    """A hosting platform; NONE explicitly disables link generation."""

    UNKNOWN = "unknown"
    NONE = "none"
    GITHUB = "github"
    GITLAB = "gitlab"

    def __str__(self) -> str:
        return self.value


def platform_from_string(text: str) -> Platform:
    """Parse a platform name, ignoring case; an empty name means UNKNOWN."""
    lowered = text.lower()
    if not lowered:
        return Platform.UNKNOWN
    try:
        return Platform(lowered)
    except ValueError:
        raise ValueError(f"invalid scm platform value: {text}") from None