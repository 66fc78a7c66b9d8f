"""Detection rules and configuration errors."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .allowlist import Allowlist


class ConfigError(ValueError):
    """Raised when a configuration or one of its rules is invalid."""


@dataclass
class Rule:
    """How to detect one kind of secret."""

    rule_id: str = ""
    description: str = ""
    # Minimum Shannon entropy the secret group must have.
    entropy: float = 0.0
    # Regex group holding the secret; 0 means the whole match.
    secret_group: int = 0
    regex: re.Pattern[str] | None = None
    path: re.Pattern[str] | None = None
    tags: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    allowlists: list[Allowlist] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ConfigError for common misconfigurations."""
        if not self.rule_id.strip():
            if self.regex is not None:
                context = ", regex: " + self.regex.pattern
            elif self.path is not None:
                context = ", path: " + self.path.pattern
            elif self.description:
                context = ", description: " + self.description
            else:
                context = ""
            raise ConfigError("rule |id| is missing or empty" + context)

        if self.regex is None and self.path is None:
            raise ConfigError(
                f"{self.rule_id}: both |regex| and |path| are empty, "
                "this rule will have no effect"
            )

        if self.regex is not None and self.secret_group > self.regex.groups:
            raise ConfigError(
                f"{self.rule_id}: invalid regex secret group {self.secret_group}, "
                f"max regex secret group {self.regex.groups}"
            )