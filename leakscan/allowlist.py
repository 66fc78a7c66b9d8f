"""Allowlists that let findings be ignored by commit, path, content or stop word."""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from .rule import ConfigError


class MatchCondition(enum.Enum):
    """Whether any one check of an allowlist suffices, or all of them must match."""

    OR = 0
    AND = 1

    def __str__(self) -> str:
        return self.name


def _regex_matched(text: str, regex: re.Pattern[str] | None) -> bool:
    if regex is None:
        return False
    match = regex.search(text)
    return match is not None and match.group(0) != ""


def any_regex_match(text: str, regexes: Iterable[re.Pattern[str] | None]) -> bool:
    """Return True if any of the regexes finds a non-empty match in text."""
    return any(_regex_matched(text, regex) for regex in regexes)


@dataclass
class Allowlist:
    """Criteria under which a finding is ignored."""

    description: str = ""
    match_condition: MatchCondition = MatchCondition.OR
    commits: list[str] = field(default_factory=list)
    paths: list[re.Pattern[str]] = field(default_factory=list)
    regexes: list[re.Pattern[str]] = field(default_factory=list)
    # "match", "line", or "" (the secret itself).
    regex_target: str = ""
    stop_words: list[str] = field(default_factory=list)

    def commit_allowed(self, commit: str) -> str | None:
        """Return the commit if it is allowlisted, otherwise None."""
        if not commit:
            return None
        return commit if commit in self.commits else None

    def path_allowed(self, path: str) -> bool:
        """Return True if the path matches one of the path regexes."""
        return any_regex_match(path, self.paths)

    def regex_allowed(self, secret: str) -> bool:
        """Return True if the text matches one of the content regexes."""
        return any_regex_match(secret, self.regexes)

    def contains_stop_word(self, text: str) -> str | None:
        """Return the first stop word found in text, ignoring case, or None."""
        lowered = text.lower()
        return next(
            (word for word in self.stop_words if word.lower() in lowered), None
        )

    def validate(self) -> None:
        """Reject empty allowlists and remove duplicate commits and stop words."""
        if not (self.commits or self.paths or self.regexes or self.stop_words):
            raise ConfigError(
                "[[rules.allowlists]] must contain at least one check for: "
                "commits, paths, regexes, or stopwords"
            )
        self.commits = list(dict.fromkeys(self.commits))
        self.stop_words = list(dict.fromkeys(self.stop_words))