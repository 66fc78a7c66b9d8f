"""Loading, translating and extending configuration files."""

from __future__ import annotations

import dataclasses
import logging
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .allowlist import Allowlist, MatchCondition
from .rule import ConfigError, Rule

logger = logging.getLogger(__name__)

MAX_EXTEND_DEPTH = 2


@dataclass
class Extend:
    """How a configuration is extended by another one."""

    path: str = ""
    url: str = ""
    use_default: bool = False
    disabled_rules: list[str] = field(default_factory=list)


@dataclass
class Config:
    """A set of rules with a global allowlist."""

    title: str = ""
    extend: Extend = field(default_factory=Extend)
    path: str = ""
    description: str = ""
    rules: dict[str, Rule] = field(default_factory=dict)
    allowlist: Allowlist = field(default_factory=Allowlist)
    keywords: set[str] = field(default_factory=set)
    # Keeps report output in a stable order.
    ordered_rules: list[str] = field(default_factory=list)

    def get_ordered_rules(self) -> list[Rule]:
        """Return the rules in their recorded order."""
        return [self.rules[rule_id] for rule_id in self.ordered_rules if rule_id in self.rules]

    def extend(self, other: Config) -> None:
        """Merge the rules and global allowlist of other into this config."""
        config_name = self.extend.path or "default"
        disabled = set(self.extend.disabled_rules)
        for rule_id in self.extend.disabled_rules:
            if rule_id not in other.rules:
                logger.warning(
                    "Disabled rule %r doesn't exist in extended config %s.",
                    rule_id,
                    config_name,
                )

        for rule_id, base_rule in other.rules.items():
            if rule_id in disabled:
                logger.debug("Ignoring rule %r from extended config %s.", rule_id, config_name)
                continue

            current = self.rules.get(rule_id)
            if current is None:
                self.rules[rule_id] = base_rule
                self.keywords.update(base_rule.keywords)
                self.ordered_rules.append(rule_id)
                continue

            merged = dataclasses.replace(
                base_rule,
                description=current.description or base_rule.description,
                entropy=current.entropy or base_rule.entropy,
                secret_group=current.secret_group or base_rule.secret_group,
                regex=current.regex if current.regex is not None else base_rule.regex,
                path=current.path if current.path is not None else base_rule.path,
                tags=base_rule.tags + current.tags,
                keywords=base_rule.keywords + current.keywords,
                allowlists=base_rule.allowlists + current.allowlists,
            )
            self.keywords.update(merged.keywords)
            self.rules[rule_id] = merged

        self.allowlist.commits.extend(other.allowlist.commits)
        self.allowlist.paths.extend(other.allowlist.paths)
        self.allowlist.regexes.extend(other.allowlist.regexes)

        self.ordered_rules.sort()


def _table(value: Any, where: str) -> dict[str, Any]:
    """Return a table with lower-cased keys, since keys match case-insensitively."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"{where} must be a table")
    return {str(key).lower(): item for key, item in value.items()}


def _string_list(value: Any, where: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, list):
        raise ConfigError(f"{where} must be a list of strings")
    if not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{where} must be a list of strings")
    return list(value)


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"invalid regex {pattern!r}: {exc}") from exc


def _compile_all(patterns: list[str]) -> list[re.Pattern[str]]:
    return [_compile(pattern) for pattern in patterns]


def _number(value: Any, kind: type, where: str) -> Any:
    if value is None:
        return kind(0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{where} must be a number")
    return kind(value)


def _rule_allowlist(rule_id: str, raw: dict[str, Any]) -> Allowlist:
    condition_text = str(raw.get("condition", "")).upper()
    if condition_text in ("AND", "&&"):
        condition = MatchCondition.AND
    elif condition_text in ("", "OR", "||"):
        condition = MatchCondition.OR
    else:
        raise ConfigError(
            f"{rule_id}: unknown allowlist condition '{condition_text}' (expected 'and', 'or')"
        )

    target = str(raw.get("regextarget", ""))
    if target == "secret":
        target = ""
    elif target not in ("", "match", "line"):
        raise ConfigError(
            f"{rule_id}: unknown allowlist |regexTarget| '{target}' (expected 'match', 'line')"
        )

    allowlist = Allowlist(
        description=str(raw.get("description", "")),
        match_condition=condition,
        regex_target=target,
        regexes=_compile_all(_string_list(raw.get("regexes"), "allowlist regexes")),
        paths=_compile_all(_string_list(raw.get("paths"), "allowlist paths")),
        commits=_string_list(raw.get("commits"), "allowlist commits"),
        stop_words=_string_list(raw.get("stopwords"), "allowlist stopwords"),
    )
    try:
        allowlist.validate()
    except ConfigError as exc:
        raise ConfigError(f"{rule_id}: {exc}") from exc
    return allowlist


def _translate_rule(raw: Any) -> Rule:
    table = _table(raw, "[[rules]]")
    rule_id = str(table.get("id", ""))
    keywords = [k.lower() for k in _string_list(table.get("keywords"), f"{rule_id}: keywords")]
    regex_source = str(table.get("regex", ""))
    path_source = str(table.get("path", ""))

    rule = Rule(
        rule_id=rule_id,
        description=str(table.get("description", "")),
        regex=_compile(regex_source) if regex_source else None,
        secret_group=_number(table.get("secretgroup"), int, f"{rule_id}: secretGroup"),
        entropy=_number(table.get("entropy"), float, f"{rule_id}: entropy"),
        path=_compile(path_source) if path_source else None,
        keywords=keywords,
        tags=_string_list(table.get("tags"), f"{rule_id}: tags"),
    )

    raw_allowlists = table.get("allowlists") or []
    if not isinstance(raw_allowlists, list):
        raise ConfigError(f"{rule_id}: [[rules.allowlists]] must be a list of tables")
    allowlists = [_table(item, f"{rule_id}: allowlist") for item in raw_allowlists]
    legacy = table.get("allowlist")
    if legacy is not None:
        if allowlists:
            raise ConfigError(
                f"{rule_id}: [rules.allowlist] is deprecated, "
                "it cannot be used alongside [[rules.allowlist]]"
            )
        allowlists.append(_table(legacy, f"{rule_id}: allowlist"))

    rule.allowlists = [_rule_allowlist(rule_id, item) for item in allowlists]
    return rule


def translate(data: Mapping[str, Any], extend_depth: int = 0) -> Config:
    """Build a Config from parsed TOML data, following extensions and validating rules."""
    top = _table(data, "config")

    rules: dict[str, Rule] = {}
    ordered: list[str] = []
    keywords: set[str] = set()
    raw_rules = top.get("rules") or []
    if not isinstance(raw_rules, list):
        raise ConfigError("[[rules]] must be a list of tables")
    for raw_rule in raw_rules:
        rule = _translate_rule(raw_rule)
        keywords.update(rule.keywords)
        ordered.append(rule.rule_id)
        rules[rule.rule_id] = rule

    raw_extend = _table(top.get("extend"), "[extend]")
    extend = Extend(
        path=str(raw_extend.get("path", "")),
        url=str(raw_extend.get("url", "")),
        use_default=bool(raw_extend.get("usedefault", False)),
        disabled_rules=_string_list(raw_extend.get("disabledrules"), "extend.disabledRules"),
    )

    raw_allowlist = _table(top.get("allowlist"), "[allowlist]")
    config = Config(
        title=str(top.get("title", "")),
        description=str(top.get("description", "")),
        extend=extend,
        rules=rules,
        allowlist=Allowlist(
            regex_target=str(raw_allowlist.get("regextarget", "")),
            regexes=_compile_all(_string_list(raw_allowlist.get("regexes"), "allowlist regexes")),
            paths=_compile_all(_string_list(raw_allowlist.get("paths"), "allowlist paths")),
            commits=_string_list(raw_allowlist.get("commits"), "allowlist commits"),
            stop_words=_string_list(raw_allowlist.get("stopwords"), "allowlist stopwords"),
        ),
        keywords=keywords,
        ordered_rules=ordered,
    )

    if extend_depth != MAX_EXTEND_DEPTH:
        if extend.path and extend.use_default:
            raise ConfigError(
                "unable to load config due to extend.path and extend.useDefault being set"
            )
        if extend.use_default:
            raise ConfigError(
                "failed to load extended config: no default configuration is available"
            )
        if extend.path:
            extension = translate(_read_toml(extend.path), extend_depth + 1)
            logger.debug("extending config with %s", extend.path)
            config.extend(extension)

    if extend_depth == 0:
        for rule in config.rules.values():
            rule.validate()

    return config


def _read_toml(path: str | Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"unable to load config {path}: {exc}") from exc


def load_config(path: str | Path) -> Config:
    """Read and translate the TOML configuration file at path."""
    config = translate(_read_toml(path), 0)
    config.path = str(path)
    return config