import re

import pytest

from leakscan.allowlist import Allowlist, any_regex_match
from leakscan.rule import ConfigError


@pytest.mark.parametrize(
    "commits, commit, expected",
    [
        (["commitA"], "commitA", "commitA"),
        (["commitB"], "commitA", None),
        (["commitB"], "", None),
    ],
)
def test_commit_allowed(commits, commit, expected):
    assert Allowlist(commits=commits).commit_allowed(commit) == expected


@pytest.mark.parametrize(
    "secret, expected",
    [
        ("a secret: matchthis, done", True),
        ("a secret", False),
    ],
)
def test_regex_allowed(secret, expected):
    allowlist = Allowlist(regexes=[re.compile("matchthis")])
    assert allowlist.regex_allowed(secret) is expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("a path", True),
        ("a ???", False),
    ],
)
def test_path_allowed(path, expected):
    allowlist = Allowlist(paths=[re.compile("path")])
    assert allowlist.path_allowed(path) is expected


def test_validate_empty_conditions():
    with pytest.raises(ConfigError) as excinfo:
        Allowlist().validate()
    assert str(excinfo.value) == (
        "[[rules.allowlists]] must contain at least one check for: "
        "commits, paths, regexes, or stopwords"
    )


def test_validate_deduplicates_commits_and_stopwords():
    allowlist = Allowlist(
        commits=["commitA", "commitB", "commitA"],
        stop_words=["stopwordA", "stopwordB", "stopwordA"],
    )
    allowlist.validate()
    assert sorted(allowlist.commits) == ["commitA", "commitB"]
    assert sorted(allowlist.stop_words) == ["stopwordA", "stopwordB"]


def test_contains_stop_word_is_case_insensitive():
    allowlist = Allowlist(stop_words=["Example"])
    assert allowlist.contains_stop_word("MY_EXAMPLE_KEY") == "Example"
    assert allowlist.contains_stop_word("nothing here") is None


def test_any_regex_match_ignores_empty_matches_and_none():
    assert any_regex_match("abc", [re.compile("x*")]) is False
    assert any_regex_match("abc", [None, re.compile("b")]) is True
    assert any_regex_match("abc", []) is False