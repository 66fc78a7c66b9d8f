"""Generators for rule regexes and sample secrets that exercise them."""

from __future__ import annotations

import re
from collections.abc import Iterable

_CASE_INSENSITIVE = "(?i)"

_IDENTIFIER_CASE_INSENSITIVE_PREFIX = r"[\w.-]{0,50}?(?i:"
_IDENTIFIER_CASE_INSENSITIVE_SUFFIX = ")"
_IDENTIFIER_PREFIX = r"[\w.-]{0,50}?(?:"
_IDENTIFIER_SUFFIX = r""")(?:[ \t\w.-]{0,20})[\s'"]{0,3}"""

# Common assignment operators or a function-call argument separator.
_OPERATOR = r"(?:=|>|:{1,3}=|\|\||:|=>|\?=|,)"

_SECRET_PREFIX_UNIQUE = r"\b("
_SECRET_PREFIX = r"""[\x60'"\s=]{0,5}("""
_SECRET_SUFFIX = r""")(?:[\x60'"\s;]|\\[nr]|$)"""

_LEADING_FLAGS = re.compile(r"\(\?([imsx]+)\)")
_FLAG_LETTERS = ((re.IGNORECASE, "i"), (re.MULTILINE, "m"), (re.DOTALL, "s"), (re.VERBOSE, "x"))

_SAMPLES = {
    # INI
    "ini - quoted1": '{i}Token="{s}"',
    "ini - quoted2": '{i}Token = "{s}"',
    "ini - unquoted1": "{i}Token={s}",
    "ini - unquoted2": "{i}Token = {s}",
    # JSON
    "json - string": '{\n    "{i}_token": "{s}"\n}',
    "json - escaped newline in string": r'{"config.ini": "{I}_TOKEN={s}\nBACKUP_ENABLED=true"}',
    # XML
    "xml - element multiline": "<{i}Token>\n    {s}\n</{i}Token>",
    # YAML
    "yaml - singleline - unquoted": "{i}_token: {s}",
    "yaml - singleline - single quote": "{i}_token: '{s}'",
    "yaml - singleline - double quote": '{i}_token: "{s}"',
    # Programming languages
    "C#": 'string {i}Token = "{s}";',
    "go - normal": 'var {i}Token string = "{s}"',
    "go - short": '{i}Token := "{s}"',
    "go - backticks": "{i}Token := `{s}`",
    "java": 'String {i}Token = "{s}";',
    "kotlin - notype": 'var {i}Token = "{s}"',
    "php - string concat": '${i}Token .= "{s}"',
    "python - single quote": "{i}Token = '{s}'",
    "python - double quote": '{i}Token = "{s}"',
    # Miscellaneous
    "misc - comma operator": 'System.setProperty("{I}_TOKEN", "{s}")',
    "logstash": '  "{i}Token" => "{s}"',
    # Makefile
    "make - recursive assignment": '{i}_TOKEN = "{s}"',
    "make - simple assignment": '{i}_TOKEN := "{s}"',
    "make - shell assignment": '{i}_TOKEN ::= "{s}"',
    "make - evaluated shell assignment": '{i}_TOKEN :::= "{s}"',
    "make - conditional assignment": '{i}_TOKEN ?= "{s}"',
}

_PLACEHOLDER = re.compile(r"\{[iIs]\}")


def _identifiers(identifiers: Iterable[str]) -> str:
    return _IDENTIFIER_PREFIX + "|".join(identifiers) + _IDENTIFIER_SUFFIX


def generate_semi_generic_regex(
    identifiers: Iterable[str], secret_regex: str, case_insensitive: bool
) -> re.Pattern[str]:
    """Match a secret assigned to a name containing one of the identifiers.

    Identifiers always match case-insensitively; the secret does only when
    case_insensitive is set. Group 1 holds the secret.
    """
    if case_insensitive:
        head = _CASE_INSENSITIVE + _identifiers(identifiers)
    else:
        head = (
            _IDENTIFIER_CASE_INSENSITIVE_PREFIX
            + _identifiers(identifiers)
            + _IDENTIFIER_CASE_INSENSITIVE_SUFFIX
        )
    return re.compile(head + _OPERATOR + _SECRET_PREFIX + secret_regex + _SECRET_SUFFIX)


def merge_regexps(*regexps: re.Pattern[str] | str) -> re.Pattern[str]:
    """Join regexes as alternatives.

    A flag switched on by one alternative stays on for those after it, as
    flags do within a single group.
    """
    active = ""
    parts = []
    for regex in regexps:
        if isinstance(regex, re.Pattern):
            pattern = regex.pattern
            letters = "".join(letter for bit, letter in _FLAG_LETTERS if regex.flags & bit)
        else:
            pattern = str(regex)
            letters = ""
        leading = _LEADING_FLAGS.match(pattern)
        if leading:
            letters += leading.group(1)
            pattern = pattern[leading.end():]
        active += "".join(dict.fromkeys(c for c in letters if c not in active))
        parts.append(f"(?{active}:{pattern})" if active else pattern)
    return re.compile("|".join(parts))


def generate_unique_token_regex(secret_regex: str, case_insensitive: bool) -> re.Pattern[str]:
    """Match a secret with a distinctive shape on a word boundary; group 1 holds it."""
    prefix = _CASE_INSENSITIVE if case_insensitive else ""
    return re.compile(prefix + _SECRET_PREFIX_UNIQUE + secret_regex + _SECRET_SUFFIX)


def generate_sample_secret(identifier: str, secret: str) -> str:
    """Return a single assignment of secret to an identifier-based name."""
    return f'{identifier}_api_token = "{secret}"'


def generate_sample_secrets(identifier: str, secret: str) -> list[str]:
    """Return samples of secret assigned in many file formats and languages."""
    replacements = {"{i}": identifier, "{I}": identifier.upper(), "{s}": secret}
    return [
        _PLACEHOLDER.sub(lambda match: replacements[match.group(0)], template)
        for template in _SAMPLES.values()
    ]