"""Built-in detection rules, each checked against generated sample secrets."""

from __future__ import annotations

import random
import re
import string
from collections.abc import Iterable

from .generate import generate_sample_secrets, generate_semi_generic_regex
from .patterns import alpha_numeric, alpha_numeric_extended, hexadecimal
from .rule import ConfigError, Rule

# Upper bound on repetitions for '*', '+' and open-ended '{n,}' when generating.
_UNBOUNDED = 10

_CLASS_ESCAPES = {
    "d": string.digits,
    "w": string.ascii_letters + string.digits + "_",
    "s": " \t",
}

_rng = random.Random()


class _Template:
    """A parsed subset of regex syntax that can produce matching strings.

    Supports literals, escapes, character classes, plain and non-capturing
    groups, and the quantifiers '*', '+', '?', '{n}', '{n,}' and '{n,m}'.
    """

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._pos = 0
        self._items = self._sequence()
        if self._pos != len(pattern):
            raise ValueError(f"unbalanced ')' in {pattern!r}")

    def generate(self, rng: random.Random) -> str:
        return _render(self._items, rng)

    def _peek(self) -> str:
        if self._pos < len(self._pattern):
            return self._pattern[self._pos]
        return ""

    def _take(self) -> str:
        ch = self._peek()
        if not ch:
            raise ValueError(f"unexpected end of pattern {self._pattern!r}")
        self._pos += 1
        return ch

    def _sequence(self) -> list:
        items = []
        while self._peek() not in ("", ")"):
            atom = self._atom()
            low, high = self._quantifier()
            items.append((atom, low, high))
        return items

    def _atom(self):
        ch = self._take()
        if ch == "(":
            if self._pattern.startswith("?:", self._pos):
                self._pos += 2
            elif self._peek() == "?":
                raise ValueError(f"unsupported group syntax in {self._pattern!r}")
            items = self._sequence()
            if self._take() != ")":
                raise ValueError(f"unclosed group in {self._pattern!r}")
            return items
        if ch == "[":
            return self._char_class()
        if ch == "\\":
            return self._escape()
        if ch in "|*+?{}^$.":
            raise ValueError(f"unsupported syntax {ch!r} in {self._pattern!r}")
        return ch

    def _escape(self) -> str:
        ch = self._take()
        if ch in _CLASS_ESCAPES:
            return _CLASS_ESCAPES[ch]
        if ch.isalnum():
            raise ValueError(f"unsupported escape '\\{ch}' in {self._pattern!r}")
        return ch

    def _char_class(self) -> str:
        if self._peek() == "^":
            raise ValueError(f"negated classes are not supported in {self._pattern!r}")
        chars: list[str] = []
        while True:
            ch = self._take()
            if ch == "]":
                break
            if ch == "\\":
                chars.extend(self._escape())
                continue
            following = self._pattern[self._pos + 1 : self._pos + 2]
            if self._peek() == "-" and following not in ("", "]"):
                self._pos += 1
                end = self._take()
                if end == "\\":
                    end = self._escape()
                if len(end) != 1 or ord(end) < ord(ch):
                    raise ValueError(f"invalid class range in {self._pattern!r}")
                chars.extend(chr(code) for code in range(ord(ch), ord(end) + 1))
            else:
                chars.append(ch)
        if not chars:
            raise ValueError(f"empty character class in {self._pattern!r}")
        return "".join(dict.fromkeys(chars))

    def _quantifier(self) -> tuple[int, int]:
        ch = self._peek()
        if ch == "*":
            self._pos += 1
            return 0, _UNBOUNDED
        if ch == "+":
            self._pos += 1
            return 1, _UNBOUNDED
        if ch == "?":
            self._pos += 1
            return 0, 1
        if ch == "{":
            end = self._pattern.find("}", self._pos)
            if end < 0:
                raise ValueError(f"unclosed repetition in {self._pattern!r}")
            body = self._pattern[self._pos + 1 : end]
            match = re.fullmatch(r"(\d+)(?:(,)(\d*))?", body)
            if match is None:
                raise ValueError(f"invalid repetition {{{body}}} in {self._pattern!r}")
            low = int(match[1])
            if not match[2]:
                high = low
            elif match[3]:
                high = int(match[3])
            else:
                high = low + _UNBOUNDED
            if high < low:
                raise ValueError(f"invalid repetition {{{body}}} in {self._pattern!r}")
            self._pos = end + 1
            return low, high
        return 1, 1


def _render(items: list, rng: random.Random) -> str:
    parts = []
    for atom, low, high in items:
        for _ in range(rng.randint(low, high)):
            if isinstance(atom, str):
                parts.append(rng.choice(atom))
            else:
                parts.append(_render(atom, rng))
    return "".join(parts)


def _random_secret(pattern: str) -> str:
    """Return a random string matched by the given pattern."""
    return _Template(pattern).generate(_rng)


def _detects(rule: Rule, text: str) -> bool:
    lowered = text.lower()
    if rule.keywords and not any(keyword in lowered for keyword in rule.keywords):
        return False
    return rule.regex is not None and rule.regex.search(text) is not None


def _validate(
    rule: Rule, true_positives: Iterable[str], false_positives: Iterable[str] = ()
) -> Rule:
    """Normalise the rule's keywords and check it against sample inputs."""
    rule.keywords = list(dict.fromkeys(keyword.lower() for keyword in rule.keywords))
    pattern = rule.regex.pattern if rule.regex is not None else ""
    for sample in true_positives:
        if not _detects(rule, sample):
            raise ConfigError(
                f"{rule.rule_id}: failed to validate, true positive {sample!r} "
                f"was not detected by regex {pattern!r}"
            )
    for sample in false_positives:
        if _detects(rule, sample):
            raise ConfigError(
                f"{rule.rule_id}: failed to validate, false positive {sample!r} "
                f"was detected by regex {pattern!r}"
            )
    return rule


def _semi_generic(
    rule_id: str, description: str, identifier: str, secret_regex: str
) -> Rule:
    rule = Rule(
        rule_id=rule_id,
        description=description,
        regex=generate_semi_generic_regex([identifier], secret_regex, True),
        keywords=[identifier],
    )
    samples = generate_sample_secrets(identifier, _random_secret(secret_regex))
    return _validate(rule, samples)


_UUID_LIKE = "[a-z0-9]{8}-([a-z0-9]{4}-){3}[a-z0-9]{12}"


def teams_webhook() -> Rule:
    """Microsoft Teams incoming webhook URLs."""
    rule = Rule(
        rule_id="microsoft-teams-webhook",
        description=(
            "Uncovered a Microsoft Teams Webhook, which could lead to unauthorized "
            "access to team collaboration tools and data leaks."
        ),
        regex=re.compile(
            r"https://[a-z0-9]+\.webhook\.office\.com/webhookb2/"
            + _UUID_LIKE
            + "@"
            + _UUID_LIKE
            + "/IncomingWebhook/[a-z0-9]{32}/"
            + _UUID_LIKE
        ),
        keywords=["webhook.office.com", "webhookb2", "IncomingWebhook"],
    )
    url_tail = _random_secret(
        _UUID_LIKE + "@" + _UUID_LIKE + r"\/IncomingWebhook\/[a-z0-9]{32}\/" + _UUID_LIKE
    )
    samples = ["https://mycompany.webhook.office.com/webhookb2/" + url_tail]
    return _validate(rule, samples)


def travisci_access_token() -> Rule:
    """Travis CI access tokens."""
    return _semi_generic(
        "travisci-access-token",
        "Identified a Travis CI Access Token, potentially compromising continuous "
        "integration services and codebase security.",
        "travis",
        alpha_numeric("22"),
    )


def trello_access_token() -> Rule:
    """Trello access tokens."""
    return _semi_generic(
        "trello-access-token",
        "Trello Access Token",
        "trello",
        "[a-zA-Z-0-9]{32}",
    )


def twilio() -> Rule:
    """Twilio API keys."""
    rule = Rule(
        rule_id="twilio-api-key",
        description=(
            "Found a Twilio API Key, posing a risk to communication services and "
            "sensitive customer interaction data."
        ),
        regex=re.compile("SK[0-9a-fA-F]{32}"),
        entropy=3.0,
        keywords=["SK"],
    )
    samples = generate_sample_secrets("twilio", "SK" + _random_secret(hexadecimal("32")))
    return _validate(rule, samples)


def twitch_api_token() -> Rule:
    """Twitch API tokens."""
    return _semi_generic(
        "twitch-api-token",
        "Discovered a Twitch API token, which could compromise streaming services "
        "and account integrations.",
        "twitch",
        alpha_numeric("30"),
    )


def twitter_api_key() -> Rule:
    """Twitter API keys."""
    return _semi_generic(
        "twitter-api-key",
        "Identified a Twitter API Key, which may compromise Twitter application "
        "integrations and user data security.",
        "twitter",
        alpha_numeric("25"),
    )


def twitter_api_secret() -> Rule:
    """Twitter API secrets."""
    return _semi_generic(
        "twitter-api-secret",
        "Found a Twitter API Secret, risking the security of Twitter app "
        "integrations and sensitive data access.",
        "twitter",
        alpha_numeric("50"),
    )


def twitter_bearer_token() -> Rule:
    """Twitter bearer tokens."""
    return _semi_generic(
        "twitter-bearer-token",
        "Discovered a Twitter Bearer Token, potentially compromising API access "
        "and data retrieval from Twitter.",
        "twitter",
        "A{22}[a-zA-Z0-9%]{80,100}",
    )


def twitter_access_token() -> Rule:
    """Twitter access tokens."""
    return _semi_generic(
        "twitter-access-token",
        "Detected a Twitter Access Token, posing a risk of unauthorized account "
        "operations and social media data exposure.",
        "twitter",
        "[0-9]{15,25}-[a-zA-Z0-9]{20,40}",
    )


def twitter_access_secret() -> Rule:
    """Twitter access secrets."""
    return _semi_generic(
        "twitter-access-secret",
        "Uncovered a Twitter Access Secret, potentially risking unauthorized "
        "Twitter integrations and data breaches.",
        "twitter",
        alpha_numeric("45"),
    )


def typeform() -> Rule:
    """Typeform API tokens."""
    rule = Rule(
        rule_id="typeform-api-token",
        description=(
            "Uncovered a Typeform API token, which could lead to unauthorized survey "
            "management and data collection."
        ),
        regex=generate_semi_generic_regex(["typeform"], r"tfp_[a-z0-9\-_\.=]{59}", True),
        keywords=["tfp_"],
    )
    samples = generate_sample_secrets(
        "typeformAPIToken", "tfp_" + _random_secret(alpha_numeric_extended("59"))
    )
    return _validate(rule, samples)


def yandex_aws_access_token() -> Rule:
    """Yandex Cloud AWS-compatible access tokens."""
    return _semi_generic(
        "yandex-aws-access-token",
        "Uncovered a Yandex AWS Access Token, potentially compromising cloud "
        "resource access and data security on Yandex Cloud.",
        "yandex",
        r"YC[a-zA-Z0-9_\-]{38}",
    )


def yandex_api_key() -> Rule:
    """Yandex API keys."""
    return _semi_generic(
        "yandex-api-key",
        "Discovered a Yandex API Key, which could lead to unauthorized access to "
        "Yandex services and data manipulation.",
        "yandex",
        r"AQVN[A-Za-z0-9_\-]{35,38}",
    )


def yandex_access_token() -> Rule:
    """Yandex access tokens."""
    return _semi_generic(
        "yandex-access-token",
        "Found a Yandex Access Token, posing a risk to Yandex service integrations "
        "and user data privacy.",
        "yandex",
        r"t1\.[A-Z0-9a-z_-]+[=]{0,2}\.[A-Z0-9a-z_-]{86}[=]{0,2}",
    )


def zendesk_secret_key() -> Rule:
    """Zendesk secret keys."""
    return _semi_generic(
        "zendesk-secret-key",
        "Detected a Zendesk Secret Key, risking unauthorized access to customer "
        "support services and sensitive ticketing data.",
        "zendesk",
        alpha_numeric("40"),
    )