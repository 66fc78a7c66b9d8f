import pytest

from leakscan import rules
from leakscan.generate import generate_sample_secret, generate_sample_secrets

RULE_IDS = [
    "microsoft-teams-webhook",
    "travisci-access-token",
    "trello-access-token",
    "twilio-api-key",
    "twitch-api-token",
    "twitter-api-key",
    "twitter-api-secret",
    "twitter-bearer-token",
    "twitter-access-token",
    "twitter-access-secret",
    "typeform-api-token",
    "yandex-aws-access-token",
    "yandex-api-key",
    "yandex-access-token",
    "zendesk-secret-key",
]

SEMI_GENERIC_CASES = [
    (rules.travisci_access_token, "travis", "a1" * 11),
    (rules.trello_access_token, "trello", "Ab1-" * 8),
    (rules.twitch_api_token, "twitch", "a1" * 15),
    (rules.twitter_api_key, "twitter", "ab1cd" * 5),
    (rules.twitter_api_secret, "twitter", "ab1cd" * 10),
    (rules.twitter_bearer_token, "twitter", "A" * 22 + "b%9" * 30),
    (rules.twitter_access_token, "twitter", "9" * 18 + "-" + "abC1" * 6),
    (rules.twitter_access_secret, "twitter", "ab1cd" * 9),
    (rules.typeform, "typeformAPIToken", "tfp_" + "a1" * 29 + "b"),
    (rules.yandex_aws_access_token, "yandex", "YC" + "aB1_" * 9 + "x-"),
    (rules.yandex_api_key, "yandex", "AQVN" + "aB1_-" * 7),
    (rules.yandex_access_token, "yandex", "t1.Ab9_-=." + "aB1_" * 21 + "xy=="),
    (rules.zendesk_secret_key, "zendesk", "a1" * 20),
]


def test_factory_returns_rule_with_its_id():
    built = [
        rules.teams_webhook(),
        rules.travisci_access_token(),
        rules.trello_access_token(),
        rules.twilio(),
        rules.twitch_api_token(),
        rules.twitter_api_key(),
        rules.twitter_api_secret(),
        rules.twitter_bearer_token(),
        rules.twitter_access_token(),
        rules.twitter_access_secret(),
        rules.typeform(),
        rules.yandex_aws_access_token(),
        rules.yandex_api_key(),
        rules.yandex_access_token(),
        rules.zendesk_secret_key(),
    ]
    assert [rule.rule_id for rule in built] == RULE_IDS
    for rule in built:
        assert rule.regex.groups >= 0
        assert rule.keywords == [k.lower() for k in rule.keywords]


@pytest.mark.parametrize("factory,identifier,candidate", SEMI_GENERIC_CASES)
def test_semi_generic_rules_detect_all_samples(factory, identifier, candidate):
    rule = factory()
    for sample in generate_sample_secrets(identifier, candidate):
        match = rule.regex.search(sample)
        assert match is not None, sample
        assert match.group(1) == candidate


@pytest.mark.parametrize("factory,identifier,candidate", SEMI_GENERIC_CASES)
def test_semi_generic_rules_keyword_present_in_samples(factory, identifier, candidate):
    rule = factory()
    for sample in generate_sample_secrets(identifier, candidate):
        assert any(keyword in sample.lower() for keyword in rule.keywords)


def test_short_travis_value_not_detected():
    rule = rules.travisci_access_token()
    assert rule.regex.search(generate_sample_secret("travis", "a1" * 10)) is None


def test_semi_generic_requires_identifier():
    rule = rules.zendesk_secret_key()
    assert rule.regex.search(generate_sample_secret("unrelated", "a1" * 20)) is None


def test_twilio_rule():
    rule = rules.twilio()
    assert rule.regex.pattern == "SK[0-9a-fA-F]{32}"
    assert rule.entropy == 3
    assert rule.keywords == ["sk"]
    value = "SK" + "0123456789abcdef" * 2
    for sample in generate_sample_secrets("twilio", value):
        assert rule.regex.search(sample).group(0) == value


def test_twilio_too_short_not_detected():
    rule = rules.twilio()
    assert rule.regex.search("SK" + "a" * 31) is None


def test_teams_keywords_are_lowercased():
    rule = rules.teams_webhook()
    assert rule.keywords == ["webhook.office.com", "webhookb2", "incomingwebhook"]


def test_teams_webhook_matches_url():
    rule = rules.teams_webhook()
    uuid_like = "abcd1234-abcd-abcd-abcd-abcdef123456"
    url = (
        "https://mycompany.webhook.office.com/webhookb2/"
        + uuid_like
        + "@"
        + uuid_like
        + "/IncomingWebhook/"
        + "a1" * 16
        + "/"
        + uuid_like
    )
    assert rule.regex.fullmatch(url).group(0) == url
    assert rule.regex.search(url.replace("abcd1234", "ABCD1234")) is None


def test_typeform_rule_keywords_and_description():
    rule = rules.typeform()
    assert rule.keywords == ["tfp_"]
    assert rule.description.startswith("Uncovered a Typeform API token")


def test_trello_description():
    assert rules.trello_access_token().description == "Trello Access Token"


def test_rule_ids_are_unique():
    ids = [
        rules.teams_webhook().rule_id,
        rules.travisci_access_token().rule_id,
        rules.trello_access_token().rule_id,
        rules.twilio().rule_id,
        rules.twitch_api_token().rule_id,
        rules.twitter_api_key().rule_id,
        rules.twitter_api_secret().rule_id,
        rules.twitter_bearer_token().rule_id,
        rules.twitter_access_token().rule_id,
        rules.twitter_access_secret().rule_id,
        rules.typeform().rule_id,
        rules.yandex_aws_access_token().rule_id,
        rules.yandex_api_key().rule_id,
        rules.yandex_access_token().rule_id,
        rules.zendesk_secret_key().rule_id,
    ]
    assert len(set(ids)) == len(ids)
    assert sorted(ids) == sorted(RULE_IDS)


def test_rules_regenerate_with_same_pattern():
    first = rules.yandex_access_token()
    second = rules.yandex_access_token()
    assert first.regex.pattern == second.regex.pattern
    assert first.keywords == second.keywords == ["yandex"]


def test_rules_have_default_secret_group():
    built = [
        rules.teams_webhook(),
        rules.travisci_access_token(),
        rules.trello_access_token(),
        rules.twilio(),
        rules.twitch_api_token(),
        rules.twitter_api_key(),
        rules.twitter_api_secret(),
        rules.twitter_bearer_token(),
        rules.twitter_access_token(),
        rules.twitter_access_secret(),
        rules.typeform(),
        rules.yandex_aws_access_token(),
        rules.yandex_api_key(),
        rules.yandex_access_token(),
        rules.zendesk_secret_key(),
    ]
    assert len(built) == len(RULE_IDS)
    for rule in built:
        assert rule.secret_group == 0
        assert rule.secret_group <= rule.regex.groups