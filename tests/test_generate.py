import re

from leakscan.generate import (
    generate_sample_secret,
    generate_sample_secrets,
    generate_semi_generic_regex,
    generate_unique_token_regex,
    merge_regexps,
)
from leakscan.patterns import alpha_numeric


def test_sample_secret_format():
    assert generate_sample_secret("twilio", "secret") == 'twilio_api_token = "secret"'


def test_every_sample_is_detected():
    identifier = "travis"
    secret = "placeholder"
    pattern = generate_semi_generic_regex([identifier], alpha_numeric("11"), True)
    samples = generate_sample_secrets(identifier, secret)
    assert samples
    for sample in samples:
        match = pattern.search(sample)
        assert match is not None, sample
        assert match.group(1) == secret


def test_samples_have_no_placeholders_left():
    samples = generate_sample_secrets("zendesk", "token")
    for sample in samples:
        assert "{i}" not in sample
        assert "{I}" not in sample
        assert "{s}" not in sample
        assert "token" in sample


def test_samples_use_upper_case_identifier():
    samples = generate_sample_secrets("yandex", "token")
    assert any("YANDEX" in sample for sample in samples)
    assert any("yandex" in sample for sample in samples)


def test_replacement_is_single_pass():
    samples = generate_sample_secrets("x", "{i}")
    assert all("{i}" in sample for sample in samples)


def test_identifier_case_insensitive_secret_case_sensitive():
    pattern = generate_semi_generic_regex(["travis"], alpha_numeric("11"), False)
    match = pattern.search('TRAVIS_TOKEN = "placeholder"')
    assert match is not None
    assert match.group(1) == "placeholder"
    assert pattern.search('travis_token = "PLACEHOLDER"') is None


def test_case_insensitive_secret():
    pattern = generate_semi_generic_regex(["travis"], alpha_numeric("11"), True)
    match = pattern.search('travis_token = "PLACEHOLDER"')
    assert match is not None
    assert match.group(1) == "PLACEHOLDER"


def test_multiple_identifiers():
    pattern = generate_semi_generic_regex(["foo", "bar"], alpha_numeric("11"), True)
    for identifier in ("foo", "bar"):
        match = pattern.search(generate_sample_secret(identifier, "placeholder"))
        assert match is not None
        assert match.group(1) == "placeholder"
    assert pattern.search(generate_sample_secret("baz", "placeholder")) is None


def test_unique_token_needs_word_boundary():
    pattern = generate_unique_token_regex("SK[0-9a-f]{4}", False)
    match = pattern.search("key SKabcd ")
    assert match is not None
    assert match.group(1) == "SKabcd"
    assert pattern.search("key xSKabcd ") is None
    assert pattern.search("key skabcd ") is None


def test_unique_token_case_insensitive():
    pattern = generate_unique_token_regex("SK[0-9a-f]{4}", True)
    match = pattern.search("skABCD")
    assert match is not None
    assert match.group(1) == "skABCD"


def test_merge_plain_patterns():
    merged = merge_regexps(re.compile("a"), re.compile("b"))
    assert merged.pattern == "a|b"
    assert merged.fullmatch("a")
    assert merged.fullmatch("b")
    assert merged.fullmatch("c") is None


def test_merge_flag_applies_to_later_alternatives():
    merged = merge_regexps(re.compile("(?i)abc"), re.compile("def"))
    assert merged.fullmatch("ABC")
    assert merged.fullmatch("DEF")


def test_merge_flag_does_not_apply_to_earlier_alternatives():
    merged = merge_regexps(re.compile("abc"), re.compile("(?i)def"))
    assert merged.fullmatch("DEF")
    assert merged.fullmatch("ABC") is None


def test_merge_generated_regexes():
    first = generate_semi_generic_regex(["twitter"], alpha_numeric("11"), True)
    second = generate_unique_token_regex("SK[0-9a-f]{4}", False)
    merged = merge_regexps(first, second)
    assert merged.search(generate_sample_secret("twitter", "placeholder"))
    assert merged.search("key SKabcd ")
    assert merged.search("nothing to see here") is None