import pytest

from leakscan.platform import Platform, platform_from_string


def test_empty_string_is_unknown():
    assert platform_from_string("") is Platform.UNKNOWN


def test_unknown_keyword():
    assert platform_from_string("unknown") is Platform.UNKNOWN


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("github", Platform.GITHUB),
        ("GitHub", Platform.GITHUB),
        ("GITLAB", Platform.GITLAB),
        ("None", Platform.NONE),
    ],
)
def test_parse_ignores_case(text, expected):
    assert platform_from_string(text) is expected


def test_string_names():
    assert str(platform_from_string("NONE")) == "none"
    assert str(platform_from_string("GitHub")) == "github"
    assert str(platform_from_string("")) == "unknown"


def test_round_trip_for_every_platform():
    for platform in Platform:
        assert platform_from_string(str(platform)) is platform


def test_invalid_platform_raises():
    with pytest.raises(ValueError, match="invalid scm platform value: bitbucket"):
        platform_from_string("bitbucket")