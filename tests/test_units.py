from datetime import timedelta

import pytest

from leakscan.units import bytes_convert, format_duration


def test_zero_bytes():
    assert bytes_convert(0) == "0"


@pytest.mark.parametrize(
    ("size", "unit"),
    [
        (1, "bytes"),
        (999, "bytes"),
        (1000, "KB"),
        (999_999, "KB"),
        (1_000_000, "MB"),
        (10**9, "GB"),
        (10**12, "GB"),
    ],
)
def test_unit_chosen_by_size(size, unit):
    assert bytes_convert(size).endswith(" " + unit)


def test_whole_values_have_no_decimals():
    assert "." not in bytes_convert(5 * 1000**2)
    assert "." not in bytes_convert(42)


def test_fractional_kilobytes():
    assert bytes_convert(1500) == "1.50 KB"


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        bytes_convert(-1)


def test_zero_duration():
    assert format_duration(timedelta()) == "0s"


def test_minutes_and_seconds():
    assert format_duration(timedelta(seconds=90)) == "1m30s"


def test_timedelta_and_nanoseconds_agree():
    assert format_duration(timedelta(seconds=2)) == format_duration(2 * 10**9)


def test_duration_rounded_to_three_digits():
    precise = format_duration(timedelta(seconds=1, microseconds=234567))
    assert precise == format_duration(1_230_000_000)


def test_milliseconds_rounded():
    assert format_duration(123_456_789) == format_duration(123_000_000)