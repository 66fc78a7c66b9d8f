"""Human-readable sizes and durations for scan summaries."""

from __future__ import annotations

import struct
from datetime import timedelta

BYTE = 1
KILOBYTE = BYTE * 1000
MEGABYTE = KILOBYTE * 1000
GIGABYTE = MEGABYTE * 1000

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND


def _single(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def bytes_convert(size: int) -> str:
    """Format a byte count with a decimal unit, e.g. 1500 as '1.50 KB'."""
    if size < 0:
        raise ValueError(f"byte count cannot be negative: {size}")
    if size == 0:
        return "0"
    for limit, unit in ((GIGABYTE, "GB"), (MEGABYTE, "MB"), (KILOBYTE, "KB")):
        if size >= limit:
            value = _single(_single(float(size)) / limit)
            break
    else:
        unit = "bytes"
        value = _single(float(size))
    text = f"{value:.2f}".removesuffix(".00")
    return f"{text} {unit}"


def _nanoseconds(duration: timedelta | int) -> int:
    if isinstance(duration, timedelta):
        whole_seconds = duration.days * 86400 + duration.seconds
        return whole_seconds * _SECOND + duration.microseconds * _MICROSECOND
    return int(duration)


def _round(value: int, multiple: int) -> int:
    """Round value to a multiple, halfway cases away from zero."""
    if multiple <= 0:
        return value
    remainder = abs(value) % multiple
    if value < 0:
        if remainder + remainder < multiple:
            return value + remainder
        return value - multiple + remainder
    if remainder + remainder < multiple:
        return value - remainder
    return value + multiple - remainder


def _with_fraction(value: int, precision: int) -> str:
    whole, rest = divmod(value, 10**precision)
    digits = f"{rest:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def _duration_text(nanoseconds: int) -> str:
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    magnitude = abs(nanoseconds)
    if magnitude < _SECOND:
        if magnitude < _MICROSECOND:
            text = f"{magnitude}ns"
        elif magnitude < _MILLISECOND:
            text = _with_fraction(magnitude, 3) + "µs"
        else:
            text = _with_fraction(magnitude, 6) + "ms"
        return sign + text

    total_seconds, fraction = divmod(magnitude, _SECOND)
    text = _with_fraction(total_seconds % 60 * _SECOND + fraction, 9) + "s"
    minutes = total_seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


def format_duration(duration: timedelta | int) -> str:
    """Format a duration (timedelta or nanoseconds) to about three significant digits."""
    nanoseconds = _nanoseconds(duration)
    scale = 100 * _SECOND
    while scale > nanoseconds:
        scale //= 10
    return _duration_text(_round(nanoseconds, scale // 100))