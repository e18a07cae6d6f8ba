"""
App Store date codec.

Apple's verifyReceipt responses encode every ``*_ms`` date as a decimal string
holding milliseconds since the Unix epoch (e.g. ``"1591000000000"``).
"""

import math
import re
from datetime import UTC, datetime, timedelta

from receipt_validation.exceptions import DateFormatError

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Plain base-10 numbers only: float() alone would also accept "nan", "1_000" and padding
_DECIMAL_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def decode_app_store_date(value: object, field: str = "date") -> datetime:
    """
    Decode an App Store millisecond timestamp string.

    Args:
        value: Wire value, expected to be a string such as ``"1591000000000"``
        field: Field name reported when decoding fails

    Returns:
        Timezone-aware UTC datetime

    Raises:
        DateFormatError: If the value is not a string holding a finite number
    """
    if not isinstance(value, str) or not _DECIMAL_NUMBER.fullmatch(value):
        raise DateFormatError(field, value)

    milliseconds = float(value)
    if not math.isfinite(milliseconds):
        raise DateFormatError(field, value)

    # timedelta carries the fractional part down to microseconds
    try:
        return _EPOCH + timedelta(milliseconds=milliseconds)
    except OverflowError:
        raise DateFormatError(field, value) from None


def decode_optional_app_store_date(value: object | None, field: str = "date") -> datetime | None:
    """Decode an optional App Store date. Absent values yield None."""
    if value is None:
        return None
    return decode_app_store_date(value, field)


def encode_app_store_date(value: datetime) -> str:
    """Encode a datetime back into Apple's millisecond string format."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)

    delta = value - _EPOCH
    total_us = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    sign = "-" if total_us < 0 else ""
    whole_ms, remainder_us = divmod(abs(total_us), 1000)

    if remainder_us == 0:
        return f"{sign}{whole_ms}"
    return f"{sign}{whole_ms}.{remainder_us:03d}".rstrip("0")
