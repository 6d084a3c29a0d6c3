"""Date range parsing for interval runs."""

from __future__ import annotations

from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

from ..core.exceptions import InvalidRangeError, ValidationError

DEFAULT_TZ = ZoneInfo("America/Chicago")


def parse_datetime(text: str, tz: tzinfo = DEFAULT_TZ) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM:SS`` wall time in ``tz`` into an aware datetime.

    An ISO ``T`` separator is accepted. A string that already carries an
    offset keeps it.

    Raises:
        ValidationError: If the text is not a valid datetime
    """
    try:
        parsed = datetime.fromisoformat(text.strip().replace(" ", "T", 1))
    except (AttributeError, ValueError) as e:
        raise ValidationError(
            f"Invalid date format. Expected format: YYYY-MM-DD HH:mm:ss. Error: {e}"
        ) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def validate_date_range(
    start_text: str, end_text: str, tz: tzinfo = DEFAULT_TZ
) -> tuple[datetime, datetime]:
    """Parse both bounds and check start < end.

    Raises:
        ValidationError: If either bound is malformed
        InvalidRangeError: If start is not before end
    """
    start = parse_datetime(start_text, tz)
    end = parse_datetime(end_text, tz)
    if start >= end:
        raise InvalidRangeError("START_DATE must be before END_DATE")
    return start, end
