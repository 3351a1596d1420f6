"""
Temporal Filtering - Restrict records to the dashboard's date range.

Dates in every dataset are zero-padded ISO strings (YYYY-MM-DD), so range
checks are plain string comparisons once the bounds are normalized.
"""

from datetime import date, datetime
from typing import Optional, Sequence, Tuple, TypeVar, Union

from dateutil import parser, tz

from config import config

DateLike = Union[str, date, datetime]
R = TypeVar('R')


def to_iso_date(value: DateLike) -> str:
    """
    Normalize a date bound to YYYY-MM-DD.

    Timezone-aware datetimes are converted to UTC first, matching how the
    dashboard serializes its range slider bounds.
    """
    if isinstance(value, str):
        value = parser.isoparse(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz.UTC)
        return value.date().isoformat()
    return value.isoformat()


def filter_by_date_range(data: Sequence[R], start: DateLike, end: DateLike) -> list:
    """
    Keep records whose `date` falls within [start, end], inclusive.

    Works for any record with a `date` attribute (DailyArea, MilitaryEvent).
    """
    start_str = to_iso_date(start)
    end_str = to_iso_date(end)
    return [d for d in data if start_str <= d.date <= end_str]


def resolve_date_range(
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> Tuple[str, str]:
    """
    Fill in missing bounds with the dashboard defaults.

    Bounds given in the wrong order are swapped.
    """
    start_str = to_iso_date(start) if start else config.default_start
    end_str = to_iso_date(end) if end else config.default_end
    if start_str > end_str:
        start_str, end_str = end_str, start_str
    return start_str, end_str
