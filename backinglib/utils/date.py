from typing import Union
from datetime import datetime, date, timezone
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from pandas import Timestamp

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"

# HEX launch; day numbering starts at 1 on this date.
HEX_LAUNCH_DATE = date(2019, 12, 3)


def to_date(date_like: Union[str, date, datetime, Timestamp]) -> date:
    """
    Truncate a date-like value to its calendar day.
    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    Accepts 'YYYY-MM-DD', 'YYYYMMDD' and full ISO-8601 timestamps.
    """
    if isinstance(date_like, Timestamp):
        date_like = date_like.to_pydatetime()
    if isinstance(date_like, datetime):
        if date_like.tzinfo is not None:
            date_like = date_like.astimezone(timezone.utc)
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        text = date_like.strip()
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        try:
            return to_date(isoparse(text))
        except ValueError:
            raise ValueError(f"Unsupported date string format: {date_like!r}") from None
    raise TypeError(f"Unsupported type for date: {type(date_like)}")


def add_days(date_like: Union[str, date, datetime], days: int) -> date:
    return to_date(date_like) + relativedelta(days=days)


def days_between(start: Union[str, date, datetime], end: Union[str, date, datetime]) -> int:
    return (to_date(end) - to_date(start)).days


def hex_day(date_like: Union[str, date, datetime]) -> int:
    """
    HEX protocol day number of a calendar day (launch day is day 1).
    """
    return days_between(HEX_LAUNCH_DATE, date_like) + 1


def date_from_hex_day(day: int) -> date:
    return add_days(HEX_LAUNCH_DATE, day - 1)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()
