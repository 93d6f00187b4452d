from __future__ import annotations

import re
from datetime import date, datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]

_LOCAL_DATE = re.compile(r"([0-9]{1,2})-([0-9]{1,2})-([0-9]{4})")


def to_fhir_date(local_date: Optional[str]) -> Optional[str]:
    """Convert a ``DD-MM-YYYY`` date into a FHIR ``date`` (``YYYY-MM-DD``).

    Day and month may be given without zero padding. Returns None for any
    input that is not a real calendar day written as day-month-year with a
    four digit year; the caller leaves the field out in that case.
    """

    if not local_date:
        return None
    match = _LOCAL_DATE.fullmatch(str(local_date).strip())
    if match is None:
        return None
    dd, mm, yyyy = (int(part) for part in match.groups())
    try:
        return date(yyyy, mm, dd).isoformat()
    except ValueError:
        return None


def format_instant(moment: datetime) -> str:
    """Render an instant as ``YYYY-MM-DDTHH:MM:SS+HH:MM``.

    Naive datetimes are interpreted in the host's local zone.
    """

    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.isoformat(timespec="seconds")


def make_clock(tz_name: Optional[str] = None) -> Clock:
    """Return a clock reading the current time in ``tz_name`` (or local time)."""

    if tz_name:
        zone = ZoneInfo(tz_name)
        return lambda: datetime.now(zone)
    return lambda: datetime.now().astimezone()


def now_with_offset(tz_name: Optional[str] = None) -> str:
    return format_instant(make_clock(tz_name)())
