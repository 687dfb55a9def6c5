"""Short relative-date labels for thread lines."""

from __future__ import annotations

from datetime import datetime, timedelta

RELDATE_WIDTH = 13


def make_reldate(nowish: datetime, timestamp: int) -> str:
    """Format ``timestamp`` relative to ``nowish`` (both local time).

    Same day shows ``Today HH:MM``, the previous day ``Yest HH:MM`` and the
    rest of the past week the weekday. Older dates in the same year drop the
    weekday; anything else shows the year instead of the time.
    """
    moment = datetime.fromtimestamp(timestamp, tz=nowish.tzinfo)
    day_delta = (nowish.date() - moment.date()).days
    clock = moment.strftime("%H:%M")
    if day_delta == 0:
        return f"Today {clock}"
    if day_delta == 1:
        return f"Yest {clock}"
    if 1 < day_delta < 7:
        return f"{moment.strftime('%a')} {clock}"
    if moment.year == nowish.year:
        return f"{moment.strftime('%b')} {moment.day:02d} {clock}"
    return f"{moment.strftime('%b')} {moment.day:02d} {moment.year}"


def local_nowish() -> datetime:
    """Return the current local time truncated to the minute."""
    now = datetime.now().astimezone()
    return now - timedelta(seconds=now.second, microseconds=now.microsecond)
