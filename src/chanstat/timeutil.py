"""Time helpers for log files and statistics buckets.

Log files carry the date in their name and the clock time on each line; all
times are treated as UTC.
"""

import re
from datetime import date, datetime, time, timezone

from dateutil import parser as dateparser

# 2017-01-01, 20170101, #channel_20170101, channel-2017-01-01
LOG_DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2}|\d{8})$")


def parse_log_date(stem: str) -> date:
    """Extract the date a log file covers from its file name stem.

    Raises:
        ValueError: The stem does not end in a date
    """
    match = LOG_DATE_PATTERN.search(stem)
    if not match:
        raise ValueError(f"No date found in log file name: {stem}")
    return dateparser.isoparse(match.group(1)).date()


def combine(day: date, clock: str) -> datetime:
    """Combine a log file's date with a line's HH:MM:SS into a UTC datetime."""
    return datetime.combine(day, time.fromisoformat(clock), tzinfo=timezone.utc)


def day_key(when: datetime) -> str:
    """2005-05-15"""
    return when.strftime("%Y-%m-%d")


def hour_key(when: datetime) -> str:
    """Hour of day without padding: "0" to "23"."""
    return str(when.hour)


def month_key(when: datetime) -> str:
    """2005-05"""
    return when.strftime("%Y-%m")
