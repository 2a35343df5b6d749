import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

import humanize
from dateutil.parser import isoparse

from rds.tools.timekeeping import date_now, parse_duration, parse_naive_utc

USAGE = (
    "Invalid format. Use RFC3339 (2006-01-02T15:04:05Z), "
    "timestamp (2006-01-02 15:04:05) or duration (1h, 5m)"
)

logger = logging.getLogger("since")


class InvalidSince(ValueError):
    pass


# Each candidate returns the cutoff, or None if the value is not in its format.
SinceParser = Callable[[str, datetime], Optional[datetime]]


def from_duration(value: str, now: datetime) -> Optional[datetime]:
    try:
        return now - parse_duration(value)
    except ValueError:
        return None


def from_naive_timestamp(value: str, now: datetime) -> Optional[datetime]:
    try:
        return parse_naive_utc(value)
    except ValueError:
        return None


def from_rfc3339(value: str, now: datetime) -> Optional[datetime]:
    # a date-time must carry a time part and an explicit offset
    if "T" not in value.upper():
        return None

    try:
        dt = isoparse(value)
    except ValueError:
        return None

    if dt.tzinfo is None:
        return None

    return dt.astimezone(timezone.utc)


CANDIDATES: List[SinceParser] = [from_duration, from_naive_timestamp, from_rfc3339]


def resolve_since(
    value: Optional[str], now: Optional[datetime] = None
) -> Optional[datetime]:
    """
    Turns the --since argument into an absolute UTC cutoff.

    Accepts a relative duration (1h, 5m), a naive timestamp taken as UTC
    (2006-01-02 15:04:05) or an RFC 3339 date-time with an offset. An empty
    value means there is no cutoff.
    """

    if not value:
        return None

    now = now or date_now()

    for candidate in CANDIDATES:
        cutoff = candidate(value, now)
        if cutoff is not None:
            logger.info(
                "Cutoff %s (%s ago) parsed by %s",
                cutoff.isoformat(),
                humanize.naturaldelta(date_now() - cutoff),
                candidate.__name__,
            )
            return cutoff

    raise InvalidSince(USAGE)
