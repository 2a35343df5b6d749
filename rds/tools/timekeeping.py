import re
from datetime import datetime, timedelta, timezone

# Go-style durations: 1h, 5m, 1h30m, 1.5h, 300ms, -2s
rx_duration_part = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

# 2006-01-02 15:04:05, the hour may be a single digit
rx_naive_time = re.compile(r"^\d{4}-\d{2}-\d{2} \d{1,2}:\d{2}:\d{2}$")

# seconds per unit
DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def date_now() -> datetime:
    return datetime.now(timezone.utc)


def to_epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def from_epoch_ms(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def parse_duration(value: str) -> timedelta:
    "Parses a duration like 1h30m. Raises ValueError if it does not parse."

    text = value
    sign = 1

    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta(0)

    if not text:
        raise ValueError("Invalid duration: %r" % value)

    seconds = 0.0
    pos = 0

    while pos < len(text):
        match = rx_duration_part.match(text, pos)
        if not match:
            raise ValueError("Invalid duration: %r" % value)

        number, unit = match.groups()
        seconds += DURATION_UNITS[unit] * float(number)
        pos = match.end()

    return timedelta(seconds=seconds * sign)


def parse_naive_utc(value: str) -> datetime:
    "Parses YYYY-MM-DD HH:MM:SS as UTC. Raises ValueError if it does not parse."

    if not rx_naive_time.match(value):
        raise ValueError("Invalid timestamp: %r" % value)

    dt = datetime.strptime(value, "%Y-%m-%d %H:%M:%S")
    return dt.replace(tzinfo=timezone.utc)
