import re
from datetime import datetime, timezone

from dateutil.parser import isoparse

from rds.model.engine import EngineFamily
from rds.tools.timekeeping import parse_naive_utc

# 2024-01-01T00:00:00.123456Z
rx_mysql_time = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")


class UnparseableTimestamp(ValueError):
    pass


def parse_mysql_time(line: str) -> datetime:
    token = line.split(" ")[0]

    if not rx_mysql_time.match(token):
        raise UnparseableTimestamp(f"No mysql timestamp in: {line!r}")

    try:
        return isoparse(token).astimezone(timezone.utc)
    except ValueError as exc:
        raise UnparseableTimestamp(str(exc)) from exc


def parse_postgres_time(line: str) -> datetime:
    # 2024-01-01 00:00:01 UTC:10.0.0.1(5432):user@db:[123]:LOG: ...
    prefix = line.split(" UTC")[0]

    try:
        return parse_naive_utc(prefix)
    except ValueError as exc:
        raise UnparseableTimestamp(str(exc)) from exc


PARSERS = {
    EngineFamily.MYSQL: parse_mysql_time,
    EngineFamily.MARIADB: parse_mysql_time,
    EngineFamily.POSTGRES: parse_postgres_time,
}


def parse_log_time(line: str, engine: EngineFamily) -> datetime:
    """
    Extracts the leading timestamp of a log line, in UTC.

    Raises UnparseableTimestamp when the line does not start with a timestamp
    in the engine's format, or when the engine is not one we know.
    """

    parser = PARSERS.get(engine)
    if parser is None:
        raise UnparseableTimestamp(f"Unsupported engine: {engine.value}")

    return parser(line)
