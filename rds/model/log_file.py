from datetime import datetime
from typing import Any, Mapping, Optional

from rds.tools.timekeeping import from_epoch_ms


class LogFile:
    def __init__(self, *, name: str, last_written: int, size: int = 0) -> None:
        self.name = name
        # epoch milliseconds, as reported by the service
        self.last_written = last_written
        self.size = size

    def __repr__(self) -> str:
        return "<%s name=%r, last_written=%r, size=%r>" % (
            self.__class__.__name__,
            self.name,
            self.last_written,
            self.size,
        )

    @property
    def last_written_date(self) -> datetime:
        return from_epoch_ms(self.last_written)

    @classmethod
    def from_dict(cls, dct: Mapping[str, Any]) -> "LogFile":
        return cls(
            name=dct["LogFileName"],
            last_written=dct.get("LastWritten") or 0,
            size=dct.get("Size") or 0,
        )


class LogPortion:
    def __init__(
        self, *, data: Optional[str], marker: Optional[str], pending: bool
    ) -> None:
        self.data = data
        self.marker = marker
        self.pending = pending

    def __repr__(self) -> str:
        return "<%s data=[%s chars], marker=%r, pending=%r>" % (
            self.__class__.__name__,
            len(self.data or ""),
            self.marker,
            self.pending,
        )

    def iter_lines(self):
        "Yields the non-blank lines of the portion, verbatim"

        if not self.data:
            return

        for line in self.data.split("\n"):
            if not line.strip():
                continue

            yield line

    @classmethod
    def from_dict(cls, dct: Mapping[str, Any]) -> "LogPortion":
        return cls(
            data=dct.get("LogFileData"),
            marker=dct.get("Marker"),
            pending=bool(dct.get("AdditionalDataPending")),
        )
