from typing import Dict, Iterator, Optional


class MarkerTable:
    """
    Remembers the last pagination marker received for each log file.

    Lives as long as the process does. A marker is only ever replaced by the
    one returned from a later download, never cleared.
    """

    def __init__(self) -> None:
        self.markers: Dict[str, str] = {}

    def __repr__(self) -> str:
        return "<%s files=%r>" % (self.__class__.__name__, len(self.markers))

    def __len__(self) -> int:
        return len(self.markers)

    def __contains__(self, log_file_name: str) -> bool:
        return log_file_name in self.markers

    def __iter__(self) -> Iterator[str]:
        return iter(self.markers)

    def get(self, log_file_name: str) -> Optional[str]:
        return self.markers.get(log_file_name)

    def advance(self, log_file_name: str, marker: Optional[str]) -> None:
        # a portion without a marker leaves us where we were
        if not marker:
            return

        self.markers[log_file_name] = marker
