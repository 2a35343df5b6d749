import logging
from datetime import datetime
from typing import Optional

from rds.client import FetchFailed, RdsClient
from rds.model.engine import EngineFamily
from rds.model.log_file import LogFile
from rds.tools.terminal import TerminalPrinter
from rdstail.markers import MarkerTable
from rdstail.timestamps import UnparseableTimestamp, parse_log_time


class PortionDownloader:
    def __init__(
        self,
        *,
        client: RdsClient,
        engine: EngineFamily,
        cutoff: Optional[datetime] = None,
        printer: Optional[TerminalPrinter] = None,
        max_portions: int = 1000,
        logger=None,
    ) -> None:
        self.client = client
        self.engine = engine
        self.cutoff = cutoff
        self.printer = printer or TerminalPrinter()
        self.max_portions = max_portions
        self.logger = logger or logging.getLogger("downloader")

    def is_wanted(self, line: str) -> bool:
        if self.cutoff is None:
            return True

        try:
            line_time = parse_log_time(line, self.engine)
        except UnparseableTimestamp:
            # continuation lines and the like are never dropped
            return True

        return line_time > self.cutoff

    def emit_portion(self, text_lines) -> int:
        count = 0

        for line in text_lines:
            if self.is_wanted(line):
                self.printer.write_line(line)
                count += 1

        return count

    def drain(self, log_file: LogFile, markers: MarkerTable) -> int:
        """
        Downloads everything that is pending in the log file, starting from
        the marker we remembered for it, and prints the lines that pass the
        cutoff. Returns the number of lines printed.
        """

        log = self.client.get_ctx_logger(log_file.name)
        emitted = 0

        for _ in range(self.max_portions):
            try:
                portion = self.client.download_portion(
                    log_file.name, markers.get(log_file.name)
                )

            except FetchFailed as exc:
                # give up on this file until the next round, keeping the marker
                log.error("Failed to download log portion: %r", exc)
                self.printer.loudln(f"Failed to download log portion: {exc}")
                break

            emitted += self.emit_portion(portion.iter_lines())
            markers.advance(log_file.name, portion.marker)

            if not portion.pending:
                break

        else:
            log.warning(
                "Still pending after %s portions, resuming next round",
                self.max_portions,
            )

        log.debug("Printed %s lines", emitted)
        return emitted
