import argparse
import fnmatch
import logging
import time
from datetime import datetime, timedelta
from typing import Any, List, Optional

import humanize

from rds.client import ApiError, RdsClient
from rds.config import (
    CredentialError,
    Settings,
    SettingsError,
    SettingsLoader,
    create_rds_client,
)
from rds.model.engine import EngineFamily
from rds.model.log_file import LogFile
from rds.tools.logs import configure_logging
from rds.tools.terminal import TerminalPrinter
from rds.tools.timekeeping import to_epoch_ms
from rdstail.downloader import PortionDownloader
from rdstail.markers import MarkerTable
from rdstail.since import InvalidSince, resolve_since


class FatalError(Exception):
    pass


class Program:
    def __init__(
        self,
        args: argparse.Namespace,
        api_client: Optional[Any] = None,
        settings: Optional[Settings] = None,
        printer: Optional[TerminalPrinter] = None,
    ) -> None:
        self.args = args
        self.logger = logging.getLogger("program")
        self.printer = printer or TerminalPrinter()

        # api_client is a boto3 rds client, built from the environment when
        # not given
        self.api_client = api_client
        self.settings = settings

        self.cutoff: Optional[datetime] = None
        self.client: Optional[RdsClient] = None
        self.engine = EngineFamily.UNSUPPORTED
        self.downloader: Optional[PortionDownloader] = None

        # survives across rounds, lost when the process exits
        self.markers = MarkerTable()

    def load_settings(self) -> Settings:
        settings = self.settings
        if settings is None:
            settings = SettingsLoader().load()

        return settings.override(
            region=self.args.region,
            profile=self.args.profile,
            interval=self.args.interval,
        )

    def detect_engine(self) -> EngineFamily:
        assert self.client is not None  # help mypy

        try:
            engine = self.client.describe_engine()
        except ApiError as exc:
            raise FatalError(f"Failed to detect engine: {exc}") from exc

        family = EngineFamily.from_engine(engine)
        if family is EngineFamily.UNSUPPORTED:
            self.logger.warning(
                "Cannot parse timestamps of %s logs, all lines will be shown", engine
            )

        return family

    def list_log_files(self) -> List[LogFile]:
        assert self.client is not None  # help mypy

        since_ms = to_epoch_ms(self.cutoff) if self.cutoff is not None else None

        try:
            log_files = self.client.list_log_files(since_ms=since_ms)
        except ApiError as exc:
            raise FatalError(f"Failed to describe log files: {exc}") from exc

        pattern = getattr(self.args, "log_file", None)
        if pattern:
            log_files = [lf for lf in log_files if fnmatch.fnmatch(lf.name, pattern)]

        return log_files

    def initialize(self) -> None:
        configure_logging(filename=getattr(self.args, "debug_log", None))

        if not self.args.instance:
            raise FatalError("--instance is required")

        try:
            self.settings = self.load_settings()
            self.cutoff = resolve_since(self.args.since)

            if self.api_client is None:
                self.api_client = create_rds_client(self.settings)

        except InvalidSince as exc:
            raise FatalError(str(exc)) from exc

        except SettingsError as exc:
            raise FatalError(f"Invalid settings: {exc}") from exc

        except CredentialError as exc:
            raise FatalError(f"Unable to load SDK config: {exc}") from exc

        self.client = RdsClient(client=self.api_client, instance=self.args.instance)

        try:
            self.engine = self.detect_engine()
        except CredentialError as exc:
            raise FatalError(f"Unable to load SDK config: {exc}") from exc

        self.downloader = PortionDownloader(
            client=self.client,
            engine=self.engine,
            cutoff=self.cutoff,
            printer=self.printer,
            max_portions=self.settings.max_portions,
        )

    def run_round(self) -> int:
        assert self.downloader is not None  # help mypy

        start_s = time.time()
        emitted = 0

        log_files = self.list_log_files()
        for log_file in log_files:
            emitted += self.downloader.drain(log_file, self.markers)

        took = humanize.precisedelta(timedelta(seconds=time.time() - start_s))
        self.logger.debug(
            "Round over %s log files printed %s lines in %s",
            len(log_files),
            emitted,
            took,
        )
        return emitted

    def run_loop(self) -> None:
        assert self.settings is not None  # help mypy

        while True:
            try:
                self.run_round()
            except CredentialError as exc:
                raise FatalError(f"Unable to load SDK config: {exc}") from exc

            if not self.args.follow:
                break

            time.sleep(self.settings.interval)

    def run(self) -> int:
        try:
            self.initialize()
            self.run_loop()

        except FatalError as exc:
            self.logger.info("Exiting: %s", exc)
            self.printer.loudln(str(exc))
            return 1

        return 0
