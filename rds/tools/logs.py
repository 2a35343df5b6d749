import os
from logging import DEBUG, WARNING, Logger, LoggerAdapter, basicConfig, getLogger
from typing import Optional


def configure_logging(filename: Optional[str] = None) -> None:
    # stdout carries the log lines we tail so without a file we only want
    # warnings and worse on stderr
    level = WARNING

    if filename is not None:
        level = DEBUG

        path = os.path.dirname(filename)
        if path and not os.path.exists(path):
            os.makedirs(path)

    basicConfig(
        level=level,
        format="%(asctime)-15s %(threadName)s %(levelname)s %(name)s %(message)s",
        filename=filename,
    )

    # tell noisy loggers to be quiet
    getLogger("botocore").propagate = False
    getLogger("urllib3.connectionpool").propagate = False


class CtxLogger(LoggerAdapter):
    "Prefixes every message with its labels, eg. [db-1] [error/postgresql.log]"

    def __init__(self, logger: Logger, *labels: str) -> None:
        super().__init__(logger, {"labels": labels})

        self.prefix = "".join(f"[{label}] " for label in labels)

    def process(self, msg, kwargs):
        return f"{self.prefix}{msg}", kwargs
