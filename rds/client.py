import logging
from typing import Any, Callable, List, Optional

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from rds.config import CredentialError
from rds.model.log_file import LogFile, LogPortion
from rds.tools.logs import CtxLogger


class ApiError(Exception):
    def __init__(
        self, *, operation: str, message: str, code: Optional[str] = None
    ) -> None:
        super().__init__(message)

        self.operation = operation
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return "%s(operation=%r, code=%r, message=%r)" % (
            self.__class__.__name__,
            self.operation,
            self.code,
            self.message,
        )

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} ({self.code})"
        return self.message

    @classmethod
    def from_exc(cls, operation: str, exc: Exception) -> "ApiError":
        code = None
        message = str(exc)

        if isinstance(exc, ClientError):
            error = exc.response.get("Error", {})
            code = error.get("Code")
            message = error.get("Message") or message

        return cls(operation=operation, message=message, code=code)


class LookupFailed(ApiError):
    pass


class InstanceNotFound(LookupFailed):
    pass


class ListFailed(ApiError):
    pass


class FetchFailed(ApiError):
    pass


class RdsClient:
    def __init__(self, *, client: Any, instance: str, logger=None) -> None:
        self.client = client
        self.instance = instance
        self.logger = logger or logging.getLogger("client")

    # Logging

    def get_ctx_logger(self, log_file_name: Optional[str] = None) -> CtxLogger:
        if log_file_name is None:
            return CtxLogger(self.logger, self.instance)

        return CtxLogger(self.logger, self.instance, log_file_name)

    def call(self, operation: str, error_cls, func: Callable[..., Any], **kwargs):
        try:
            return func(**kwargs)

        except NoCredentialsError as exc:
            raise CredentialError(str(exc)) from exc

        except (ClientError, BotoCoreError) as exc:
            raise error_cls.from_exc(operation, exc) from exc

    # Operations

    def describe_engine(self) -> str:
        log = self.get_ctx_logger()
        operation = "DescribeDBInstances"

        log.info("Describing db instance")
        try:
            output = self.call(
                operation,
                LookupFailed,
                self.client.describe_db_instances,
                DBInstanceIdentifier=self.instance,
            )
        except LookupFailed as exc:
            if exc.code == "DBInstanceNotFound":
                raise InstanceNotFound(
                    operation=operation, message="DB instance not found", code=exc.code
                ) from exc
            raise

        instances = output.get("DBInstances") or []
        if not instances:
            raise InstanceNotFound(operation=operation, message="DB instance not found")

        engine = instances[0]["Engine"]
        log.info("Instance runs engine %s", engine)
        return engine

    def list_log_files(self, *, since_ms: Optional[int] = None) -> List[LogFile]:
        log = self.get_ctx_logger()
        operation = "DescribeDBLogFiles"

        kwargs: dict = dict(DBInstanceIdentifier=self.instance)
        if since_ms is not None:
            kwargs["FileLastWritten"] = since_ms

        def list_all_pages(**kwargs):
            paginator = self.client.get_paginator("describe_db_log_files")

            items = []
            for page in paginator.paginate(**kwargs):
                items.extend(page.get("DescribeDBLogFiles") or [])
            return items

        log.debug("Listing log files (last written since: %s)", since_ms)
        items = self.call(operation, ListFailed, list_all_pages, **kwargs)

        log_files = [LogFile.from_dict(item) for item in items]
        log_files.sort(key=lambda log_file: log_file.last_written)

        log.debug("Returning %s log files", len(log_files))
        return log_files

    def download_portion(
        self, log_file_name: str, marker: Optional[str] = None
    ) -> LogPortion:
        log = self.get_ctx_logger(log_file_name)
        operation = "DownloadDBLogFilePortion"

        kwargs = dict(DBInstanceIdentifier=self.instance, LogFileName=log_file_name)
        if marker:
            kwargs["Marker"] = marker

        log.debug("Downloading portion from marker %r", marker)
        try:
            output = self.call(
                operation,
                FetchFailed,
                self.client.download_db_log_file_portion,
                **kwargs,
            )
        except CredentialError as exc:
            # only this file is given up on, the round carries on
            raise FetchFailed(operation=operation, message=str(exc)) from exc

        portion = LogPortion.from_dict(output)
        log.debug("Received %r", portion)
        return portion
