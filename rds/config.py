import logging
import math
import os
from typing import Any, Dict, Optional

import boto3
import yaml
from botocore.exceptions import BotoCoreError, NoRegionError, ProfileNotFound


class SettingsError(Exception):
    pass


class CredentialError(Exception):
    pass


class Settings:
    def __init__(
        self,
        *,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        interval: float = 5.0,
        max_portions: int = 1000,
    ) -> None:
        if not math.isfinite(interval) or interval < 0:
            raise SettingsError(
                f"interval must be a finite number of seconds >= 0, got {interval}"
            )

        if max_portions < 1:
            raise SettingsError(
                f"max_portions must be at least 1, got {max_portions}"
            )

        self.region = region
        self.profile = profile
        # seconds to sleep between rounds in follow mode
        self.interval = interval
        # upper bound on portions downloaded per file per round
        self.max_portions = max_portions

    def __repr__(self) -> str:
        return "<%s region=%r, profile=%r, interval=%r, max_portions=%r>" % (
            self.__class__.__name__,
            self.region,
            self.profile,
            self.interval,
            self.max_portions,
        )

    def override(self, **kwargs: Any) -> "Settings":
        "Returns a copy where every argument that is not None replaces ours"

        values: Dict[str, Any] = dict(
            region=self.region,
            profile=self.profile,
            interval=self.interval,
            max_portions=self.max_portions,
        )
        values.update({key: val for key, val in kwargs.items() if val is not None})
        return Settings(**values)


class SettingsLoader:
    def __init__(
        self,
        *,
        config_path="$HOME/.rdstail.yaml",
        config_var="RDSTAIL_CONFIG",
        logger=None,
    ) -> None:
        self.config_path = config_path
        self.config_var = config_var
        self.logger = logger or logging.getLogger("settings-loader")

    def get_candidate_file(self) -> Optional[str]:
        # use config_var if set, the file must then exist
        env_var = os.getenv(self.config_var)
        if env_var and env_var.strip():
            return env_var.strip()

        # fall back on config_path if present
        path = os.path.expandvars(self.config_path)
        if os.path.isfile(path):
            return path

        return None

    def parse_settings(self, filepath: str, dct: Any) -> Settings:
        if dct is None:
            return Settings()

        if not isinstance(dct, dict):
            raise SettingsError(f"Settings file is not a mapping: {filepath}")

        unknown = set(dct) - {"region", "profile", "interval", "max_portions"}
        if unknown:
            self.logger.warning(
                "Ignoring unknown keys in %s: %s", filepath, sorted(unknown)
            )

        try:
            return Settings().override(
                region=dct.get("region"),
                profile=dct.get("profile"),
                interval=(
                    float(dct["interval"]) if dct.get("interval") is not None else None
                ),
                max_portions=(
                    int(dct["max_portions"])
                    if dct.get("max_portions") is not None
                    else None
                ),
            )
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"Invalid value in {filepath}: {exc}") from exc

    def load(self) -> Settings:
        filepath = self.get_candidate_file()
        if filepath is None:
            self.logger.debug("No settings file found, using defaults")
            return Settings()

        try:
            with open(filepath, "rb") as fl:
                dct = yaml.load(fl, Loader=yaml.SafeLoader)
        except OSError as exc:
            raise SettingsError(f"Cannot read settings file {filepath}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise SettingsError(f"Failed to parse {filepath} as yaml: {exc}") from exc

        settings = self.parse_settings(filepath, dct)
        self.logger.info("Loaded settings from %s: %r", filepath, settings)
        return settings


def create_rds_client(settings: Settings, logger=None) -> Any:
    "Builds an rds client from the SDK's ambient credential chain"

    logger = logger or logging.getLogger("config")

    try:
        session = boto3.Session(
            profile_name=settings.profile, region_name=settings.region
        )
        if session.get_credentials() is None:
            raise CredentialError("Unable to locate AWS credentials")

        client = session.client("rds")

    except (ProfileNotFound, NoRegionError) as exc:
        raise CredentialError(str(exc)) from exc

    except BotoCoreError as exc:
        raise CredentialError(f"Unable to load SDK config: {exc}") from exc

    logger.info(
        "Created rds client for region %s (profile: %s)",
        client.meta.region_name,
        settings.profile or "default",
    )
    return client
