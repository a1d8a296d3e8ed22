"""
config_loader.py

Load exporter configuration from an optional JSON config file and
environment variables. The loader validates the values it knows and exposes
a merged configuration dictionary via as_dict().

A config file is optional: the exporter is usually configured entirely on
the command line, in which case the defaults below apply and the CLI flags
are layered on top by main().

Classes:
    ConfigLoader

Usage:
    loader = ConfigLoader(logger)
    config = loader.as_dict()
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from sensor_exporter.exceptions import ConfigFileNotFoundError, InvalidConfigValueError

ETC_CONFIG_PATH = Path("/etc/sensor_exporter/config.json")
DEFAULT_CONFIG_FILENAME = "config.json"
CONFIG_PATH_ENV = "SENSOR_EXPORTER_CONFIG"
LISTEN_ADDRESS_ENV = "SENSOR_EXPORTER_LISTEN_ADDRESS"
LOG_LEVEL_ENV = "SENSOR_EXPORTER_LOG_LEVEL"

DEFAULT_LISTEN_ADDRESS = ":9775"
DEFAULT_METRICS_PATH = "/metrics"
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_json_config(path: Path, logger=None) -> Dict[str, Any]:
    """
    Load JSON configuration from the given file path.
    """
    try:
        with open(path, "r") as file:
            data = json.load(file)
    except Exception as e:
        if logger is not None:
            logger.error(f"ConfigLoader: failed reading {path}: {e}")
        raise
    if not isinstance(data, dict):
        raise InvalidConfigValueError(f"Config file {path} must contain a JSON object")
    return data


class ConfigLoader:
    """
    Load and validate configuration from an optional JSON config file and
    environment variables.

    JSON keys:
      - listen_address (str, default ":9775")
      - metrics_path (str starting with "/", default "/metrics")
      - log_level (str, default "INFO")
      - log_dir (str, optional)
      - sensors (list of sensor descriptor strings)

    Environment variables SENSOR_EXPORTER_LISTEN_ADDRESS and
    SENSOR_EXPORTER_LOG_LEVEL take precedence over the file.
    """

    def __init__(self, logger, path: Optional[str] = None):
        """
        Args:
            logger (Logger): Logger instance for diagnostic output.
            path: Explicit config file path. Overrides every other location.
        """
        self.logger = logger

        self.config_path = self._resolve_config_path(path)
        if self.config_path is not None:
            self.config = _load_json_config(self.config_path, self.logger)
        else:
            self.config = {}

        self.listen_address = self._get_listen_address()
        self.metrics_path = self._get_metrics_path()
        self.log_level = self._get_log_level()
        self.log_dir = self._get_log_dir()
        self.sensors = self._get_sensors()

    def as_dict(self) -> Dict[str, Any]:
        """
        Return the merged configuration dictionary.
        """
        merged: Dict[str, Any] = {
            "listen_address": self.listen_address,
            "metrics_path": self.metrics_path,
            "log_level": self.log_level,
            "log_dir": self.log_dir,
            "sensors": list(self.sensors),
        }
        self.logger.info(f"ConfigLoader: keys loaded: {list(merged.keys())}")
        return merged

    def _resolve_config_path(self, path: Optional[str]) -> Optional[Path]:
        if path:
            resolved = Path(path).expanduser().resolve()
            if resolved.is_file():
                self.logger.info(f"ConfigLoader: using config from {resolved}")
                return resolved
            raise ConfigFileNotFoundError(f"Config file does not exist: {resolved}")

        env_path = os.getenv(CONFIG_PATH_ENV)
        if env_path:
            resolved = Path(env_path).expanduser().resolve()
            if resolved.is_file():
                self.logger.info(f"ConfigLoader: using config from {CONFIG_PATH_ENV} env var: {resolved}")
                return resolved
            raise ConfigFileNotFoundError(f"{CONFIG_PATH_ENV} set but file does not exist: {resolved}")

        if ETC_CONFIG_PATH.is_file():
            self.logger.info(f"ConfigLoader: using config from {ETC_CONFIG_PATH}")
            return ETC_CONFIG_PATH

        local_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if local_path.is_file():
            self.logger.warning(
                f"ConfigLoader: using local dev config at {local_path} (NOT /etc)"
            )
            return local_path

        self.logger.debug("ConfigLoader: no config file found, using defaults")
        return None

    def _get_string(self, key: str, default: Optional[str], env_var: Optional[str] = None) -> Optional[str]:
        if env_var and os.getenv(env_var):
            return os.environ[env_var]
        value = self.config.get(key, default)
        if value is not None and not isinstance(value, str):
            msg = f"Invalid {key}: {value!r} (expected a string)"
            self.logger.error(msg)
            raise InvalidConfigValueError(msg)
        return value

    def _get_listen_address(self) -> str:
        value = self._get_string("listen_address", DEFAULT_LISTEN_ADDRESS, LISTEN_ADDRESS_ENV)
        if not value or ":" not in value:
            msg = f"Invalid listen_address: {value!r} (expected [host]:port)"
            self.logger.error(msg)
            raise InvalidConfigValueError(msg)
        return value

    def _get_metrics_path(self) -> str:
        value = self._get_string("metrics_path", DEFAULT_METRICS_PATH)
        if not value or not value.startswith("/"):
            msg = f"Invalid metrics_path: {value!r} (must start with '/')"
            self.logger.error(msg)
            raise InvalidConfigValueError(msg)
        return value

    def _get_log_level(self) -> str:
        value = self._get_string("log_level", DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV)
        level = str(value).upper()
        if level not in VALID_LOG_LEVELS:
            msg = f"Invalid log_level: {value!r} (expected one of {', '.join(VALID_LOG_LEVELS)})"
            self.logger.error(msg)
            raise InvalidConfigValueError(msg)
        return level

    def _get_log_dir(self) -> Optional[str]:
        return self._get_string("log_dir", None) or None

    def _get_sensors(self) -> list[str]:
        value = self.config.get("sensors", [])
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            msg = f"Invalid sensors: {value!r} (expected a list of descriptor strings)"
            self.logger.error(msg)
            raise InvalidConfigValueError(msg)
        return value
