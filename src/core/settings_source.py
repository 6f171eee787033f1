"""Key-value sources for store addressing parameters.

This module adapts the process environment, a YAML settings file,
and plain mappings to the read-only key-value source protocol.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import DEFAULT_SETTINGS_PATH, ENV_PREFIX, SETTINGS_KEYS
from core.errors import ConfigurationError


class MappingSource:
    """In-memory key-value source."""

    def __init__(self, values: Mapping[str, str | None]) -> None:
        self._values = dict(values)

    def get(self, key: str) -> str | None:
        return self._values.get(key)


class EnvironmentSource:
    """Key-value source backed by prefixed environment variables.

    Key ``owner`` maps to ``CONTENTSTORE_OWNER`` with the default prefix.
    """

    def __init__(self, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None) -> None:
        self._prefix = prefix
        self._environ = environ

    def get(self, key: str) -> str | None:
        environ = self._environ if self._environ is not None else os.environ
        return environ.get(f"{self._prefix}{key.upper()}")


class SettingsFileSource:
    """Key-value source backed by a persistent YAML settings file."""

    def __init__(self, path: str | Path = DEFAULT_SETTINGS_PATH) -> None:
        self.path = Path(path).expanduser()

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        if value is None:
            return None
        return str(value)

    def save(self, values: Mapping[str, str | None]) -> None:
        """Merge values into the settings file.

        Keys outside the known settings keys are rejected. A value of
        None removes the key.

        Args:
            values: Settings to store.

        Raises:
            ConfigurationError: If a key is unknown or the file cannot be written.
        """
        unknown = sorted(set(values) - set(SETTINGS_KEYS))
        if unknown:
            raise ConfigurationError(
                f"Unknown settings keys: {', '.join(unknown)}. "
                f"Supported keys are {', '.join(SETTINGS_KEYS)}."
            )
        settings = self._load()
        for key, value in values.items():
            if value is None:
                settings.pop(key, None)
            else:
                settings[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(settings, sort_keys=True, default_flow_style=False),
                encoding="utf-8",
            )
        except OSError as error:
            raise ConfigurationError(
                f"Failed to write settings file at {self.path}: {error}. "
                "Check directory permissions and retry."
            ) from error

    def _load(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            payload = cast(object, yaml.safe_load(self.path.read_text(encoding="utf-8")))
        except OSError as error:
            raise ConfigurationError(
                f"Failed to read settings file at {self.path}: {error}. "
                "Check file permissions and retry."
            ) from error
        except yaml.YAMLError as error:
            raise ConfigurationError(
                f"Failed to parse settings file at {self.path}: {error}. "
                "Fix YAML syntax or run 'contentstore configure' again."
            ) from error
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise ConfigurationError(
                f"Invalid settings file at {self.path}: expected a mapping at top level, "
                f"got {type(payload).__name__}."
            )
        return {str(key): value for key, value in payload.items()}
