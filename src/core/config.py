"""Store addressing configuration for the content store.

This module owns resolution and validation of addressing parameters.
Other modules consume a typed config object instead of raw source reads.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import (
    API_URL_KEY,
    BRANCH_KEY,
    DEFAULT_API_URL,
    DEFAULT_BRANCH,
    OWNER_KEY,
    REPO_KEY,
    REQUIRED_CONFIG_KEYS,
    TOKEN_KEY,
)
from core.errors import ConfigurationError
from core.settings_source import EnvironmentSource
from core.types import KeyValueSource


@dataclass(frozen=True)
class StoreConfig:
    """Addressing parameters for one remote file store.

    Attributes:
        owner: Repository owner login.
        repo: Repository name.
        token: Pre-obtained access token.
        branch: Target branch reference.
        api_url: Base URL of the contents API host.
    """

    owner: str
    repo: str
    token: str
    branch: str = DEFAULT_BRANCH
    api_url: str = DEFAULT_API_URL

    def __repr__(self) -> str:
        return (
            f"StoreConfig(owner={self.owner!r}, repo={self.repo!r}, token='***', "
            f"branch={self.branch!r}, api_url={self.api_url!r})"
        )

    @classmethod
    def from_source(cls, source: KeyValueSource) -> "StoreConfig":
        """Build config from a key-value source.

        Args:
            source: Source providing owner, repo, token and branch values.

        Returns:
            A validated config object.

        Raises:
            ConfigurationError: If owner, repo or token is missing or empty.
        """
        values = {key: _read_value(source, key) for key in REQUIRED_CONFIG_KEYS}
        missing = [key for key in REQUIRED_CONFIG_KEYS if not values[key]]
        if missing:
            raise ConfigurationError(
                f"Store configuration is incomplete: missing {', '.join(missing)}. "
                "Set owner, repo and token before reading or writing files."
            )
        return cls(
            owner=values[OWNER_KEY],
            repo=values[REPO_KEY],
            token=values[TOKEN_KEY],
            branch=_read_value(source, BRANCH_KEY) or DEFAULT_BRANCH,
            api_url=(_read_value(source, API_URL_KEY) or DEFAULT_API_URL).rstrip("/"),
        )


def resolve_store_config(
    explicit_config: StoreConfig | None = None,
    source: KeyValueSource | None = None,
) -> StoreConfig:
    """Resolve addressing parameters for one operation.

    Args:
        explicit_config: Caller-supplied config, used verbatim when given.
        source: Key-value source; defaults to the process environment.

    Returns:
        Config for the current operation.

    Raises:
        ConfigurationError: If the source lacks owner, repo or token.
    """
    if explicit_config is not None:
        return explicit_config
    return StoreConfig.from_source(source if source is not None else EnvironmentSource())


def _read_value(source: KeyValueSource, key: str) -> str:
    raw_value = source.get(key)
    if raw_value is None:
        return ""
    return str(raw_value).strip()
