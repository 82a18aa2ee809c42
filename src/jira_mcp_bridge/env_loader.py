"""Forced re-read of Jira credentials from the environment and a .env file.

Process environment variables are normally captured once at start-up. Every
read through this module first deletes the requested keys and re-parses the
dotenv file, so a token rotated on disk is seen on the next read without a
restart.
"""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, MutableMapping
from pathlib import Path
from typing import TypeVar, Union

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("jira_mcp_bridge")

BASE_URL_KEY = "JIRA_BASE_URL"
USERNAME_KEY = "JIRA_USERNAME"
API_TOKEN_KEY = "JIRA_API_TOKEN"
DEFAULT_KEYS: tuple[str, ...] = (BASE_URL_KEY, USERNAME_KEY, API_TOKEN_KEY)

PathLike = Union[str, os.PathLike]
T = TypeVar("T")

# Serializes delete-and-reparse cycles so no reader observes a half-reloaded environ.
_reload_lock = threading.Lock()


class ConfigurationMissingError(Exception):
    """One or more required Jira credentials are absent after a forced reload."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            "Missing required Jira configuration: "
            f"{', '.join(self.missing)}. Set them in the environment or the .env file."
        )


class Credentials(BaseModel):
    """Base URL, username and API token needed to talk to Jira."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    username: str
    api_token: str = Field(repr=False)


class ConfigSource(ABC):
    """Anything that can produce fresh values for a set of configuration keys."""

    @abstractmethod
    def load(self, keys: Iterable[str]) -> Mapping[str, str]:
        """Return the current value of each key that is set."""


def reload_environment(
    source_path: PathLike | None = None,
    keys: Iterable[str] = DEFAULT_KEYS,
    environ: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """Delete ``keys`` from the environment and repopulate it from a dotenv file.

    Args:
        source_path: Path of the dotenv file. Defaults to ``.env`` in the
            current working directory.
        keys: Variables to drop before re-parsing.
        environ: Mapping to operate on. Defaults to ``os.environ``.

    Returns:
        A snapshot of the environment after the reload.

    A missing or unreadable file and keys that stay unset are logged as
    warnings only. Callers that need the values decide whether absence is fatal.
    """
    env = os.environ if environ is None else environ
    path = Path(source_path) if source_path else Path.cwd() / ".env"
    keys = list(keys)

    with _reload_lock:
        for key in keys:
            env.pop(key, None)
        _load_dotenv_file(path, env)
        missing = [key for key in keys if not env.get(key)]
        snapshot = dict(env)

    if missing:
        logger.warning("Environment variables not set after reload: %s", ", ".join(missing))
    return snapshot


def _load_dotenv_file(path: Path, env: MutableMapping[str, str]) -> None:
    if not path.is_file():
        logger.warning("Environment reload skipped: %s not found", path)
        return
    try:
        values = dotenv_values(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Environment reload skipped: could not read %s: %s", path, e)
        return

    # Existing variables win, same as load_dotenv(override=False).
    for key, value in values.items():
        if value is not None and key not in env:
            env[key] = value


def get_config_value(
    key: str,
    fallback: T | None = None,
    source_path: PathLike | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> str | T | None:
    """Reload just ``key`` and return its value, or ``fallback`` if unset or empty."""
    env = reload_environment(source_path, [key], environ)
    return env.get(key) or fallback


class DotenvConfigSource(ConfigSource):
    """ConfigSource backed by :func:`reload_environment`."""

    def __init__(
        self,
        path: PathLike | None = None,
        environ: MutableMapping[str, str] | None = None,
    ):
        self.path = path
        self._environ = environ

    def load(self, keys: Iterable[str]) -> dict[str, str]:
        keys = list(keys)
        env = reload_environment(self.path, keys, self._environ)
        return {key: env[key] for key in keys if key in env}


def get_jira_config(source: ConfigSource | None = None) -> Credentials:
    """Force a reload of the three Jira credentials and return them.

    Raises:
        ConfigurationMissingError: if any of JIRA_BASE_URL, JIRA_USERNAME or
            JIRA_API_TOKEN is absent or empty after the reload.
    """
    source = source if source is not None else DotenvConfigSource()
    values = source.load(DEFAULT_KEYS)

    missing = [key for key in DEFAULT_KEYS if not values.get(key)]
    if missing:
        raise ConfigurationMissingError(missing)

    return Credentials(
        base_url=values[BASE_URL_KEY],
        username=values[USERNAME_KEY],
        api_token=values[API_TOKEN_KEY],
    )
