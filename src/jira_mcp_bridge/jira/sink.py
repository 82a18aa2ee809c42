"""Diagnostic mirrors of successful Jira responses."""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger("jira_mcp_bridge")


class ResponseSink(ABC):
    @abstractmethod
    def record(self, endpoint: str, body: Any) -> None:
        """Mirror one successful response. Must not raise."""


class NullResponseSink(ResponseSink):
    """Discards every response."""

    def record(self, endpoint: str, body: Any) -> None:
        return None


class FileResponseSink(ResponseSink):
    """Writes each response to ``<directory>/jira-<endpoint>-<unix millis>.json``.

    Slashes in the endpoint become dashes, so ``/rest/api/2/project`` is written
    as ``jira--rest-api-2-project-1700000000000.json``. Write failures are
    logged and never reach the caller.
    """

    def __init__(self, directory: str | Path = "logs"):
        self.directory = Path(directory)

    def path_for(self, endpoint: str, millis: int | None = None) -> Path:
        if millis is None:
            millis = int(time.time() * 1000)
        return self.directory / f"jira-{endpoint.replace('/', '-')}-{millis}.json"

    def record(self, endpoint: str, body: Any) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self.path_for(endpoint)
            path.write_text(json.dumps(body, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not log response for %s: %s", endpoint, e)
            return
        logger.debug("Response logged to %s", path)
