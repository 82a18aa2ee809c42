"""Server lifespan: creates JiraClient on startup, closes on shutdown."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from jira_mcp_bridge.env_loader import DotenvConfigSource
from jira_mcp_bridge.jira.client import JiraClient
from jira_mcp_bridge.jira.sink import FileResponseSink, NullResponseSink, ResponseSink
from jira_mcp_bridge.logging.logger import setup_logger
from jira_mcp_bridge.settings import ServerSettings

_client: JiraClient | None = None
_settings: ServerSettings | None = None


def get_jira_client() -> JiraClient:
    """Return the active JiraClient. Only valid during server lifespan.

    With ``reload_on_call`` enabled the credentials are re-read first, so a
    rotated token is used by the very next tool call.
    """
    if _client is None:
        raise RuntimeError("JiraClient not initialized. Is the server running?")
    if _settings is not None and _settings.reload_on_call:
        _client.reload_config()
    return _client


def build_sink(settings: ServerSettings) -> ResponseSink:
    if not settings.response_logging:
        return NullResponseSink()
    return FileResponseSink(settings.response_log_dir)


def build_client(settings: ServerSettings) -> JiraClient:
    return JiraClient(
        config_source=DotenvConfigSource(settings.env_file),
        sink=build_sink(settings),
        timeout=settings.timeout,
    )


@asynccontextmanager
async def lifespan(server) -> AsyncIterator[None]:  # noqa: ARG001
    """Async context manager that manages the JiraClient lifecycle."""
    global _client, _settings

    settings = ServerSettings()
    logger = setup_logger(level=settings.log_level)
    logger.info("Starting jira-mcp-bridge server (transport=%s)", settings.transport)

    _client = build_client(settings)
    _settings = settings

    try:
        yield
    finally:
        logger.info("Shutting down jira-mcp-bridge server")
        await _client.close()
        _client = None
        _settings = None
