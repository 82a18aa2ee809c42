"""Server settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Jira MCP bridge server settings.

    Settings are read from environment variables prefixed with JIRA_MCP_ (plus
    HTTP_PORT) and from a ``.env`` file in the working directory. Jira
    credentials are not settings: they go through
    :mod:`jira_mcp_bridge.env_loader` so they can be re-read at runtime.

    ``env_file`` only moves the credentials file. These settings are still
    read from ``./.env``, so the two can come from different files.
    """

    model_config = SettingsConfigDict(
        env_prefix="JIRA_MCP_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    transport: Literal["stdio", "http"] = "http"
    host: str = "0.0.0.0"
    http_port: int = Field(default=3000, validation_alias="HTTP_PORT")

    log_level: str = "INFO"
    timeout: float = 30.0
    response_logging: bool = True
    response_log_dir: str = "logs"

    # Dotenv file holding JIRA_BASE_URL / JIRA_USERNAME / JIRA_API_TOKEN; ./.env when unset
    env_file: str | None = None
    reload_on_call: bool = False
