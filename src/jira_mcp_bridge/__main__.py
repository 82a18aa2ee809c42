"""Entry point for running the Jira MCP bridge: python -m jira_mcp_bridge"""

import sys

from jira_mcp_bridge.env_loader import ConfigurationMissingError, DotenvConfigSource, get_jira_config
from jira_mcp_bridge.logging.logger import setup_logger
from jira_mcp_bridge.server import mcp
from jira_mcp_bridge.settings import ServerSettings


def main() -> None:
    settings = ServerSettings()
    logger = setup_logger(level=settings.log_level)

    try:
        credentials = get_jira_config(DotenvConfigSource(settings.env_file))
    except ConfigurationMissingError as e:
        logger.error("%s", e)
        print(f"jira-mcp-bridge: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info(
        "Starting Jira MCP bridge: JIRA_BASE_URL=%s, JIRA_USERNAME=%s",
        credentials.base_url,
        credentials.username,
    )

    if settings.transport == "stdio":
        logger.info("Using stdio transport")
        mcp.run(transport="stdio")
    else:
        logger.info("Starting HTTP server on %s:%d", settings.host, settings.http_port)
        mcp.run(transport="http", host=settings.host, port=settings.http_port)


if __name__ == "__main__":
    main()
