"""Read-only Jira tools served over MCP."""

from jira_mcp_bridge.env_loader import Credentials, get_jira_config
from jira_mcp_bridge.jira.client import JiraClient
from jira_mcp_bridge.server import mcp
from jira_mcp_bridge.settings import ServerSettings

__all__ = ["mcp", "Credentials", "JiraClient", "ServerSettings", "get_jira_config"]
