from jira_mcp_bridge.guards.errors import tool_errors

__all__ = ["tool_errors"]
