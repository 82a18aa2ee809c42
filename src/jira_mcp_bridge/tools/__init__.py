"""Tool catalog exposed over MCP."""

from __future__ import annotations

from fastmcp import FastMCP

from jira_mcp_bridge.tools.issues import get_assigned_issues, get_issue, get_issues_by_type
from jira_mcp_bridge.tools.projects import get_issue_types, get_projects
from jira_mcp_bridge.tools.search import search_issues

TOOLS = (
    get_issue,
    search_issues,
    get_assigned_issues,
    get_issues_by_type,
    get_projects,
    get_issue_types,
)


def register_tools(server: FastMCP) -> None:
    """Register every tool in TOOLS on ``server`` under its function name."""
    for fn in TOOLS:
        server.tool(name=fn.__name__)(fn)


__all__ = [
    "TOOLS",
    "register_tools",
    "get_issue",
    "search_issues",
    "get_assigned_issues",
    "get_issues_by_type",
    "get_projects",
    "get_issue_types",
]
