"""Catalog tools: list projects and issue types."""

from __future__ import annotations

from typing import Any

from jira_mcp_bridge.guards.errors import tool_errors
from jira_mcp_bridge.lifespan import get_jira_client
from jira_mcp_bridge.utils.timing import timed


@tool_errors
@timed
async def get_projects() -> list[dict[str, Any]]:
    """List all Jira projects accessible to the authenticated user.

    Returns:
        List of projects, each with id, key, name, and project type.
    """
    client = get_jira_client()
    return await client.get_projects()


@tool_errors
@timed
async def get_issue_types() -> list[dict[str, Any]]:
    """List all issue types defined on the Jira instance.

    Returns:
        List of issue types, each with id, name, and description.
    """
    client = get_jira_client()
    return await client.get_issue_types()
