"""Issue tools: fetch one issue, or list assigned issues and issues of a type."""

from __future__ import annotations

from typing import Any

from jira_mcp_bridge.guards.errors import tool_errors
from jira_mcp_bridge.lifespan import get_jira_client
from jira_mcp_bridge.utils.timing import timed


@tool_errors
@timed
async def get_issue(issue_key: str) -> dict[str, Any]:
    """Get a Jira issue by its key (e.g. "PROJ-123").

    Args:
        issue_key: The issue key.

    Returns:
        The issue exactly as returned by Jira, including all fields.
    """
    client = get_jira_client()
    return await client.get_issue(issue_key)


@tool_errors
@timed
async def get_assigned_issues(
    project_key: str | None = None,
    max_results: int = 50,
) -> dict[str, Any]:
    """Get issues assigned to the authenticated user, most recently updated first.

    Args:
        project_key: Restrict to one project (e.g. "PROJ"). Optional.
        max_results: Maximum number of issues to return. Defaults to 50.

    Returns:
        Search results with total count and the matching issues, each limited to
        summary, description, status, issue type, priority, assignee and project.
    """
    client = get_jira_client()
    return await client.get_assigned_issues(project_key, max_results)


@tool_errors
@timed
async def get_issues_by_type(
    issue_type: str,
    project_key: str | None = None,
    max_results: int = 50,
) -> dict[str, Any]:
    """Get issues of a given type (e.g. "Bug", "Story"), most recently updated first.

    Args:
        issue_type: Issue type name, as listed by get_issue_types.
        project_key: Restrict to one project (e.g. "PROJ"). Optional.
        max_results: Maximum number of issues to return. Defaults to 50.

    Returns:
        Search results with total count and the matching issues.
    """
    client = get_jira_client()
    return await client.get_issues_by_type(issue_type, project_key, max_results)
