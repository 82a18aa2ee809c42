"""Search tool: free-form JQL search."""

from __future__ import annotations

from typing import Any

from jira_mcp_bridge.guards.errors import tool_errors
from jira_mcp_bridge.jira.models import SearchParams
from jira_mcp_bridge.lifespan import get_jira_client
from jira_mcp_bridge.utils.timing import timed


@tool_errors
@timed
async def search_issues(
    jql: str,
    max_results: int = 50,
    fields: list[str] | None = None,
) -> dict[str, Any]:
    """Search for Jira issues using JQL (Jira Query Language).

    Args:
        jql: JQL query string (e.g. 'project = PROJ AND status = "To Do"').
        max_results: Maximum number of results. Defaults to 50.
        fields: Issue fields to return (e.g. ["summary", "status"]). Optional;
            Jira's default field set is used when omitted.

    Returns:
        Search results with total count and list of matching issues.
    """
    client = get_jira_client()
    params = SearchParams(jql=jql, max_results=max_results, fields=fields)
    return await client.search_issues(params)
