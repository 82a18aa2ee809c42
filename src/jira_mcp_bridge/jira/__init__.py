from jira_mcp_bridge.env_loader import ConfigurationMissingError
from jira_mcp_bridge.jira.client import (
    DEFAULT_SEARCH_FIELDS,
    JiraClient,
    assigned_issues_jql,
    issues_by_type_jql,
)
from jira_mcp_bridge.jira.errors import (
    JiraAuthenticationError,
    JiraError,
    JiraNotFoundError,
    JiraPermissionError,
    JiraTransportError,
    JiraValidationError,
)
from jira_mcp_bridge.jira.models import SearchParams
from jira_mcp_bridge.jira.sink import FileResponseSink, NullResponseSink, ResponseSink

__all__ = [
    "DEFAULT_SEARCH_FIELDS",
    "JiraClient",
    "assigned_issues_jql",
    "issues_by_type_jql",
    "ConfigurationMissingError",
    "JiraAuthenticationError",
    "JiraError",
    "JiraNotFoundError",
    "JiraPermissionError",
    "JiraTransportError",
    "JiraValidationError",
    "SearchParams",
    "FileResponseSink",
    "NullResponseSink",
    "ResponseSink",
]
