"""Async Jira REST API v2 client using httpx."""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any, Literal

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from jira_mcp_bridge.env_loader import ConfigSource, Credentials, DotenvConfigSource, get_jira_config
from jira_mcp_bridge.jira.errors import (
    UNKNOWN_ERROR,
    JiraAuthenticationError,
    JiraError,
    JiraNotFoundError,
    JiraPermissionError,
    JiraTransportError,
    JiraValidationError,
)
from jira_mcp_bridge.jira.models import (
    IssueTypeList,
    JiraIssue,
    JiraSearchResponse,
    ProjectList,
    SearchParams,
)
from jira_mcp_bridge.jira.sink import NullResponseSink, ResponseSink

logger = logging.getLogger("jira_mcp_bridge")

API_PREFIX = "/rest/api/2"

# Projection used by the canned searches (assigned issues, issues by type).
DEFAULT_SEARCH_FIELDS = [
    "summary",
    "description",
    "status",
    "issuetype",
    "priority",
    "assignee",
    "project",
]

_ERROR_MAP: dict[int, type[JiraError]] = {
    400: JiraValidationError,
    401: JiraAuthenticationError,
    403: JiraPermissionError,
    404: JiraNotFoundError,
}


def assigned_issues_jql(project_key: str | None = None) -> str:
    if project_key:
        return f"assignee = currentUser() AND project = {project_key} ORDER BY updated DESC"
    return "assignee = currentUser() ORDER BY updated DESC"


def issues_by_type_jql(issue_type: str, project_key: str | None = None) -> str:
    if project_key:
        return f'issuetype = "{issue_type}" AND project = {project_key} ORDER BY updated DESC'
    return f'issuetype = "{issue_type}" ORDER BY updated DESC'


def _error_message(response: httpx.Response) -> str:
    """First entry of Jira's ``errorMessages`` array, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return UNKNOWN_ERROR
    if isinstance(body, dict):
        messages = body.get("errorMessages")
        if isinstance(messages, list) and messages and isinstance(messages[0], str):
            return messages[0] or UNKNOWN_ERROR
    return UNKNOWN_ERROR


class JiraClient:
    """Async wrapper around the read-only parts of Jira REST API v2.

    Credentials are pulled from ``config_source`` on construction and again on
    every :meth:`reload_config`, never from anywhere else.
    """

    def __init__(
        self,
        config_source: ConfigSource | None = None,
        sink: ResponseSink | None = None,
        timeout: float = 30.0,
    ):
        self._config_source = config_source if config_source is not None else DotenvConfigSource()
        self._sink = sink if sink is not None else NullResponseSink()
        self._apply(get_jira_config(self._config_source))
        self._client = httpx.AsyncClient(timeout=timeout)
        logger.info("Jira API initialized: %s (%s)", self._base_url, self._username)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def username(self) -> str:
        return self._username

    def reload_config(self) -> None:
        """Re-read credentials. On failure the previous ones stay in effect."""
        self._apply(get_jira_config(self._config_source))
        logger.info("Jira API config reloaded: %s (%s)", self._base_url, self._username)

    def _apply(self, credentials: Credentials) -> None:
        self._base_url = credentials.base_url.rstrip("/")
        self._username = credentials.username
        self._password = credentials.api_token

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def _auth_header(self) -> str:
        raw = f"{self._username}:{self._password}".encode("utf-8")
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    async def _request(
        self,
        endpoint: str,
        schema: type[BaseModel] | TypeAdapter,
        method: Literal["GET", "POST"] = "GET",
        body: Any = None,
    ) -> Any:
        url = f"{self._base_url}{endpoint}"
        headers = {
            "Authorization": self._auth_header(),
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        logger.info("Calling %s %s", method, url)

        try:
            response = await self._client.request(
                method,
                url,
                headers=headers,
                json=body if method == "POST" else None,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Request to %s failed: %s", url, e)
            raise JiraTransportError(f"Failed to make request to Jira API: {e}") from e

        if not response.is_success:
            err = _error_message(response)
            logger.error(
                "Jira API %s %s failed (%d): %s", method, endpoint, response.status_code, response.text
            )
            error_cls = _ERROR_MAP.get(response.status_code)
            if error_cls is not None:
                raise error_cls(err)
            raise JiraError(response.status_code, err)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Jira API %s %s returned a non-JSON body", method, endpoint)
            raise JiraTransportError(f"Failed to make request to Jira API: {e}") from e

        self._check_envelope(schema, endpoint, data)
        # File sinks block; keep the write off the event loop.
        await asyncio.to_thread(self._sink.record, endpoint, data)
        return data

    @staticmethod
    def _check_envelope(
        schema: type[BaseModel] | TypeAdapter, endpoint: str, data: Any
    ) -> None:
        try:
            if isinstance(schema, TypeAdapter):
                schema.validate_python(data)
            else:
                schema.model_validate(data)
        except ValidationError as e:
            raise JiraTransportError(
                f"Failed to make request to Jira API: unexpected response from {endpoint} "
                f"({e.error_count()} validation errors)"
            ) from e

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    async def get_issue(self, issue_key: str) -> dict[str, Any]:
        endpoint = f"{API_PREFIX}/issue/{issue_key}"
        return await self._request(endpoint, JiraIssue)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search_issues(self, params: SearchParams) -> dict[str, Any]:
        endpoint = f"{API_PREFIX}/search"
        return await self._request(endpoint, JiraSearchResponse, "POST", params.to_body())

    async def get_assigned_issues(
        self, project_key: str | None = None, max_results: int = 50
    ) -> dict[str, Any]:
        return await self.search_issues(
            SearchParams(
                jql=assigned_issues_jql(project_key),
                max_results=max_results,
                fields=list(DEFAULT_SEARCH_FIELDS),
            )
        )

    async def get_issues_by_type(
        self, issue_type: str, project_key: str | None = None, max_results: int = 50
    ) -> dict[str, Any]:
        return await self.search_issues(
            SearchParams(
                jql=issues_by_type_jql(issue_type, project_key),
                max_results=max_results,
                fields=list(DEFAULT_SEARCH_FIELDS),
            )
        )

    # ------------------------------------------------------------------
    # Projects and issue types
    # ------------------------------------------------------------------

    async def get_projects(self) -> list[dict[str, Any]]:
        endpoint = f"{API_PREFIX}/project"
        return await self._request(endpoint, ProjectList)

    async def get_issue_types(self) -> list[dict[str, Any]]:
        endpoint = f"{API_PREFIX}/issuetype"
        return await self._request(endpoint, IssueTypeList)
