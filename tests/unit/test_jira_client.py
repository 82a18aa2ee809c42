"""Tests for JiraClient using respx to mock httpx."""

import base64
import json
import threading

import httpx
import pytest
import respx
from httpx import Response

from jira_mcp_bridge.env_loader import ConfigurationMissingError, DotenvConfigSource
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
    JiraTransportError,
    JiraValidationError,
)
from jira_mcp_bridge.jira.models import SearchParams
from jira_mcp_bridge.jira.sink import ResponseSink

BASE_URL = "https://test.atlassian.net"
API_BASE = f"{BASE_URL}/rest/api/2"


class RecordingSink(ResponseSink):
    def __init__(self):
        self.records = []

    def record(self, endpoint, body):
        self.records.append((endpoint, body))


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
async def client(config_source, sink):
    c = JiraClient(config_source=config_source, sink=sink)
    yield c
    await c.close()


def _basic(username, token):
    return "Basic " + base64.b64encode(f"{username}:{token}".encode()).decode()


# ----------------------------------------------------------------------
# JQL construction
# ----------------------------------------------------------------------


def test_assigned_issues_jql():
    assert assigned_issues_jql() == "assignee = currentUser() ORDER BY updated DESC"
    assert (
        assigned_issues_jql("ABC")
        == "assignee = currentUser() AND project = ABC ORDER BY updated DESC"
    )


def test_issues_by_type_jql():
    assert issues_by_type_jql("Bug") == 'issuetype = "Bug" ORDER BY updated DESC'
    assert (
        issues_by_type_jql("Bug", "ABC")
        == 'issuetype = "Bug" AND project = ABC ORDER BY updated DESC'
    )


# ----------------------------------------------------------------------
# Operations
# ----------------------------------------------------------------------


@respx.mock
async def test_get_issue(client, sink):
    body = {"id": "10001", "key": "PROJ-1", "fields": {"summary": "Test"}}
    route = respx.get(f"{API_BASE}/issue/PROJ-1").mock(return_value=Response(200, json=body))

    result = await client.get_issue("PROJ-1")

    assert result == body
    assert route.call_count == 1
    request = route.calls.last.request
    assert request.method == "GET"
    assert request.headers["Authorization"] == _basic("test@example.com", "tok")
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == b""
    assert sink.records == [("/rest/api/2/issue/PROJ-1", body)]


@respx.mock
async def test_search_issues_posts_params_verbatim(client):
    route = respx.post(f"{API_BASE}/search").mock(
        return_value=Response(200, json={"total": 1, "issues": [{"key": "PROJ-1"}]})
    )
    result = await client.search_issues(
        SearchParams(jql="project = PROJ", max_results=10, fields=["summary"])
    )

    assert result["total"] == 1
    assert json.loads(route.calls.last.request.content) == {
        "jql": "project = PROJ",
        "maxResults": 10,
        "fields": ["summary"],
    }


@respx.mock
async def test_search_issues_omits_unset_fields(client):
    route = respx.post(f"{API_BASE}/search").mock(
        return_value=Response(200, json={"total": 0, "issues": []})
    )
    await client.search_issues(SearchParams(jql="project = PROJ"))
    assert json.loads(route.calls.last.request.content) == {
        "jql": "project = PROJ",
        "maxResults": 50,
    }


@respx.mock
async def test_get_assigned_issues(client):
    route = respx.post(f"{API_BASE}/search").mock(
        return_value=Response(200, json={"total": 0, "issues": []})
    )
    await client.get_assigned_issues("ABC", max_results=5)

    sent = json.loads(route.calls.last.request.content)
    assert sent == {
        "jql": "assignee = currentUser() AND project = ABC ORDER BY updated DESC",
        "maxResults": 5,
        "fields": DEFAULT_SEARCH_FIELDS,
    }


@respx.mock
async def test_get_issues_by_type_defaults(client):
    route = respx.post(f"{API_BASE}/search").mock(
        return_value=Response(200, json={"total": 0, "issues": []})
    )
    await client.get_issues_by_type("Bug")

    sent = json.loads(route.calls.last.request.content)
    assert sent["jql"] == 'issuetype = "Bug" ORDER BY updated DESC'
    assert sent["maxResults"] == 50
    assert sent["fields"] == [
        "summary",
        "description",
        "status",
        "issuetype",
        "priority",
        "assignee",
        "project",
    ]


@respx.mock
async def test_get_projects_end_to_end(write_env):
    path = write_env(
        JIRA_BASE_URL="https://x.atlassian.net",
        JIRA_USERNAME="u",
        JIRA_API_TOKEN="t",
    )
    projects = [{"id": "1", "key": "PROJ", "name": "Project"}]
    route = respx.get("https://x.atlassian.net/rest/api/2/project").mock(
        return_value=Response(200, json=projects)
    )

    client = JiraClient(config_source=DotenvConfigSource(path, environ={}))
    try:
        result = await client.get_projects()
    finally:
        await client.close()

    assert result == projects
    assert route.calls.last.request.headers["Authorization"] == "Basic " + base64.b64encode(b"u:t").decode()


@respx.mock
async def test_get_issue_types(client, sink):
    types = [{"id": "1", "name": "Bug"}, {"id": "2", "name": "Story"}]
    respx.get(f"{API_BASE}/issuetype").mock(return_value=Response(200, json=types))

    assert await client.get_issue_types() == types
    assert sink.records == [("/rest/api/2/issuetype", types)]


@respx.mock
async def test_sink_write_runs_off_event_loop(config_source):
    class ThreadRecordingSink(ResponseSink):
        def __init__(self):
            self.threads = []

        def record(self, endpoint, body):
            self.threads.append(threading.get_ident())

    sink = ThreadRecordingSink()
    respx.get(f"{API_BASE}/project").mock(return_value=Response(200, json=[]))
    client = JiraClient(config_source=config_source, sink=sink)
    try:
        await client.get_projects()
    finally:
        await client.close()

    assert len(sink.threads) == 1
    assert sink.threads[0] != threading.get_ident()


@respx.mock
async def test_trailing_slash_in_base_url(write_env):
    path = write_env(
        JIRA_BASE_URL=f"{BASE_URL}/",
        JIRA_USERNAME="u",
        JIRA_API_TOKEN="t",
    )
    route = respx.get(f"{API_BASE}/project").mock(return_value=Response(200, json=[]))
    client = JiraClient(config_source=DotenvConfigSource(path, environ={}))
    try:
        await client.get_projects()
    finally:
        await client.close()
    assert route.called


# ----------------------------------------------------------------------
# Error normalization
# ----------------------------------------------------------------------


@respx.mock
async def test_not_found_error_message(client, sink):
    respx.get(f"{API_BASE}/issue/PROJ-999").mock(
        return_value=Response(404, json={"errorMessages": ["Issue does not exist"]})
    )
    with pytest.raises(JiraNotFoundError) as exc_info:
        await client.get_issue("PROJ-999")

    assert exc_info.value.status == 404
    assert exc_info.value.err == "Issue does not exist"
    assert sink.records == []


@pytest.mark.parametrize(
    "body",
    [{"errorMessages": []}, {"errors": {"jql": "bad"}}, {"errorMessages": [""]}],
)
@respx.mock
async def test_unknown_error_when_no_message(client, body):
    respx.post(f"{API_BASE}/search").mock(return_value=Response(400, json=body))
    with pytest.raises(JiraValidationError) as exc_info:
        await client.search_issues(SearchParams(jql="nonsense ="))
    assert exc_info.value.status == 400
    assert exc_info.value.err == "Unknown error"


@respx.mock
async def test_non_json_error_body(client):
    respx.get(f"{API_BASE}/issue/PROJ-1").mock(return_value=Response(401, text="Unauthorized"))
    with pytest.raises(JiraAuthenticationError) as exc_info:
        await client.get_issue("PROJ-1")
    assert exc_info.value.err == "Unknown error"


@respx.mock
async def test_unmapped_status_is_plain_jira_error(client):
    respx.get(f"{API_BASE}/project").mock(
        return_value=Response(503, json={"errorMessages": ["Down for maintenance"]})
    )
    with pytest.raises(JiraError) as exc_info:
        await client.get_projects()
    assert type(exc_info.value) is JiraError
    assert exc_info.value.status == 503
    assert exc_info.value.err == "Down for maintenance"


@respx.mock
async def test_network_failure_is_transport_error(client):
    respx.get(f"{API_BASE}/project").mock(side_effect=httpx.ConnectError("connection refused"))
    with pytest.raises(JiraTransportError, match="connection refused") as exc_info:
        await client.get_projects()
    assert not hasattr(exc_info.value, "status")
    assert not isinstance(exc_info.value, JiraError)


@respx.mock
async def test_timeout_is_transport_error(client):
    respx.get(f"{API_BASE}/issuetype").mock(side_effect=httpx.ReadTimeout("timed out"))
    with pytest.raises(JiraTransportError):
        await client.get_issue_types()


@respx.mock
async def test_malformed_success_body(client, sink):
    respx.get(f"{API_BASE}/project").mock(return_value=Response(200, text="<html>login</html>"))
    with pytest.raises(JiraTransportError, match="Failed to make request to Jira API"):
        await client.get_projects()
    assert sink.records == []


@respx.mock
async def test_search_response_without_issues(client, sink):
    respx.post(f"{API_BASE}/search").mock(return_value=Response(200, json={"total": 3}))
    with pytest.raises(JiraTransportError, match="unexpected response"):
        await client.search_issues(SearchParams(jql="project = PROJ"))
    assert sink.records == []


@respx.mock
async def test_invalid_issue_key_is_transport_error(client, sink):
    with pytest.raises(JiraTransportError, match="Failed to make request to Jira API"):
        await client.get_issue("PROJ-1\n")
    assert sink.records == []


# ----------------------------------------------------------------------
# Configuration
# ----------------------------------------------------------------------


def test_construction_fails_without_credentials(tmp_path):
    with pytest.raises(ConfigurationMissingError):
        JiraClient(config_source=DotenvConfigSource(tmp_path / "missing.env", environ={}))


@respx.mock
async def test_reload_config_picks_up_new_token(client, write_env):
    route = respx.get(f"{API_BASE}/project").mock(return_value=Response(200, json=[]))

    write_env(
        JIRA_BASE_URL=BASE_URL,
        JIRA_USERNAME="test@example.com",
        JIRA_API_TOKEN="rotated",
    )
    await client.get_projects()
    assert route.calls.last.request.headers["Authorization"] == _basic("test@example.com", "tok")

    client.reload_config()
    await client.get_projects()
    assert route.calls.last.request.headers["Authorization"] == _basic("test@example.com", "rotated")


async def test_failed_reload_keeps_previous_credentials(client, write_env):
    write_env(JIRA_BASE_URL="https://other.atlassian.net")
    with pytest.raises(ConfigurationMissingError):
        client.reload_config()
    assert client.base_url == BASE_URL
    assert client.username == "test@example.com"
