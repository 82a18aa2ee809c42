"""Shared pytest configuration."""

import pytest

from jira_mcp_bridge.env_loader import DotenvConfigSource


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless explicitly requested."""
    if "integration" not in (config.getoption("-m", default="") or ""):
        skip_integration = pytest.mark.skip(reason="use -m integration to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


@pytest.fixture
def write_env(tmp_path):
    """Write KEY=value lines to tmp_path/.env, replacing any previous content."""
    path = tmp_path / ".env"

    def _write(**values):
        path.write_text("".join(f"{key}={value}\n" for key, value in values.items()))
        return path

    return _write


@pytest.fixture
def env_file(write_env):
    return write_env(
        JIRA_BASE_URL="https://test.atlassian.net",
        JIRA_USERNAME="test@example.com",
        JIRA_API_TOKEN="tok",
    )


@pytest.fixture
def config_source(env_file):
    """A dotenv-backed source that never touches os.environ."""
    return DotenvConfigSource(env_file, environ={})
