#!/usr/bin/env python3
"""Validate Jira bridge credentials and test connectivity."""

import asyncio
import sys

from jira_mcp_bridge.env_loader import ConfigurationMissingError, DotenvConfigSource, get_jira_config
from jira_mcp_bridge.jira.client import JiraClient
from jira_mcp_bridge.jira.errors import JiraError, JiraTransportError
from jira_mcp_bridge.settings import ServerSettings


async def main() -> int:
    print("Loading settings...")
    settings = ServerSettings()
    source = DotenvConfigSource(settings.env_file)
    try:
        credentials = get_jira_config(source)
    except ConfigurationMissingError as e:
        print(f"FAIL: {e}")
        return 1

    print(f"  JIRA_BASE_URL: {credentials.base_url}")
    print(f"  JIRA_USERNAME: {credentials.username}")
    print(f"  JIRA_API_TOKEN: {'*' * 8}...{credentials.api_token[-4:]}")

    print("\nTesting connectivity...")
    client = JiraClient(config_source=source, timeout=settings.timeout)

    try:
        projects = await client.get_projects()
        print(f"  OK: Found {len(projects)} accessible projects")
        for p in projects[:5]:
            print(f"    - {p.get('key')}: {p.get('name')}")
        if len(projects) > 5:
            print(f"    ... and {len(projects) - 5} more")

        issue_types = await client.get_issue_types()
        print(f"  OK: Found {len(issue_types)} issue types")
        return 0
    except JiraError as e:
        print(f"  FAIL: HTTP {e.status}: {e.err}")
        return 1
    except JiraTransportError as e:
        print(f"  FAIL: {e}")
        return 1
    finally:
        await client.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
