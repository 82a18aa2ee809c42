"""Error boundary between Jira failures and MCP tool results."""

from __future__ import annotations

import functools
import json
import logging
from typing import Any, Callable

from fastmcp.exceptions import ToolError

from jira_mcp_bridge.env_loader import ConfigurationMissingError
from jira_mcp_bridge.jira.errors import JiraError, JiraTransportError

logger = logging.getLogger("jira_mcp_bridge")


def tool_errors(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that turns Jira errors into ToolErrors the MCP client can read.

    A remote API error becomes a ToolError whose message is the JSON object
    ``{"status": ..., "err": ...}``. Transport and configuration failures keep
    their message. Other exceptions pass through untouched.
    """

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await fn(*args, **kwargs)
        except JiraError as e:
            logger.warning("%s: Jira returned %d: %s", fn.__name__, e.status, e.err)
            raise ToolError(json.dumps(e.to_dict())) from e
        except (JiraTransportError, ConfigurationMissingError) as e:
            logger.error("%s failed: %s", fn.__name__, e)
            raise ToolError(str(e)) from e

    return wrapper
