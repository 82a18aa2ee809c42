"""Per-tool timing decorator."""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable

logger = logging.getLogger("jira_mcp_bridge")


def timed(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Log how long an async tool took and whether it raised."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        start = time.monotonic()
        outcome = "failed"
        try:
            result = await fn(*args, **kwargs)
            outcome = "ok"
            return result
        finally:
            logger.debug("tool %s %s in %.3fs", fn.__name__, outcome, time.monotonic() - start)

    return wrapper
