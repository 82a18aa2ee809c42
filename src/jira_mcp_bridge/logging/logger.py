"""Logging configuration. Outputs to stderr to avoid conflict with stdio MCP transport."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def setup_logger(
    name: str = "jira_mcp_bridge",
    level: str = "INFO",
    stream: TextIO | None = None,
) -> logging.Logger:
    """Create the bridge logger.

    Records never reach stdout, which carries JSON-RPC frames under the stdio
    transport. The first call attaches one handler on ``stream`` (stderr by
    default); later calls only update the level. Unknown level names fall
    back to INFO.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
