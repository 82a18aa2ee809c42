"""FastMCP server instance with the Jira tool catalog registered."""

from fastmcp import FastMCP

from jira_mcp_bridge.lifespan import lifespan
from jira_mcp_bridge.tools import register_tools

mcp = FastMCP("jira-mcp-bridge", lifespan=lifespan)
register_tools(mcp)
