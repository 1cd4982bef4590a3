"""FastMCP server initialization for todotxt MCP."""

from mcp.server.fastmcp import FastMCP

from todotxt_mcp.config import get_data_dir, get_log_level
from todotxt_mcp.logging_setup import setup_logging

# Initialize the MCP server
mcp = FastMCP("todotxt_mcp")


def run() -> None:
    """Run the MCP server."""
    setup_logging(log_dir=get_data_dir() / "logs", console_level=get_log_level())
    mcp.run()

