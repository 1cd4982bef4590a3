"""Entry point for ``python -m todotxt_mcp``."""

from todotxt_mcp.server import run

run()
