"""Logging for the MCP server process.

stdout carries the MCP stdio protocol, so console logs go to stderr only.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE = "todotxt-mcp.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow todotxt_mcp logs
    - third-party libraries (mcp, urllib3, ...) only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "todotxt_mcp" or record.name.startswith("todotxt_mcp."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path,
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.DEBUG,
) -> None:
    """
    Configure logging with:
    - stderr handler: filtered to this package
    - file handler: full logs for debugging

    Call this once, before the server starts.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_dir / LOG_FILE), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
