"""Minimal stderr logger shared by the CLI and the MCP server.

Stdout carries the CLI's browser list and, under MCP stdio transport, the
JSON-RPC stream, so all logging goes to stderr.
"""

import logging
import sys

_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

logger = logging.getLogger("brodef")
logger.addHandler(_handler)
logger.setLevel(logging.INFO)


def debug_detail(message: str) -> None:
    logger.debug(message)
