"""Shared configuration for the Harvest MCP server."""
import logging
import os
import sys

from dotenv import load_dotenv

from . import __version__

load_dotenv()

BASE_URL   = os.getenv("HARVEST_BASE_URL", "https://api.harvestapp.com/v2")
ACCOUNT_ID = os.getenv("HARVEST_ACCOUNT_ID")
TOKEN      = os.getenv("HARVEST_ACCESS_TOKEN")
USER_AGENT = os.getenv("HARVEST_USER_AGENT", "Harvest MCP Server (harvest-mcp)")
TIMEOUT    = float(os.getenv("HARVEST_TIMEOUT", "30"))

SERVER_NAME    = os.getenv("MCP_SERVER_NAME", "harvest-mcp")
SERVER_VERSION = os.getenv("MCP_SERVER_VERSION", __version__)

HOST      = os.getenv("HOST", "0.0.0.0")
PORT      = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def require_credentials() -> tuple[str, str]:
    """Exit the process unless both Harvest credentials are configured."""
    if not ACCOUNT_ID or not TOKEN:
        print(
            "Error: HARVEST_ACCOUNT_ID and HARVEST_ACCESS_TOKEN must be set in environment variables",
            file=sys.stderr,
        )
        sys.exit(1)
    return ACCOUNT_ID, TOKEN


def setup_logging() -> None:
    # stdout belongs to the stdio transport
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
