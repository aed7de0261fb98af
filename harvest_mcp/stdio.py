"""MCP stdio transport.

Run with ``harvest-mcp`` or ``python -m harvest_mcp``. Logging goes to
stderr; stdout carries the protocol frames.
"""
import asyncio
import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import config
from .dispatcher import Dispatcher
from .harvest import HarvestClient
from .tools import descriptors

log = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised inside the MCP handler so the SDK replies with ``isError``."""


def list_mcp_tools() -> list[types.Tool]:
    return [
        types.Tool(name=d.name, description=d.description, inputSchema=d.input_schema)
        for d in descriptors()
    ]


async def call_mcp_tool(
    dispatcher: Dispatcher, name: str, arguments: dict[str, Any] | None
) -> list[types.TextContent]:
    result = await dispatcher.call(name, arguments or {})
    if result.is_error:
        # the SDK turns the exception text into the single error text block
        raise ToolCallError(result.text)
    return [types.TextContent(type="text", text=result.text)]


def build_server(dispatcher: Dispatcher) -> Server:
    server = Server(config.SERVER_NAME, version=config.SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return list_mcp_tools()

    # arguments are validated by the tool models, not the advertised schema
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        return await call_mcp_tool(dispatcher, name, arguments)

    return server


async def serve(account_id: str, access_token: str) -> None:
    async with HarvestClient(account_id, access_token, config.USER_AGENT) as client:
        server = build_server(Dispatcher(client))
        async with stdio_server() as (read_stream, write_stream):
            log.info("Harvest MCP server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    account_id, access_token = config.require_credentials()
    config.setup_logging()
    asyncio.run(serve(account_id, access_token))


if __name__ == "__main__":
    main()
