"""Route tool invocations to their handlers.

``Dispatcher.call`` turns every outcome into a ``ToolResult``: unknown names,
argument validation failures, Harvest errors and network errors all come back
as ``isError`` results instead of exceptions.
"""
import asyncio
import json
import logging
from functools import partial
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from .harvest import HarvestClient
from .models import ToolResult
from .tools import TOOLS
from .tools.base import Tool

log = logging.getLogger(__name__)


def format_validation_error(tool_name: str, exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "arguments"
        problems.append(f"{field}: {err['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)


def _log_abandoned(tool_name: str, task: asyncio.Future) -> None:
    if not task.cancelled() and task.exception() is not None:
        log.warning("%s failed after its caller went away: %s", tool_name, task.exception())


def render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


class Dispatcher:
    def __init__(self, client: HarvestClient | None, tools: Iterable[Tool] = TOOLS):
        self.client = client
        self.tools = {tool.name: tool for tool in tools}

    async def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        tool = self.tools.get(name)
        if tool is None:
            log.warning("Unknown tool requested: %s", name)
            return ToolResult.error(f"Unknown tool: {name}")

        log.info("Calling %s", name)
        try:
            try:
                params = tool.params.model_validate(dict(arguments or {}))
            except ValidationError as exc:
                raise ValueError(format_validation_error(name, exc)) from None
            # once the request is on the wire it runs to completion
            task = asyncio.ensure_future(tool.handler(self.client, params))
            try:
                result = await asyncio.shield(task)
            except asyncio.CancelledError:
                task.add_done_callback(partial(_log_abandoned, name))
                raise
            text = render(result)
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            log.warning("%s failed: %s", name, message)
            return ToolResult.error(f"Error: {message}")

        return ToolResult.ok(text)
