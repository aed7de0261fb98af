from fastapi import HTTPException, Request

from ..dispatcher import Dispatcher
from ..tools import INTROSPECTION_TOOLS


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


def require_harvest(dispatcher: Dispatcher, tool_name: str) -> None:
    """Only ``about`` and ``version`` run without credentials."""
    if dispatcher.client is None and tool_name not in INTROSPECTION_TOOLS:
        raise HTTPException(500, "HARVEST_ACCESS_TOKEN not set")
