from fastapi import APIRouter, Depends

from ..dispatcher import Dispatcher
from ..models import ToolInvocation, ToolResult
from ..tools import descriptors
from .deps import get_dispatcher, require_harvest

router = APIRouter()


@router.get("/tools")
async def list_tools():
    return {"tools": [d.model_dump(by_alias=True) for d in descriptors()]}


@router.post("/tools/call", response_model=ToolResult)
async def call_tool(invocation: ToolInvocation, dispatcher: Dispatcher = Depends(get_dispatcher)):
    """Run one tool. Failures are reported in the body, never as HTTP errors."""
    require_harvest(dispatcher, invocation.name)
    return await dispatcher.call(invocation.name, invocation.arguments)
