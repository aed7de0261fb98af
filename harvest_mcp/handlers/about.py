from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ..docs import VERSION_INFO, get_about_info

router = APIRouter()


@router.get("/about", response_class=PlainTextResponse)
async def about():
    return get_about_info()


@router.get("/about/{tool}", response_class=PlainTextResponse)
async def about_tool(tool: str):
    return get_about_info(tool)


@router.get("/version")
async def version():
    return VERSION_INFO
