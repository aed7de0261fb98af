# about / version: answered locally, never reach Harvest
from pydantic import Field

from .base import NoParams, Tool, ToolParams

CATEGORY = "Introspection"


class About(ToolParams):
    tool: str | None = Field(None, description="Tool name to get detailed information about")


async def about(client, params: About):
    from ..docs import get_about_info
    return get_about_info(params.tool)


async def version(client, params: NoParams):
    from ..docs import get_version
    return get_version()


tools = [
    Tool(
        name="about",
        description="Get information about this server or detailed documentation for one tool",
        category=CATEGORY,
        params=About,
        handler=about,
        purpose="Read the server overview, or the full documentation of a single tool.",
        examples=({}, {"tool": "harvest_create_time_entry"}),
        response="Markdown text.",
    ),
    Tool(
        name="version",
        description="Get version information for this server",
        category=CATEGORY,
        params=NoParams,
        handler=version,
        purpose="Report package, protocol and Harvest API versions.",
        examples=({},),
        response=(
            "JSON with name, version, description, author, license, repository, "
            "mcpVersion and harvestApiVersion."
        ),
    ),
]
