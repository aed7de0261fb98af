"""Overview and per-tool documentation, rendered from the tool registry."""
import json

from . import __version__
from .tools import INTROSPECTION_TOOLS, TOOLS, TOOLS_BY_NAME
from .tools.base import Tool

VERSION_INFO = {
    "name":              "harvest-mcp",
    "version":           __version__,
    "description":       "Model Context Protocol server for Harvest API integration",
    "author":            "standardbeagle",
    "license":           "MIT",
    "repository":        "https://github.com/standardbeagle/harvest-mcp",
    "mcpVersion":        "2025-06-18",
    "harvestApiVersion": "v2",
}

_WORKFLOWS = """\
**Start a work session:**
1. List projects: harvest_list_projects
2. Create time entry: harvest_create_time_entry (omit hours to start a timer)

**End a work session:**
1. Stop timer: harvest_stop_timer
2. Update notes: harvest_update_time_entry

**Generate reports:**
1. Get time report: harvest_time_report with a date range
2. Filter by user, project or client as needed"""


def _categories() -> dict[str, list[Tool]]:
    grouped: dict[str, list[Tool]] = {}
    for tool in TOOLS:
        if tool.name in INTROSPECTION_TOOLS:
            continue
        grouped.setdefault(tool.category, []).append(tool)
    return grouped


def _overview() -> str:
    grouped = _categories()
    harvest_count = sum(len(tools) for tools in grouped.values())

    lines = [
        "# Harvest MCP Server",
        "",
        "A Model Context Protocol server for the Harvest API v2, giving AI assistants "
        "time tracking, project lookup and reporting on your Harvest account.",
        "",
        "## Overview",
        f"It provides {harvest_count} Harvest tools plus `about` and `version`.",
        "",
        "## Core Capabilities",
        "- **Time Entry Management**: create, update, delete and list time entries",
        "- **Timer Operations**: stop and restart timers",
        "- **Project & Task Lookup**: projects, tasks and their assignments",
        "- **Users & Clients**: account users and clients",
        "- **Reporting**: team time reports over date ranges",
        "",
        "## Tool Categories",
    ]
    for category, tools in grouped.items():
        lines += ["", f"### {category} ({len(tools)} tools)"]
        lines += [f"- {t.name}: {t.description}" for t in tools]

    lines += [
        "",
        "## Example Usage Patterns",
        "",
        _WORKFLOWS,
        "",
        "**For detailed information about any specific tool, use:**",
        'about {"tool": "tool_name"}',
        "",
        "## Authentication",
        "Uses Harvest API v2 personal access tokens. Requires the HARVEST_ACCOUNT_ID "
        "and HARVEST_ACCESS_TOKEN environment variables.",
        "",
        "## Response Format",
        "Tools return the Harvest API JSON unchanged, as indented text. Failures come "
        'back flagged as errors with a message starting "Error:".',
    ]
    return "\n".join(lines)


def _parameter_lines(tool: Tool) -> list[str]:
    schema = tool.params.input_schema()
    required = set(schema.get("required", []))
    properties = schema["properties"]
    if not properties:
        return ["None required."]
    lines = []
    for name, prop in properties.items():
        flag = "required" if name in required else "optional"
        lines.append(f"- `{name}` ({prop['type']}, {flag}): {prop['description']}")
    return lines


def _tool_doc(tool: Tool) -> str:
    lines = [f"# {tool.name}", "", tool.description + ".", ""]
    if tool.purpose:
        lines += ["## Purpose", tool.purpose, ""]
    lines += ["## Parameters", *_parameter_lines(tool), ""]
    if tool.examples:
        lines += ["## Example Usage", ""]
        for example in tool.examples:
            call = {"tool": tool.name, **example}
            lines += ["```json", json.dumps(call, indent=2), "```", ""]
    if tool.response:
        lines += ["## Response Format", tool.response, ""]
    if tool.tips:
        lines += ["## Workflow Tips", tool.tips, ""]
    if tool.errors:
        lines += ["## Error Conditions", tool.errors, ""]
    return "\n".join(lines).rstrip() + "\n"


def documented_tools() -> list[str]:
    return [t.name for t in TOOLS]


def get_about_info(tool_name: str | None = None) -> str:
    """Overview when ``tool_name`` is empty, otherwise that tool's documentation."""
    if not tool_name:
        return _overview()
    tool = TOOLS_BY_NAME.get(tool_name)
    if tool is None:
        return f'Tool "{tool_name}" not found. Available tools: {", ".join(documented_tools())}'
    return _tool_doc(tool)


def get_version() -> str:
    return json.dumps(VERSION_INFO, indent=2)
