"""Tool registry.

Every category module exposes a ``tools`` list; the catalogue order is the
order of ``_MODULES`` followed by declaration order inside each module.
"""
from importlib import import_module

from ..models import ToolDescriptor
from .base import Tool

_MODULES = ("time_entries", "projects", "users", "reports", "introspection")

_tools: list[Tool] = []
for _name in _MODULES:
    _tools.extend(import_module(f"{__name__}.{_name}").tools)

TOOLS: tuple[Tool, ...] = tuple(_tools)
TOOLS_BY_NAME: dict[str, Tool] = {}
for _tool in TOOLS:
    if _tool.name in TOOLS_BY_NAME:
        raise RuntimeError(f"Duplicate tool name: {_tool.name}")
    TOOLS_BY_NAME[_tool.name] = _tool

INTROSPECTION_TOOLS = frozenset({"about", "version"})

_DESCRIPTORS: tuple[ToolDescriptor, ...] = tuple(t.descriptor() for t in TOOLS)


def descriptors() -> list[ToolDescriptor]:
    return list(_DESCRIPTORS)


def get_tool(name: str) -> Tool | None:
    return TOOLS_BY_NAME.get(name)
