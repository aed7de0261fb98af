"""FastAPI routers, collected from every module here that defines ``router``."""
from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules

from fastapi import APIRouter

routers: list[APIRouter] = []

for _mod in iter_modules([str(Path(__file__).parent)]):
    if _mod.ispkg:
        continue
    _router = getattr(import_module(f"{__name__}.{_mod.name}"), "router", None)
    if isinstance(_router, APIRouter):
        routers.append(_router)
