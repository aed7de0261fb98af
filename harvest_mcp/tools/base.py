"""Building blocks for tool declarations.

A tool is declared once: its pydantic parameter model is both the validator
for incoming arguments and the source of the advertised ``inputSchema``, and
the documentation fields feed the ``about`` tool.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Annotated, Any, Awaitable, Callable

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    model_validator,
)

from ..models import ToolDescriptor


def resolve_date(value: str) -> str:
    """Normalise a date argument to YYYY-MM-DD."""
    from dateutil import parser

    v_lower = value.lower().strip()
    if v_lower in ("today", "now"):
        return date.today().isoformat()
    if v_lower == "yesterday":
        return (date.today() - timedelta(days=1)).isoformat()
    if v_lower == "tomorrow":
        return (date.today() + timedelta(days=1)).isoformat()
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except ValueError:
        pass
    try:
        return parser.parse(value).date().isoformat()
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"unrecognised date {value!r}, expected YYYY-MM-DD") from exc


IsoDate = Annotated[str, AfterValidator(resolve_date)]


def _json_type(prop: dict) -> str:
    if "type" in prop:
        return prop["type"]
    for option in prop.get("anyOf", []):
        if option.get("type") not in (None, "null"):
            return option["type"]
    return "string"


class ToolParams(BaseModel):
    """Arguments of one tool.

    Undeclared arguments are kept and forwarded so callers can use Harvest
    filters the schema does not list.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    _arg_order: list[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_order(cls, data: Any, handler) -> "ToolParams":
        params = handler(data)
        if isinstance(data, dict):
            params._arg_order = list(data)
        return params

    def payload(self) -> dict[str, Any]:
        """Arguments exactly as supplied, keyed by their wire names, in caller order."""
        data = self.model_dump(by_alias=True, exclude_unset=True)
        data.update(self.model_extra or {})
        wire = {name: field.alias or name for name, field in type(self).model_fields.items()}
        ordered = {}
        for key in self._arg_order:
            key = wire.get(key, key)
            if key in data:
                ordered[key] = data[key]
        for key, value in data.items():
            ordered.setdefault(key, value)
        return ordered

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        raw = cls.model_json_schema(by_alias=True)
        properties = {
            name: {"type": _json_type(prop), "description": prop.get("description", "")}
            for name, prop in raw.get("properties", {}).items()
        }
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if raw.get("required"):
            schema["required"] = list(raw["required"])
        return schema


class NoParams(ToolParams):
    pass


class Paginated(ToolParams):
    page:     int | None = Field(None, description="Page number")
    per_page: int | None = Field(None, description="Results per page (max 100)")


class ActivePaginated(Paginated):
    is_active: bool | None = Field(None, description="Filter by active status")


Handler = Callable[[Any, Any], Awaitable[Any]]


@dataclass(frozen=True)
class Tool:
    name:        str
    description: str
    category:    str
    params:      type[ToolParams]
    handler:     Handler
    # long-form documentation
    purpose:     str = ""
    examples:    tuple[dict[str, Any], ...] = ()
    response:    str = ""
    tips:        str = ""
    errors:      str = ""

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.params.input_schema(),
        )
