"""Wire shapes shared by the dispatcher and both transports."""
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name:         str
    description:  str
    input_schema: dict[str, Any] = Field(..., alias="inputSchema")


class ToolInvocation(BaseModel):
    name:      str
    arguments: dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content:  list[TextContent]
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return self.content[0].text
