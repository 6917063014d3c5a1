# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""MCP Protocol Models.

Based on the Model Context Protocol specification.
https://modelcontextprotocol.io/specification
"""

import json
from typing import Any, Literal

from pydantic import BaseModel, Field


class TextContent(BaseModel):
    """Text content block of a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result returned by a tool handler."""

    content: list[TextContent] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def from_json(cls, data: Any) -> "ToolResult":
        """Pretty-print data as the single text block."""
        return cls.from_text(json.dumps(data, indent=2))

    @property
    def text(self) -> str:
        """All text blocks joined, as sent over MCP."""
        return "\n".join(block.text for block in self.content)
