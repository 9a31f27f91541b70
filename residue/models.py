"""Pydantic models for canonical transcript messages."""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Any, Literal, Optional

# ── Canonical transcript models ────────────────────────────────────

class ToolCall(BaseModel):
    name: str = ""
    input: str = ""
    output: str = ""


class ThinkingBlock(BaseModel):
    content: str = ""


class Message(BaseModel):
    role: Literal["human", "assistant"]
    content: str = ""
    timestamp: Optional[str] = None
    model: Optional[str] = None
    tool_calls: Optional[list[ToolCall]] = None
    thinking: Optional[list[ThinkingBlock]] = None

    def to_dict(self) -> dict[str, Any]:
        """Consumer shape: absent optional fields are omitted, never null."""
        return self.model_dump(exclude_none=True)


# ── API models ─────────────────────────────────────────────────────

class TimestampRange(BaseModel):
    firstMessageAt: Optional[int] = None
    lastMessageAt: Optional[int] = None


class AgentInfo(BaseModel):
    name: str


class TranscriptRequest(BaseModel):
    raw: str = ""
    dataPath: Optional[str] = None


class TranscriptResponse(BaseModel):
    agent: str
    sessionId: Optional[str] = None
    messages: list[Message] = Field(default_factory=list)
    firstMessageAt: Optional[int] = None
    lastMessageAt: Optional[int] = None
