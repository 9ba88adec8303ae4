# src/models/conversation.py

"""Conversation messages, tool calls and chat answers.

These types mirror the OpenAI chat-completion wire format closely enough
that :meth:`ChatMessage.to_payload` produces a message the oracle accepts
and :meth:`ChatMessage.from_payload` reads caller-supplied history.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, cast

Role = Literal["system", "user", "assistant", "tool"]

_ROLES: frozenset[str] = frozenset({"system", "user", "assistant", "tool"})


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the oracle.

    ``arguments`` stays the serialized JSON string the oracle sent; it is
    decoded only when the call is executed.
    """

    id: str
    name: str
    arguments: str = "{}"

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any], index: int = 0) -> "ToolCall":
        """Build a call from its wire dict.

        Raises:
            ValueError: if the call or its function entry is not an object.
        """
        if not isinstance(payload, dict):
            raise ValueError(
                f"Tool call must be an object, got {type(payload).__name__}"
            )
        func = payload.get("function") or {}
        if not isinstance(func, dict):
            raise ValueError("Tool call function must be an object")
        raw_args = func.get("arguments")
        if isinstance(raw_args, dict):
            arguments = json.dumps(raw_args, ensure_ascii=False)
        else:
            arguments = raw_args or "{}"
        return cls(
            id=payload.get("id") or f"tool_call_{index}",
            name=func.get("name") or payload.get("name") or "",
            arguments=arguments,
        )


@dataclass
class ChatMessage:
    """One entry of the ordered message list sent to the oracle."""

    role: Role
    content: str | None = None
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None
    name: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "role": self.role,
            "content": self.content,
        }
        if self.tool_calls:
            payload["tool_calls"] = [
                call.to_payload() for call in self.tool_calls
            ]
        if self.tool_call_id:
            payload["tool_call_id"] = self.tool_call_id
        if self.name:
            payload["name"] = self.name
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ChatMessage":
        """Build a message from its wire dict.

        Raises:
            ValueError: if the payload is not an object, or the role is
                not one of the four known roles.
        """
        if not isinstance(payload, dict):
            raise ValueError(
                f"Message must be an object, got {type(payload).__name__}"
            )
        role = payload.get("role")
        if role not in _ROLES:
            raise ValueError(f"Unsupported message role: {role!r}")
        raw_calls = payload.get("tool_calls") or []
        if not isinstance(raw_calls, list):
            raise ValueError("Message tool_calls must be a list")
        tool_calls = [
            ToolCall.from_payload(call, idx)
            for idx, call in enumerate(raw_calls)
        ]
        return cls(
            role=cast(Role, role),
            content=payload.get("content"),
            tool_calls=tool_calls or None,
            tool_call_id=payload.get("tool_call_id"),
            name=payload.get("name"),
        )


@dataclass(frozen=True)
class OracleReply:
    """The assistant message extracted from one oracle response."""

    content: str | None
    tool_calls: list[ToolCall] = field(
        default_factory=lambda: list[ToolCall]()
    )
    finish_reason: str | None = None


@dataclass
class ToolExecutionResult:
    """Outcome of running one tool call; failures are data, not raises."""

    tool_call_id: str
    tool_name: str
    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None

    def to_message_content(self) -> str:
        if self.success:
            return json.dumps(self.data, ensure_ascii=False)
        return f"Error: {self.error}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool_call_id": self.tool_call_id,
            "tool_name": self.tool_name,
            "success": self.success,
            "data": self.data,
            "error": self.error,
        }


class FinishReason(str, Enum):
    """Terminal status of a chat turn."""

    STOP = "stop"
    TOOL_CALLS = "tool_calls"


@dataclass
class ChatAnswer:
    """Everything a caller gets back from one chat turn."""

    text: str
    conversation_id: str
    status: FinishReason
    tool_used: str | None = None
    tool_calls: list[ToolCall] = field(
        default_factory=lambda: list[ToolCall]()
    )
    tool_results: list[ToolExecutionResult] = field(
        default_factory=lambda: list[ToolExecutionResult]()
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "conversation_id": self.conversation_id,
            "tool_used": self.tool_used,
            "status": self.status.value,
            "tool_calls": [c.to_payload() for c in self.tool_calls],
            "tool_results": [r.to_dict() for r in self.tool_results],
        }
