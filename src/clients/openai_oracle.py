# src/clients/openai_oracle.py

"""Client for an OpenAI-compatible chat-completions endpoint."""

from typing import Any

from src.clients.base_client import BaseApiClient
from src.config.settings import Settings
from src.models.conversation import ChatMessage, OracleReply, ToolCall
from src.models.errors import OracleError


class OpenAIOracleClient(BaseApiClient):
    """Sends a message list plus tool schemas and parses one reply."""

    error_cls = OracleError

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float = Settings.ORACLE_TIMEOUT,
    ) -> None:
        super().__init__(
            "oracle",
            base_url or Settings.OPENAI_BASE_URL,
            timeout,
        )
        self.api_key = (
            api_key if api_key is not None else Settings.OPENAI_API_KEY
        )
        self.model = model or Settings.OPENAI_MODEL
        self.max_tokens = Settings.OPENAI_MAX_TOKENS
        self.temperature = Settings.OPENAI_TEMPERATURE

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _build_payload(
        self,
        messages: list[ChatMessage],
        tools: list[dict[str, Any]] | None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_payload() for m in messages],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        if tools:
            payload["tools"] = tools
            payload["tool_choice"] = "auto"
        return payload

    @staticmethod
    def _parse_reply(data: Any) -> OracleReply:
        """Extract the first choice's message.

        Raises:
            OracleError: if the response carries no choices.
        """
        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise OracleError("No response choice returned from oracle")
        choice = choices[0] or {}
        message = choice.get("message") or {}
        tool_calls = [
            ToolCall.from_payload(call, idx)
            for idx, call in enumerate(message.get("tool_calls") or [])
        ]
        return OracleReply(
            content=message.get("content"),
            tool_calls=tool_calls,
            finish_reason=choice.get("finish_reason"),
        )

    def complete(
        self,
        messages: list[ChatMessage],
        tools: list[dict[str, Any]] | None = None,
    ) -> OracleReply:
        """Run one chat completion and return the assistant reply."""
        self.logger.debug(
            "Calling oracle %s with %d messages", self.model, len(messages)
        )
        data = self._post(
            "chat/completions", self._build_payload(messages, tools)
        )
        reply = self._parse_reply(data)
        self.logger.debug(
            "Oracle replied (finish_reason=%s, tool_calls=%d)",
            reply.finish_reason,
            len(reply.tool_calls),
        )
        return reply

    def is_available(self) -> bool:
        """Tiny completion as a liveness probe; never raises."""
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": "Hello"}],
            "max_tokens": 5,
        }
        try:
            reply = self._parse_reply(self._post("chat/completions", payload))
        except OracleError as exc:
            self.logger.warning("Oracle availability check failed: %s", exc)
            return False
        return bool(reply.content)
