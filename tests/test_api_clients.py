# tests/test_api_clients.py

"""Tests for the curl_cffi-backed API clients."""

import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from src.clients.base_client import BaseApiClient
from src.clients.open_exchange_rates import OpenExchangeRatesProvider
from src.clients.openai_oracle import OpenAIOracleClient
from src.models.conversation import ChatMessage, ToolCall
from src.models.errors import OracleError, ProviderError
from src.services.tools import TOOL_SCHEMAS

_REQUEST = "src.clients.base_client.curl_requests.request"


def _response(body: Any, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.text = body if isinstance(body, str) else json.dumps(body)
    return resp


class TestBaseApiClient(unittest.TestCase):
    """Single-attempt request handling."""

    def setUp(self) -> None:
        self.client = BaseApiClient("demo", "https://api.test/v1/", timeout=3)

    @patch(_REQUEST)
    def test_returns_decoded_json(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response({"ok": True})
        self.assertEqual(self.client._get("ping", {"a": "1"}), {"ok": True})
        args, kwargs = mock_request.call_args
        self.assertEqual(args, ("GET", "https://api.test/v1/ping"))
        self.assertEqual(kwargs["params"], {"a": "1"})
        self.assertEqual(kwargs["timeout"], 3)

    @patch(_REQUEST)
    def test_non_200_raises(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response("rate limited", status=429)
        with self.assertRaisesRegex(ProviderError, "HTTP 429"):
            self.client._get("ping")
        self.assertEqual(mock_request.call_count, 1)

    @patch(_REQUEST, side_effect=TimeoutError("timed out"))
    def test_transport_error_raises(self, mock_request: MagicMock) -> None:
        with self.assertRaisesRegex(ProviderError, "demo request failed"):
            self.client._post("x", {})
        self.assertEqual(mock_request.call_count, 1)

    @patch(_REQUEST)
    def test_malformed_json_raises(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response("<html>oops</html>")
        with self.assertRaisesRegex(ProviderError, "malformed JSON"):
            self.client._get("ping")

    def test_network_blocked_by_default(self) -> None:
        with self.assertRaises(ProviderError):
            self.client._get("ping")


class TestOpenExchangeRatesProvider(unittest.TestCase):
    """Rate provider endpoints."""

    def setUp(self) -> None:
        self.provider = OpenExchangeRatesProvider(
            api_key="key-0123456789abcdef", base_url="https://oxr.test/api"
        )

    @patch(_REQUEST)
    def test_fetch_latest_rates(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response(
            {"base": "USD", "rates": {"EUR": 0.9, "GBP": 0.8, "BAD": "x"}}
        )
        base, rates = self.provider.fetch_latest_rates(["EUR", "GBP"])
        self.assertEqual(base, "USD")
        self.assertEqual(rates, {"EUR": 0.9, "GBP": 0.8})
        args, kwargs = mock_request.call_args
        self.assertEqual(args[1], "https://oxr.test/api/latest.json")
        self.assertEqual(
            kwargs["params"],
            {"app_id": "key-0123456789abcdef", "symbols": "EUR,GBP"},
        )

    @patch(_REQUEST)
    def test_latest_rates_shape_checked(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response({"error": True})
        with self.assertRaises(ProviderError):
            self.provider.fetch_latest_rates(["EUR"])

    @patch(_REQUEST)
    def test_fetch_currencies(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response(
            {"USD": "United States Dollar", "eur": "Euro"}
        )
        self.assertEqual(
            self.provider.fetch_currencies(),
            {"USD": "United States Dollar", "EUR": "Euro"},
        )
        self.assertEqual(
            mock_request.call_args[0][1], "https://oxr.test/api/currencies.json"
        )

    @patch(_REQUEST)
    def test_blank_currency_name_uses_code(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response({"xau": "", "XAG": None})
        self.assertEqual(
            self.provider.fetch_currencies(), {"XAU": "XAU", "XAG": "XAG"}
        )

    def test_provider_name(self) -> None:
        self.assertEqual(self.provider.name, "openexchangerates.org")


class TestOpenAIOracleClient(unittest.TestCase):
    """Chat completion payloads and reply parsing."""

    def setUp(self) -> None:
        self.oracle = OpenAIOracleClient(
            api_key="sk-test", base_url="https://llm.test/v1", model="m"
        )

    @patch(_REQUEST)
    def test_payload_and_text_reply(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response(
            {
                "choices": [
                    {
                        "message": {"role": "assistant", "content": "Hi!"},
                        "finish_reason": "stop",
                    }
                ]
            }
        )
        reply = self.oracle.complete(
            [ChatMessage(role="user", content="Hello")], TOOL_SCHEMAS
        )
        self.assertEqual(reply.content, "Hi!")
        self.assertEqual(reply.tool_calls, [])
        self.assertEqual(reply.finish_reason, "stop")

        args, kwargs = mock_request.call_args
        self.assertEqual(args, ("POST", "https://llm.test/v1/chat/completions"))
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer sk-test")
        payload = kwargs["json"]
        self.assertEqual(payload["model"], "m")
        self.assertEqual(payload["max_tokens"], 800)
        self.assertEqual(payload["temperature"], 0.7)
        self.assertEqual(payload["tool_choice"], "auto")
        self.assertEqual(len(payload["tools"]), 2)
        self.assertEqual(
            payload["messages"], [{"role": "user", "content": "Hello"}]
        )

    @patch(_REQUEST)
    def test_tool_call_reply(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response(
            {
                "choices": [
                    {
                        "message": {
                            "role": "assistant",
                            "content": None,
                            "tool_calls": [
                                {
                                    "id": "call_1",
                                    "type": "function",
                                    "function": {
                                        "name": "searchProducts",
                                        "arguments": '{"query": "phone"}',
                                    },
                                }
                            ],
                        },
                        "finish_reason": "tool_calls",
                    }
                ]
            }
        )
        reply = self.oracle.complete([ChatMessage(role="user", content="x")])
        self.assertIsNone(reply.content)
        self.assertEqual(
            reply.tool_calls,
            [ToolCall("call_1", "searchProducts", '{"query": "phone"}')],
        )
        self.assertNotIn("tools", mock_request.call_args[1]["json"])

    @patch(_REQUEST)
    def test_no_choices_raises(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response({"choices": []})
        with self.assertRaisesRegex(OracleError, "No response choice"):
            self.oracle.complete([ChatMessage(role="user", content="x")])

    @patch(_REQUEST)
    def test_http_error_is_oracle_error(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response("unauthorized", status=401)
        with self.assertRaises(OracleError):
            self.oracle.complete([ChatMessage(role="user", content="x")])

    @patch(_REQUEST)
    def test_is_available(self, mock_request: MagicMock) -> None:
        mock_request.return_value = _response(
            {"choices": [{"message": {"content": "Hi"}}]}
        )
        self.assertTrue(self.oracle.is_available())
        self.assertEqual(mock_request.call_args[1]["json"]["max_tokens"], 5)

    def test_is_available_false_on_failure(self) -> None:
        self.assertFalse(self.oracle.is_available())


if __name__ == "__main__":
    unittest.main()
