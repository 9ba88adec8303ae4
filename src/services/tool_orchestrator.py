# src/services/tool_orchestrator.py

"""Drives the oracle / tool round-trip for one chat turn."""

import asyncio
import json
import logging
import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from src.clients.openai_oracle import OpenAIOracleClient
from src.config import prompts
from src.config.settings import Settings
from src.models.conversation import (
    ChatAnswer,
    ChatMessage,
    FinishReason,
    ToolCall,
    ToolExecutionResult,
)
from src.services.catalog_search import (
    CatalogSearchEngine,
    ProductSearchCriteria,
)
from src.services.exchange_rates import ExchangeRateClient
from src.services.interfaces import (
    ChatOracle,
    CurrencyConverter,
    ProductSearcher,
)
from src.services.tools import TOOL_SCHEMAS, ToolKind
from src.storage.catalog_store import CatalogStore

logger = logging.getLogger("shop_assistant.orchestrator")

ToolHandler = Callable[[dict[str, Any]], dict[str, Any]]


def generate_conversation_id() -> str:
    """``chat-<epoch ms>-<8 hex chars>``."""
    return f"chat-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _optional_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _optional_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return None


def decode_arguments(raw: str | None) -> dict[str, Any]:
    """Decode a tool call's JSON arguments; blank means no arguments.

    Raises:
        ValueError: if the text is not JSON or not a JSON object.
    """
    if raw is None or not raw.strip():
        return {}
    args = json.loads(raw)
    if not isinstance(args, dict):
        raise ValueError("Tool arguments must be a JSON object")
    return args


class ToolOrchestrator:
    """Runs one chat turn: oracle, optional tools, oracle again.

    Stateless across calls apart from the collaborators it holds.  The
    public :meth:`chat` never raises; orchestration failures become the
    fixed apology answer.
    """

    def __init__(
        self,
        searcher: ProductSearcher,
        converter: CurrencyConverter,
        oracle: ChatOracle,
    ) -> None:
        self.searcher = searcher
        self.converter = converter
        self.oracle = oracle
        self._handlers: dict[ToolKind, ToolHandler] = {
            ToolKind.SEARCH_PRODUCTS: self._search_products,
            ToolKind.CONVERT_CURRENCIES: self._convert_currencies,
        }

    @classmethod
    def from_settings(cls) -> "ToolOrchestrator":
        """Wire the real catalog, rate client and oracle.

        Raises:
            CatalogLoadError: if the product CSV cannot be read.
        """
        store = CatalogStore(Settings.PRODUCTS_CSV_PATH)
        store.load()
        return cls(
            searcher=CatalogSearchEngine(store),
            converter=ExchangeRateClient.from_settings(),
            oracle=OpenAIOracleClient(),
        )

    # ── Tool handlers ────────────────────────────────────

    def _search_products(self, args: dict[str, Any]) -> dict[str, Any]:
        criteria = ProductSearchCriteria(
            query=_optional_str(args.get("query")),
            category=_optional_str(args.get("productType")),
            min_price=_optional_float(args.get("minPrice")),
            max_price=_optional_float(args.get("maxPrice")),
            has_discount=_optional_bool(args.get("hasDiscount")),
            limit=Settings.TOOL_SEARCH_LIMIT,
            offset=0,
        )
        result = self.searcher.search(criteria)
        logger.info(
            "Found %d products for search %r",
            len(result.products),
            criteria.query,
        )
        return {
            "products": [
                {
                    "title": p.title,
                    "category": p.category,
                    "price": p.price,
                    "has_discount": p.has_discount,
                    "has_variants": p.has_variants,
                    "url": p.url,
                    "summary": p.summary,
                }
                for p in result.products
            ],
            "total": result.total,
            "search_criteria": criteria.to_dict(),
        }

    def _convert_currencies(self, args: dict[str, Any]) -> dict[str, Any]:
        conversion = self.converter.convert_currency(
            args.get("amount"),
            args.get("fromCurrency"),
            args.get("toCurrency"),
        )
        return {
            "amount": conversion.amount,
            "from_currency": conversion.from_currency,
            "to_currency": conversion.to_currency,
            "converted_amount": conversion.converted_amount,
            "exchange_rate": conversion.exchange_rate,
            "formatted_conversion": conversion.formatted_conversion,
            "exchange_rate_description": (
                conversion.exchange_rate_description
            ),
        }

    def execute_tool(self, call: ToolCall) -> ToolExecutionResult:
        """Run one tool call; failures are returned, never raised."""
        kind = ToolKind.from_name(call.name)
        if kind is None:
            logger.warning("Unknown tool requested: %s", call.name)
            return ToolExecutionResult(
                tool_call_id=call.id,
                tool_name=call.name,
                success=False,
                error=f"Unknown tool: {call.name}",
            )

        logger.info("Executing tool %s with args %s", call.name, call.arguments)
        try:
            args = decode_arguments(call.arguments)
            data = self._handlers[kind](args)
        except Exception as exc:
            logger.error("Tool execution failed for %s: %s", call.name, exc)
            return ToolExecutionResult(
                tool_call_id=call.id,
                tool_name=call.name,
                success=False,
                error=str(exc) or type(exc).__name__,
            )
        return ToolExecutionResult(
            tool_call_id=call.id,
            tool_name=call.name,
            success=True,
            data=data,
        )

    async def _execute_all(
        self, calls: list[ToolCall],
    ) -> list[ToolExecutionResult]:
        tasks: list[Awaitable[ToolExecutionResult]] = [
            asyncio.to_thread(self.execute_tool, call) for call in calls
        ]
        # gather keeps request order; each result carries its call id
        return list(await asyncio.gather(*tasks))

    # ── Chat pipeline ────────────────────────────────────

    @staticmethod
    def _prepare_messages(
        query: str, prior_messages: list[ChatMessage] | None,
    ) -> list[ChatMessage]:
        messages = [ChatMessage(role="system", content=prompts.SYSTEM_PROMPT)]
        messages.extend(prior_messages or [])
        messages.append(ChatMessage(role="user", content=query))
        return messages

    @staticmethod
    def _fallback_text(results: list[ToolExecutionResult]) -> str:
        successful = [r for r in results if r.success]
        if successful:
            first = successful[0].tool_name
            if first == ToolKind.SEARCH_PRODUCTS.value:
                return prompts.PRODUCT_FALLBACK_TEXT
            if first == ToolKind.CONVERT_CURRENCIES.value:
                return prompts.CURRENCY_FALLBACK_TEXT
        return prompts.GENERIC_FALLBACK_TEXT

    async def _run(
        self,
        query: str,
        conversation_id: str,
        prior_messages: list[ChatMessage] | None,
    ) -> ChatAnswer:
        messages = self._prepare_messages(query, prior_messages)
        first = await asyncio.to_thread(
            self.oracle.complete, messages, TOOL_SCHEMAS
        )

        if not first.tool_calls:
            return ChatAnswer(
                text=first.content or prompts.NO_RESPONSE_TEXT,
                conversation_id=conversation_id,
                status=FinishReason.STOP,
            )

        logger.info("Oracle requested %d tool calls", len(first.tool_calls))
        results = await self._execute_all(first.tool_calls)

        messages.append(
            ChatMessage(
                role="assistant",
                content=first.content,
                tool_calls=list(first.tool_calls),
            )
        )
        for result in results:
            messages.append(
                ChatMessage(
                    role="tool",
                    content=result.to_message_content(),
                    tool_call_id=result.tool_call_id,
                    name=result.tool_name,
                )
            )

        final = await asyncio.to_thread(
            self.oracle.complete, messages, TOOL_SCHEMAS
        )
        text = final.content
        if not text or not text.strip():
            logger.warning("Oracle returned an empty final answer")
            text = self._fallback_text(results)

        return ChatAnswer(
            text=text,
            conversation_id=conversation_id,
            status=FinishReason.TOOL_CALLS,
            tool_used=first.tool_calls[0].name,
            tool_calls=list(first.tool_calls),
            tool_results=results,
        )

    async def chat(
        self,
        query: str,
        conversation_id: str | None = None,
        prior_messages: list[ChatMessage] | None = None,
    ) -> ChatAnswer:
        """Answer *query*, using tools when the oracle asks for them."""
        conv_id = conversation_id or generate_conversation_id()
        try:
            logger.info("Processing chat request %s: %r", conv_id, query[:100])
            return await self._run(query, conv_id, prior_messages)
        except Exception as exc:
            logger.error(
                "Chat processing failed for %s: %s",
                conv_id,
                exc,
                exc_info=True,
            )
            return ChatAnswer(
                text=prompts.ERROR_TEXT,
                conversation_id=conv_id,
                status=FinishReason.STOP,
            )

    async def is_available(self) -> bool:
        """Oracle liveness; false on any failure."""
        try:
            return bool(await asyncio.to_thread(self.oracle.is_available))
        except Exception as exc:
            logger.warning("Oracle availability check failed: %s", exc)
            return False
