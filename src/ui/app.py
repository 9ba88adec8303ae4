# src/ui/app.py

"""Terminal chat UI for the shop_assistant service."""

import asyncio
import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    RichLog,
    Static,
)

from src.models.conversation import ChatAnswer, ChatMessage
from src.models.errors import ShopAssistantError
from src.services.tool_orchestrator import ToolOrchestrator

logger = logging.getLogger("shop_assistant.ui")


class ShopAssistantApp(App[object]):
    """Chat with the shopping assistant from the terminal."""

    CSS = """
    #transcript {
        height: 1fr;
        border: round $primary;
    }
    #tools_table {
        height: 8;
    }
    #chat_bar {
        height: auto;
    }
    #chat_input {
        width: 1fr;
    }
    #status {
        height: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "new_conversation", "New chat"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, orchestrator: ToolOrchestrator | None = None) -> None:
        super().__init__()
        self.orchestrator = orchestrator
        self.history: list[ChatMessage] = []
        self.conversation_id: str | None = None
        self.last_answer: ChatAnswer | None = None

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Container(
            Static("🛍️  Shopping Assistant", id="title"),
            RichLog(id="transcript", wrap=True, markup=True),
            cast(
                DataTable[str | Text],
                DataTable(id="tools_table", zebra_stripes=True),
            ),
            Horizontal(
                Input(
                    placeholder="Ask about products or currencies...",
                    id="chat_input",
                ),
                Button("Send", variant="primary", id="send_btn"),
                id="chat_bar",
            ),
            Static("Ready", id="status"),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the tool results table columns on startup."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#tools_table", DataTable),
        )
        table.add_columns("Tool", "Status", "Result")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send_btn":
            await self.send_message()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "chat_input":
            await self.send_message()

    async def _ensure_orchestrator(self) -> ToolOrchestrator | None:
        if self.orchestrator is None:
            try:
                self.orchestrator = await asyncio.to_thread(
                    ToolOrchestrator.from_settings
                )
            except ShopAssistantError as exc:
                logger.error("Could not start assistant: %s", exc)
                self.notify(f"Startup failed: {exc}", severity="error")
                return None
        return self.orchestrator

    async def send_message(self) -> None:
        """Send the input text as one chat turn."""
        chat_input = self.query_one("#chat_input", Input)
        query = chat_input.value.strip()
        if not query:
            self.notify("Please enter a message", severity="warning")
            return

        orchestrator = await self._ensure_orchestrator()
        if orchestrator is None:
            return

        transcript = self.query_one("#transcript", RichLog)
        status = self.query_one("#status", Static)
        chat_input.value = ""
        transcript.write(Text(f"You: {query}", style="bold"))
        status.update("💭 Thinking...")

        answer = await orchestrator.chat(
            query, self.conversation_id, list(self.history)
        )
        self.last_answer = answer
        self.conversation_id = answer.conversation_id
        self.history.append(ChatMessage(role="user", content=query))
        self.history.append(ChatMessage(role="assistant", content=answer.text))

        transcript.write(Text(f"Assistant: {answer.text}"))
        self.populate_tools(answer)
        status.update(
            f"✅ {answer.status.value}"
            + (f" via {answer.tool_used}" if answer.tool_used else "")
        )

    def populate_tools(self, answer: ChatAnswer) -> None:
        """Fill the table with the tool results of the last turn."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#tools_table", DataTable),
        )
        table.clear()
        for r in answer.tool_results:
            table.add_row(
                r.tool_name,
                Text("OK", style="green") if r.success
                else Text("FAILED", style="red"),
                r.to_message_content()[:120],
            )

    def action_new_conversation(self) -> None:
        """Forget the history and start a fresh conversation."""
        self.history = []
        self.conversation_id = None
        self.last_answer = None
        self.query_one("#transcript", RichLog).clear()
        cast(
            DataTable[str | Text],
            self.query_one("#tools_table", DataTable),
        ).clear()
        self.query_one("#status", Static).update("New conversation")
        logger.info("Started a new conversation")
