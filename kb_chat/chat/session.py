"""One conversation: a session id, its message history, and the send → extract → append turn."""
from __future__ import annotations

import logging
from uuid import uuid4

import httpx

from kb_chat.chat.client import send_chat_message
from kb_chat.chat.sources import extract_sources
from kb_chat.core.config.models import ChatConfig
from kb_chat.core.contracts.chat import ChatMessage, Market, Product

log = logging.getLogger("conversation")

APOLOGY = "Sorry, I encountered an error. Please try again."


def new_session_id() -> str:
    return str(uuid4())


class Conversation:
    def __init__(
        self,
        config: ChatConfig | None = None,
        session_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.transport = transport
        self.session_id = session_id or new_session_id()
        self.history: list[ChatMessage] = []
        self.last_error: str | None = None

    async def ask(self, question: str, market: Market = "all", product: Product = "all") -> ChatMessage:
        """Send one question and append both sides of the exchange to the history."""
        self.history.append(ChatMessage(role="user", text=question))
        result = await send_chat_message(
            question, market, product, self.session_id, config=self.config, transport=self.transport
        )
        self.last_error = None if result.success else (result.error or "Unknown error")
        if result.success:
            extracted = extract_sources(result.answer)
            reply = ChatMessage(
                role="model",
                text=extracted.clean_text,
                source_names=extracted.sources,
                grounding_chunks=result.sources or [],
            )
        else:
            log.error("Failed to get response (session %s): %s", self.session_id[:8], result.error)
            reply = ChatMessage(role="model", text=APOLOGY)
        self.history.append(reply)
        return reply

    def reset(self) -> str:
        """Start over with a new session id and an empty history."""
        self.session_id = new_session_id()
        self.history = []
        self.last_error = None
        log.info("New conversation %s", self.session_id[:8])
        return self.session_id
