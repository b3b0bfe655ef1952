"""POST a question to the knowledge-base webhook and normalize every outcome into a ChatResponse."""
from __future__ import annotations

import asyncio
import logging

import httpx

from kb_chat.core.config.loader import load_chat_config
from kb_chat.core.config.models import ChatConfig
from kb_chat.core.contracts.chat import ChatRequest, ChatResponse, Market, Product
from kb_chat.core.exceptions import ChatRequestError, EmptyResponseError

log = logging.getLogger("kb_client")

FALLBACK_ANSWER = "Failed to get response. Please try again."
EMPTY_RESPONSE_ERROR = "Empty response after retries"


async def _post_with_retries(client: httpx.AsyncClient, url: str, payload: dict, config: ChatConfig) -> ChatResponse:
    attempts = config.max_attempts
    for attempt in range(1, attempts + 1):
        r = await client.post(url, json=payload)
        if not r.is_success:
            raise ChatRequestError(f"Chat request failed: {r.status_code} {r.reason_phrase}")
        if r.text.strip():
            return ChatResponse.model_validate(r.json())
        if attempt == attempts:
            break
        log.warning(
            "Empty response from %s (attempt %s/%s), retrying in %ss",
            url, attempt, attempts, config.retry_delay_seconds,
        )
        await asyncio.sleep(config.retry_delay_seconds)
    raise EmptyResponseError(EMPTY_RESPONSE_ERROR)


async def send_chat_message(
    question: str,
    market: Market = "all",
    product: Product = "all",
    session_id: str | None = None,
    *,
    config: ChatConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatResponse:
    """Ask the webhook a question. Never raises: failures come back with success=False and error set.

    Non-2xx answers fail at once; 2xx answers with an empty body are retried
    up to ``config.max_retries`` times, ``config.retry_delay_seconds`` apart.
    """
    if config is None:
        config = load_chat_config()
    url = config.chat_url
    try:
        payload = ChatRequest(question=question, market=market, product=product, session_id=session_id).to_payload()
        preview = (question[:100] + "…") if len(question) > 100 else question
        log.info("→ %s [%s/%s]: %s", url, market, product, preview)
        async with httpx.AsyncClient(timeout=config.timeout_seconds, transport=transport) as client:
            response = await _post_with_retries(client, url, payload, config)
        log.info("← %s: success=%s (%s chars)", url, response.success, len(response.answer))
        return response
    except Exception as e:
        log.error("Chat error: %s", e)
        return ChatResponse(success=False, answer=FALLBACK_ANSWER, error=str(e) or type(e).__name__)
