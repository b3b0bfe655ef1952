"""Tests for conversations: session ids, history and the ask turn."""

import json
import uuid

import httpx
import pytest

from kb_chat.chat.session import APOLOGY, Conversation, new_session_id
from kb_chat.core.config.models import ChatConfig
from kb_chat.core.contracts.chat import ChatMessage


@pytest.fixture
def config():
    return ChatConfig(base_url="https://hooks.test/webhook", retry_delay_seconds=0)


def webhook_answering(body, seen: list):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        if isinstance(body, int):
            return httpx.Response(body)
        return httpx.Response(200, json=body)
    return httpx.MockTransport(handler)


def test_new_session_id_is_a_uuid():
    first, second = new_session_id(), new_session_id()
    assert str(uuid.UUID(first)) == first
    assert first != second


class TestConversation:
    """A conversation keeps one session id across turns until reset."""

    @pytest.mark.asyncio
    async def test_ask_records_both_sides(self, config):
        seen = []
        body = {
            "success": True,
            "answer": "Desktop campaigns run weekly.\n\n**Sources:**\n- *Campaign Rules*\n- Search_Knowledge_Base Tool",
            "sources": [{"retrievedContext": {"text": "Weekly cadence.", "title": "Rules"}}, {}],
        }
        conversation = Conversation(config=config, transport=webhook_answering(body, seen))

        reply = await conversation.ask("How often do campaigns run?", "de", "desktop")

        assert [m.role for m in conversation.history] == ["user", "model"]
        assert conversation.history[0].text == "How often do campaigns run?"
        assert reply is conversation.history[1]
        assert reply.text == "Desktop campaigns run weekly."
        assert reply.source_names == ["Campaign Rules"]
        assert len(reply.grounding_chunks) == 2
        assert reply.grounding_texts() == ["Weekly cadence."]
        assert conversation.last_error is None
        assert seen[0]["sessionId"] == conversation.session_id
        assert seen[0]["market"] == "de"

    @pytest.mark.asyncio
    async def test_session_id_reused_across_turns(self, config):
        seen = []
        conversation = Conversation(
            config=config,
            session_id="fixed-session",
            transport=webhook_answering({"success": True, "answer": "Yes."}, seen),
        )

        await conversation.ask("One?")
        await conversation.ask("Two?")

        assert [b["sessionId"] for b in seen] == ["fixed-session", "fixed-session"]
        assert len(conversation.history) == 4

    @pytest.mark.asyncio
    async def test_failure_appends_apology(self, config, caplog):
        """The user sees the fixed apology; the error detail goes to the log."""
        conversation = Conversation(config=config, transport=webhook_answering(503, []))

        reply = await conversation.ask("Anything?")

        assert reply.role == "model"
        assert reply.text == APOLOGY
        assert reply.source_names == []
        assert "503" in conversation.last_error
        assert "503" not in reply.text
        assert any("503" in r.getMessage() for r in caplog.records if r.name == "conversation")

    @pytest.mark.asyncio
    async def test_upstream_reported_failure_appends_apology(self, config):
        body = {"success": False, "answer": "Internal stuff went wrong"}
        conversation = Conversation(config=config, transport=webhook_answering(body, []))

        reply = await conversation.ask("Anything?")

        assert reply.text == APOLOGY
        assert conversation.last_error == "Unknown error"

    @pytest.mark.asyncio
    async def test_reset(self, config):
        seen = []
        conversation = Conversation(config=config, transport=webhook_answering({"success": True, "answer": "Ok."}, seen))
        await conversation.ask("First")
        old_id = conversation.session_id

        new_id = conversation.reset()
        await conversation.ask("Second")

        assert new_id != old_id
        assert conversation.session_id == new_id
        assert [m.text for m in conversation.history] == ["Second", "Ok."]
        assert seen[-1]["sessionId"] == new_id


class TestGroundingDocuments:
    """Numbered titles and per-document text for the chunks attached to a reply."""

    @pytest.fixture
    def reply(self):
        return ChatMessage.model_validate(
            {
                "role": "model",
                "text": "Answer.",
                "grounding_chunks": [
                    {"retrievedContext": {"text": "Weekly cadence.", "title": "Rules"}},
                    {"retrievedContext": {"text": 42, "title": ""}},
                    {},
                ],
            }
        )

    def test_titles_fall_back_to_numbers(self, reply):
        assert reply.grounding_titles() == ["Rules", "Source 2", "Source 3"]

    def test_texts_skip_non_text_values(self, reply):
        assert reply.grounding_texts() == ["Weekly cadence."]

    @pytest.mark.parametrize("number,text", [(1, "Weekly cadence."), (2, None), (3, None), (0, None), (4, None)])
    def test_text_by_number(self, reply, number, text):
        assert reply.grounding_text(number) == text
