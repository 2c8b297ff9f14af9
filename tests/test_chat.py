import asyncio

import httpx
from conftest import json_of

from afaq_portal.chat import HISTORY_WINDOW, ChatSession
from afaq_portal.i18n import TRANSLATIONS


def test_session_opens_with_localized_welcome(portal) -> None:
    session = ChatSession(portal.context(language="ar"))
    assert len(session.messages) == 1
    assert session.messages[0].role == "assistant"
    assert session.messages[0].content == TRANSLATIONS["ar"]["chat.welcome"]


def test_send_posts_message_language_and_prior_history(portal) -> None:
    portal.on("POST", "/api/chat", json_body={"message": "Try a paper bridge first."})

    async def scenario():
        ctx = portal.context()
        session = ChatSession(ctx)
        answer = await session.send("  How do I start week 1?  ")
        await ctx.aclose()
        return session, answer

    session, answer = asyncio.run(scenario())

    assert answer.content == "Try a paper bridge first."
    assert [m.role for m in session.messages] == ["assistant", "user", "assistant"]
    [request] = portal.calls("/api/chat", "POST")
    payload = json_of(request)
    assert payload["message"] == "How do I start week 1?"
    assert payload["language"] == "en"
    assert [m["id"] for m in payload["conversationHistory"]] == ["welcome"]


def test_history_is_limited_to_recent_messages(portal) -> None:
    replies = iter(f"answer {n}" for n in range(10))

    def reply(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": next(replies)})

    portal.on("POST", "/api/chat", handler=reply)

    async def scenario() -> None:
        ctx = portal.context()
        session = ChatSession(ctx)
        for n in range(4):
            await session.send(f"question {n}")
        await ctx.aclose()

    asyncio.run(scenario())

    last = json_of(portal.calls("/api/chat")[-1])
    assert len(last["conversationHistory"]) == HISTORY_WINDOW
    assert last["conversationHistory"][-1]["content"] == "answer 2"


def test_blank_input_is_ignored(portal) -> None:
    async def scenario():
        ctx = portal.context()
        session = ChatSession(ctx)
        answer = await session.send("   ")
        await ctx.aclose()
        return session, answer

    session, answer = asyncio.run(scenario())
    assert answer is None
    assert len(session.messages) == 1
    assert portal.requests == []


def test_failure_is_answered_with_localized_apology(portal) -> None:
    portal.on("POST", "/api/chat", status=500, text="Failed to process chat message")

    async def scenario():
        ctx = portal.context(language="ar")
        session = ChatSession(ctx)
        answer = await session.send("مرحبا")
        await ctx.aclose()
        return session, answer

    session, answer = asyncio.run(scenario())
    assert answer.content == TRANSLATIONS["ar"]["chat.error"]
    assert session.pending is False
    assert json_of(portal.calls("/api/chat")[0])["language"] == "ar"
