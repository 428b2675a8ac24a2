import pytest
from pocketflow import AsyncFlow

from concierge.config import Settings
from concierge.runtime.nodes.booking_hint import BookingHintNode


async def _run(shared):
    node = BookingHintNode()
    flow = AsyncFlow(start=node)
    node.successors = {}  # end here for unit test
    return await flow.run_async(shared)


@pytest.mark.asyncio
async def test_booking_link_appended_when_user_wants_to_book():
    shared = {
        "assistant_reply": "Happy to help.",
        "user_last": "How much does lip filler cost?",
        "persona_id_used": "filla-grace",
        "settings": Settings(booking_url="https://example.test/book"),
    }
    assert await _run(shared) == "ok"
    assert shared["assistant_reply"] == "Happy to help.\n\nIf you'd like, you can book online here: https://example.test/book"


@pytest.mark.asyncio
async def test_persona_trigger_phrase_appends_link():
    shared = {
        "assistant_reply": "Great question.",
        "user_last": "I'd like to start pellets soon",
        "persona_id_used": "harmony",
        "settings": Settings(booking_url="https://example.test/book"),
    }
    await _run(shared)
    assert shared["assistant_reply"].endswith("https://example.test/book")


@pytest.mark.asyncio
async def test_no_link_for_plain_questions():
    shared = {"assistant_reply": "Answer.", "user_last": "What is a peel?", "persona_id_used": "peppi"}
    await _run(shared)
    assert shared["assistant_reply"] == "Answer."
