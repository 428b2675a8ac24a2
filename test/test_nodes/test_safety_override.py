import pytest
from pocketflow import AsyncFlow

from concierge.runtime.nodes.safety_override import SafetyOverrideNode
from concierge.services.guardrails import compliance_footer, evaluate


@pytest.mark.asyncio
async def test_override_uses_guardrail_reply():
    guard = evaluate("chest pain after my IV", "education")
    shared = {
        "user_last": "chest pain after my IV",
        "guardrail": guard,
        "persona_id_requested": "peppi",
        "escalated": "medication_interaction",
    }
    node = SafetyOverrideNode()
    flow = AsyncFlow(start=node)
    node.successors = {}  # end here for unit test
    action = await flow.run_async(shared)

    assert action == "ok"
    assert shared["assistant_reply"] == guard.reply
    assert shared["used"] == "safety_override"
    assert shared["persona_id_used"] == "ryan"
    assert shared["escalated"] is None


@pytest.mark.asyncio
async def test_override_without_guardrail_result_still_answers():
    shared = {"user_last": "help"}
    node = SafetyOverrideNode()
    flow = AsyncFlow(start=node)
    node.successors = {}
    await flow.run_async(shared)

    assert shared["assistant_reply"].startswith("Dr. Ryan here")
    assert shared["assistant_reply"].endswith(compliance_footer())
