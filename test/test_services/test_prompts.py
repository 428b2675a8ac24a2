from concierge.services.personas import get_persona
from concierge.services.prompts import GLOBAL_SAFETY_RULES, MODULE_NOTES, base_system_prompt


def test_prompt_contains_persona_scope_and_close():
    p = get_persona("beau-tox")
    prompt = base_system_prompt("beau-tox", "education")

    assert prompt.startswith(f"You are {p.display_name} ({p.role}) for Hello Gorgeous Med Spa.")
    assert MODULE_NOTES["education"] in prompt
    for t in p.allowed_topics + p.restricted_topics:
        assert f"- {t}" in prompt
    for r in GLOBAL_SAFETY_RULES:
        assert f"- {r}" in prompt
    assert f'End every reply with: "{p.safe_close}"' in prompt
    assert prompt.endswith(f'Then include this disclaimer verbatim: "{p.disclaimer}"')


def test_prompt_is_deterministic():
    assert base_system_prompt("harmony", "postcare") == base_system_prompt("harmony", "postcare")


def test_module_note_changes_with_module():
    assert MODULE_NOTES["postcare"] in base_system_prompt("ryan", "postcare")
    assert MODULE_NOTES["postcare"] not in base_system_prompt("ryan", "education")


def test_unknown_module_and_persona_fall_back():
    prompt = base_system_prompt("nobody", None)
    assert prompt.startswith("You are Peppi")
    assert MODULE_NOTES["education"] in prompt


def test_site_and_booking_url_are_configurable():
    prompt = base_system_prompt("founder", site_name="Test Spa", booking_url="https://example.test/book")
    assert "for Test Spa." in prompt
    assert "offer this link: https://example.test/book" in prompt
