from concierge.services.personas import PERSONAS, PersonaRegistry
from concierge.services.routing import route_persona_id


def test_in_scope_question_keeps_persona():
    d = route_persona_id("beau-tox", "How long does Botox last?")
    assert d.persona_id == "beau-tox"
    assert d.reason is None


def test_pregnancy_question_escalates_to_ryan():
    d = route_persona_id("beau-tox", "Can I get Botox while pregnant?")
    assert d.persona_id == "ryan"
    assert d.reason == "pregnancy"


def test_medication_question_escalates_to_ryan():
    d = route_persona_id("peppi", "I'm on warfarin, can I do IV therapy?")
    assert d.persona_id == "ryan"
    assert d.reason == "medication_interaction"


def test_ryan_never_escalates():
    d = route_persona_id("ryan", "Is it safe while breastfeeding?")
    assert d.persona_id == "ryan"
    assert d.reason is None


def test_unknown_persona_resolves_to_default():
    d = route_persona_id("nobody", "Tell me about supplements")
    assert d.persona_id == "peppi"


def test_empty_text_keeps_persona():
    assert route_persona_id("harmony", "   ").persona_id == "harmony"


def test_no_escalation_without_safety_persona_in_catalog():
    reg = PersonaRegistry(tuple(p for p in PERSONAS if p.id != "ryan"), default_id="peppi")
    d = route_persona_id("beau-tox", "Can I get Botox while pregnant?", registry=reg)
    assert d.persona_id == "beau-tox"
    assert d.reason is None
