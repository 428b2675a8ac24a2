import pytest

from concierge.services.care_check import (
    SYMPTOM_OPTIONS,
    TIMELINE_OPTIONS,
    TREATMENT_OPTIONS,
    UnknownCareOption,
    normal_check,
    options,
)


@pytest.mark.parametrize(
    "treatment,symptom,timeline,severity",
    [
        ("dermal-filler", "lumps", "day-1", "normal"),
        ("dermal-filler", "lumps", "week-2-plus", "caution"),
        ("microneedling", "swelling", "same-day", "normal"),
        ("microneedling", "swelling", "week-2-plus", "caution"),
        ("botox-dysport", "bruising", "week-1", "normal"),
        ("chemical-peel", "redness", "days-2-3", "normal"),
        ("laser", "itching", "week-1", "caution"),
        ("botox-dysport", "headache", "day-1", "normal"),
        ("botox-dysport", "asymmetry", "week-1", "normal"),
        ("botox-dysport", "asymmetry", "week-2-plus", "caution"),
        ("laser", "asymmetry", "same-day", "caution"),
    ],
)
def test_severity_table(treatment, symptom, timeline, severity):
    assert normal_check(treatment, symptom, timeline).severity == severity


@pytest.mark.parametrize("symptom", ["vision-changes", "blanching", "severe-pain", "fever"])
def test_red_flag_symptoms_win_at_any_time(symptom):
    for timeline in TIMELINE_OPTIONS:
        res = normal_check("dermal-filler", symptom, timeline)
        assert res.severity == "red-flag"
        assert any("911" in s for s in res.next_steps)


def test_every_combination_resolves():
    for t in TREATMENT_OPTIONS:
        for s in SYMPTOM_OPTIONS:
            for tl in TIMELINE_OPTIONS:
                res = normal_check(t, s, tl)
                assert res.severity in ("normal", "caution", "red-flag")
                assert res.title and res.guidance and res.next_steps


@pytest.mark.parametrize(
    "args",
    [
        ("tattoo", "swelling", "day-1"),
        ("laser", "sneezing", "day-1"),
        ("laser", "swelling", "yesterday"),
    ],
)
def test_unknown_options_raise(args):
    with pytest.raises(UnknownCareOption):
        normal_check(*args)


def test_options_shape():
    opts = options()
    assert [o["id"] for o in opts["treatments"]] == list(TREATMENT_OPTIONS)
    assert set(opts) == {"treatments", "symptoms", "timelines"}
    assert all(o["label"] for o in opts["symptoms"])
