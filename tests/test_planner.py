"""Tests for end-to-end plan assembly."""

from __future__ import annotations

import pytest

from src.planner import EmptyInputError, NoViablePlanError, PlannerError, plan_agent
from src.planner.assembler import NO_AMOUNT_WARNING, NO_INTENT_WARNING
from src.planner.schema import (
    Action,
    ActionType,
    DonationStep,
    EffectStep,
    MembershipPlan,
    MembershipStep,
    QAStep,
    QATier,
)

STICKER = Action(action_key="s1", type=ActionType.sticker)
FLASH = Action(action_key="f1", type=ActionType.flash)
SOUND = Action(action_key="h1", type=ActionType.sound)
PLANS = [MembershipPlan(id="p1", name="Gold"), MembershipPlan(id="p2", name="Silver")]


@pytest.mark.parametrize("text", ["", "   ", "\n\t "])
def test_empty_input(text: str) -> None:
    with pytest.raises(EmptyInputError) as exc_info:
        plan_agent(text)
    assert str(exc_info.value) == "Empty input"


def test_no_keywords_defaults_to_whole_input_question() -> None:
    plan = plan_agent("  hello\n  there ")

    assert plan.steps == (QAStep(message="hello there", tier=QATier.normal),)
    assert plan.summary == "qa(normal)"
    assert plan.warnings == (NO_INTENT_WARNING,)


def test_default_question_uses_global_tier() -> None:
    plan = plan_agent("urgent: why is the stream lagging")

    assert plan.steps == (QAStep(message="urgent: why is the stream lagging", tier=QATier.priority),)


def test_effect_precedes_donation_in_text_order() -> None:
    plan = plan_agent("flash then donate $2", actions=[FLASH])

    assert plan.steps == (
        EffectStep(action_key="f1"),
        DonationStep(amount_base_units="2000000"),
    )
    assert plan.summary == "effect(f1) → donation(2000000)"
    assert plan.warnings == ()


def test_repeated_donation_is_deduplicated() -> None:
    plan = plan_agent("donate $1 donate $1")

    assert plan.steps == (DonationStep(amount_base_units="1000000"),)


def test_different_donations_are_kept() -> None:
    plan = plan_agent("donate 1 and donate 2")

    assert [s.amount_base_units for s in plan.steps] == ["1000000", "2000000"]


def test_donation_message_comes_from_quoted_text() -> None:
    plan = plan_agent('donate 3.5 usdc "great stream!"')

    assert plan.steps == (DonationStep(amount_base_units="3500000", message="great stream!"),)


def test_donation_quote_outside_window_is_ignored() -> None:
    filler = "x" * 70
    plan = plan_agent(f'donate 1 {filler} "late"')

    assert plan.steps == (DonationStep(amount_base_units="1000000"),)


def test_donation_without_amount_uses_default() -> None:
    plan = plan_agent("tip the streamer")

    assert plan.steps == (DonationStep(amount_base_units="50000"),)
    assert plan.warnings == (NO_AMOUNT_WARNING,)


def test_unparseable_donation_amount_uses_default() -> None:
    plan = plan_agent("donate 0 please")

    assert plan.steps == (DonationStep(amount_base_units="50000"),)
    assert plan.warnings == ('Could not parse donation amount "0", defaulted to 0.05',)


def test_korean_donation() -> None:
    plan = plan_agent("후원 5000 감사합니다")

    assert plan.steps == (DonationStep(amount_base_units="5000000000"),)


def test_explicit_key_wins_over_type_heuristic() -> None:
    actions = [Action(action_key="sticker_00", type=ActionType.sticker),
               Action(action_key="sticker_01", type=ActionType.sticker)]

    plan = plan_agent("play sticker_01 please", actions=actions)

    assert plan.steps == (EffectStep(action_key="sticker_01"),)
    assert plan.summary == "effect(sticker_01)"


def test_send_is_a_donation_cue_even_next_to_an_explicit_key() -> None:
    actions = [Action(action_key="sticker_01", type=ActionType.sticker)]

    plan = plan_agent("send a sticker_01 please", actions=actions)

    assert plan.steps[-1] == EffectStep(action_key="sticker_01")
    assert plan.steps[0].kind == "donation"


def test_explicit_key_and_type_keyword_on_same_span_collapse() -> None:
    actions = [Action(action_key="airhorn", type=ActionType.sound)]

    plan = plan_agent("airhorn now", actions=actions)

    assert plan.steps == (EffectStep(action_key="airhorn"),)


def test_repeated_effects_are_deduplicated() -> None:
    plan = plan_agent("flash flash blink", actions=[FLASH])

    assert plan.steps == (EffectStep(action_key="f1"),)


def test_effect_without_catalog_is_not_viable() -> None:
    with pytest.raises(NoViablePlanError) as exc_info:
        plan_agent("flash please")
    assert str(exc_info.value) == "Could not build a plan from input"


def test_question_after_separator() -> None:
    plan = plan_agent("ask: what is your setup?")

    assert plan.steps == (QAStep(message="what is your setup?", tier=QATier.normal),)


def test_priority_question_with_quoted_text() -> None:
    plan = plan_agent('urgent question "when is the next stream?" thanks')

    assert plan.steps == (QAStep(message="when is the next stream?", tier=QATier.priority),)
    assert plan.summary == "qa(priority)"


def test_korean_question() -> None:
    plan = plan_agent("질문 방송 언제 해요?")

    assert plan.steps == (QAStep(message="방송 언제 해요?", tier=QATier.normal),)


@pytest.mark.parametrize("text", ["question", "ask —", "q&a:"])
def test_question_without_text_is_not_viable(text: str) -> None:
    with pytest.raises(NoViablePlanError):
        plan_agent(text)


def test_membership_by_plan_name() -> None:
    plan = plan_agent("I want to subscribe to gold", membership_plans=PLANS)

    assert plan.steps == (MembershipStep(plan_id="p1"),)
    assert plan.summary == "membership"


def test_membership_defaults_to_first_plan() -> None:
    plan = plan_agent("become a member", membership_plans=list(reversed(PLANS)))

    assert plan.steps == (MembershipStep(plan_id="p2"),)


def test_membership_without_plans_is_not_viable() -> None:
    with pytest.raises(NoViablePlanError):
        plan_agent("subscribe")


def test_mixed_instruction_keeps_text_order() -> None:
    plan = plan_agent("tip 2 then ask: why?")

    assert plan.summary == "donation(2000000) → qa(normal)"
    assert plan.steps[1] == QAStep(message="why?", tier=QATier.normal)


@pytest.mark.parametrize(
    ("max_steps", "expected"),
    [(None, 3), (2, 2), (0, 1), (-5, 1), (99, 3)],
)
def test_step_ceiling_is_clamped(max_steps: int | None, expected: int) -> None:
    plan = plan_agent("flash sticker horn", actions=[STICKER, FLASH, SOUND], max_steps=max_steps)

    assert len(plan.steps) == expected
    assert plan.steps[0] == EffectStep(action_key="f1")


def test_ceiling_never_exceeds_ten() -> None:
    text = " ".join(f"donate {n}" for n in range(1, 15))

    plan = plan_agent(text, max_steps=50)

    assert len(plan.steps) == 10
    assert plan.steps[-1] == DonationStep(amount_base_units="10000000")


def test_planning_is_deterministic() -> None:
    args = ("flash, donate 1 'hi', ask: why? subscribe", [FLASH, SOUND], PLANS)

    assert plan_agent(*args) == plan_agent(*args)


@pytest.mark.parametrize(
    "text",
    [
        "!!!",
        "donate donate donate",
        "'",
        "“unclosed",
        "$$$ 0.0000001",
        "ask ''",
        "tip .",
        "🔥🔥🔥 flash 🔥",
        "sub sub sub membership member",
        "q&a - - -",
        "x" * 2000,
    ],
)
def test_arbitrary_text_yields_plan_or_planner_error(text: str) -> None:
    try:
        plan = plan_agent(text, actions=[STICKER], membership_plans=PLANS)
    except PlannerError:
        return
    assert 1 <= len(plan.steps) <= 5


def test_latin_cue_with_korean_particle_is_an_effect() -> None:
    plan = plan_agent("sticker를 보내줘", actions=[STICKER])

    assert plan.steps == (EffectStep(action_key="s1"),)
    assert plan.warnings == ()


def test_priority_keyword_with_korean_suffix_sets_tier() -> None:
    plan = plan_agent("urgent하게 질문 방송 언제?")

    assert plan.steps == (QAStep(message="방송 언제?", tier=QATier.priority),)
