"""Tests for the frozen plan schema and its invariants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.planner.schema import (
    Action,
    DonationStep,
    EffectStep,
    MembershipStep,
    Plan,
    QAStep,
    QATier,
    clamp_max_steps,
    step_signature,
)
from src.planner.summary import EMPTY_SUMMARY, build_summary


@pytest.mark.parametrize("value", ["0", "-5", "1.5", "007", "", "1e6"])
def test_donation_amount_must_be_positive_integer_string(value: str) -> None:
    with pytest.raises(ValidationError):
        DonationStep(amount_base_units=value)


def test_action_type_is_restricted() -> None:
    with pytest.raises(ValidationError):
        Action.model_validate({"action_key": "confetti", "type": "confetti"})


def test_plan_rejects_duplicate_steps() -> None:
    with pytest.raises(ValidationError):
        Plan(steps=(EffectStep(action_key="a"), EffectStep(action_key="a")), summary="x")


@pytest.mark.parametrize("count", [0, 11])
def test_plan_step_count_bounds(count: int) -> None:
    steps = tuple(EffectStep(action_key=f"k{i}") for i in range(count))
    with pytest.raises(ValidationError):
        Plan(steps=steps, summary="x")


def test_plan_is_immutable() -> None:
    plan = Plan(steps=(MembershipStep(plan_id="p1"),), summary="membership")
    with pytest.raises(ValidationError):
        plan.summary = "changed"  # type: ignore[misc]


def test_plan_json_carries_step_kinds() -> None:
    plan = Plan(
        steps=(DonationStep(amount_base_units="50000"), QAStep(message="hi", tier=QATier.priority)),
        summary="donation(50000) → qa(priority)",
    )

    dumped = plan.model_dump(mode="json")

    assert [s["kind"] for s in dumped["steps"]] == ["donation", "qa"]
    assert dumped["steps"][1]["tier"] == "priority"
    assert Plan.model_validate(dumped) == plan


def test_step_signatures() -> None:
    assert step_signature(EffectStep(action_key="k")) == "effect:k"
    assert step_signature(DonationStep(amount_base_units="50000")) == "donation:50000:"
    assert step_signature(DonationStep(amount_base_units="1", message="hi")) == "donation:1:hi"
    assert step_signature(QAStep(message="why", tier=QATier.normal)) == "qa:normal:why"
    assert step_signature(MembershipStep(plan_id="p1")) == "membership:p1"


@pytest.mark.parametrize(("value", "expected"), [(None, 5), (0, 1), (-3, 1), (7, 7), (11, 10)])
def test_clamp_max_steps(value: int | None, expected: int) -> None:
    assert clamp_max_steps(value) == expected


def test_summary_labels_and_placeholder() -> None:
    steps = [
        EffectStep(action_key="boom"),
        DonationStep(amount_base_units="1000000"),
        QAStep(message="hi"),
        MembershipStep(plan_id="p1"),
    ]

    assert build_summary(steps) == "effect(boom) → donation(1000000) → qa(normal) → membership"
    assert build_summary([]) == EMPTY_SUMMARY
