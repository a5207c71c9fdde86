"""Diagnostic one-line rendering of a step sequence."""

from __future__ import annotations

from collections.abc import Sequence

from src.planner.schema import DonationStep, EffectStep, MembershipStep, QAStep

EMPTY_SUMMARY = "No steps"
SEPARATOR = " → "


def _label(step: EffectStep | DonationStep | QAStep | MembershipStep) -> str:
    match step:
        case EffectStep():
            return f"effect({step.action_key})"
        case DonationStep():
            return f"donation({step.amount_base_units})"
        case QAStep():
            return f"qa({step.tier})"
        case MembershipStep():
            return "membership"
    raise TypeError(f"unknown step type: {type(step).__name__}")


def build_summary(steps: Sequence[EffectStep | DonationStep | QAStep | MembershipStep]) -> str:
    if not steps:
        return EMPTY_SUMMARY
    return SEPARATOR.join(_label(s) for s in steps)
