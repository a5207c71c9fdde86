"""Plan assembly: turn scanned occurrences into an ordered, bounded, deduplicated plan.

The assembler is a pure function of `(instruction, actions, membership_plans, max_steps)`:
    - occurrences are processed in text order,
    - each occurrence contributes at most one step,
    - duplicate steps (same semantic signature) are dropped,
    - heuristic fallbacks are reported as warnings rather than errors.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.planner.amounts import DEFAULT_DONATION_BASE_UNITS, AmountError, parse_amount_to_base_units
from src.planner.dictionaries import PRIORITY_KEYWORDS
from src.planner.normalize import normalize_instruction
from src.planner.picker import pick_action_key
from src.planner.scanner import NoIntentFound, Occurrence, OccurrenceKind, scan_occurrences
from src.planner.schema import (
    Action,
    DonationStep,
    EffectStep,
    MembershipPlan,
    MembershipStep,
    Plan,
    QAStep,
    QATier,
    clamp_max_steps,
    step_signature,
)
from src.planner.summary import build_summary
from src.planner.text import (
    extract_first_quoted,
    extract_leading_quoted,
    find_amount_candidate,
    strip_leading_separator,
)

logger = logging.getLogger(__name__)

DONATION_WINDOW_CHARS = 60
DEFAULT_MAX_STEPS = 5

NO_INTENT_WARNING = "No intent keywords found; defaulted to Q&A"
NO_AMOUNT_WARNING = "No donation amount found, defaulted to 0.05"

AnyStep = EffectStep | DonationStep | QAStep | MembershipStep


class PlannerError(ValueError):
    """Raised when an instruction cannot be turned into a plan."""


class EmptyInputError(PlannerError):
    def __init__(self) -> None:
        super().__init__("Empty input")


class NoViablePlanError(PlannerError):
    def __init__(self) -> None:
        super().__init__("Could not build a plan from input")


def determine_qa_tier(input_lower: str) -> QATier:
    """Question tier is decided from the whole instruction, not from the question text."""

    return QATier.priority if PRIORITY_KEYWORDS.search(input_lower) else QATier.normal


def _effect_step(occ: Occurrence, input_lower: str, actions: Sequence[Action]) -> EffectStep | None:
    action_key = occ.action_key or pick_action_key(input_lower, actions, occ.desired_type)
    if action_key is None:
        return None
    return EffectStep(action_key=action_key)


def _donation_step(occ: Occurrence, text: str, warnings: list[str]) -> DonationStep:
    window = text[occ.end: occ.end + DONATION_WINDOW_CHARS]

    base_units = DEFAULT_DONATION_BASE_UNITS
    candidate = find_amount_candidate(window)
    if candidate is None:
        warnings.append(NO_AMOUNT_WARNING)
    else:
        try:
            base_units = parse_amount_to_base_units(candidate)
        except AmountError as exc:
            logger.debug("donation amount rejected raw=%r reason=%s", candidate, exc)
            warnings.append(f'Could not parse donation amount "{candidate}", defaulted to 0.05')

    return DonationStep(amount_base_units=base_units, message=extract_first_quoted(window))


def _qa_step(occ: Occurrence, text: str, tier: QATier) -> QAStep | None:
    remainder = text[occ.end:].strip()
    message = extract_leading_quoted(remainder) or strip_leading_separator(remainder)
    if not message:
        return None
    return QAStep(message=message, tier=tier)


def _membership_step(input_lower: str, plans: Sequence[MembershipPlan]) -> MembershipStep | None:
    if not plans:
        return None
    chosen = next((p for p in plans if p.name.lower() in input_lower), plans[0])
    return MembershipStep(plan_id=chosen.id)


def plan_agent(
        instruction: str,
        actions: Sequence[Action] = (),
        membership_plans: Sequence[MembershipPlan] = (),
        max_steps: int | None = None,
) -> Plan:
    """Plan a viewer instruction into chargeable steps.

    Raises:
        EmptyInputError: If the instruction is blank after normalization.
        NoViablePlanError: If cues were found but none produced a usable step.
    """

    limit = clamp_max_steps(max_steps, default=DEFAULT_MAX_STEPS)

    text = normalize_instruction(instruction)
    if not text:
        raise EmptyInputError()

    input_lower = text.lower()
    tier = determine_qa_tier(input_lower)

    try:
        occurrences = scan_occurrences(text, actions)
    except NoIntentFound:
        # Lowest-friction behavior: treat the whole instruction as a question.
        steps = (QAStep(message=text, tier=tier),)
        return Plan(steps=steps, summary=build_summary(steps), warnings=(NO_INTENT_WARNING,))

    steps: list[AnyStep] = []
    warnings: list[str] = []
    seen: set[str] = set()

    for occ in occurrences:
        if len(steps) >= limit:
            break

        step: AnyStep | None = None
        match occ.kind:
            case OccurrenceKind.effect:
                step = _effect_step(occ, input_lower, actions)
            case OccurrenceKind.donation:
                step = _donation_step(occ, text, warnings)
            case OccurrenceKind.qa:
                step = _qa_step(occ, text, tier)
            case OccurrenceKind.membership:
                step = _membership_step(input_lower, membership_plans)

        if step is None:
            continue

        signature = step_signature(step)
        if signature in seen:
            continue
        seen.add(signature)
        steps.append(step)

    if not steps:
        raise NoViablePlanError()

    return Plan(steps=tuple(steps), summary=build_summary(steps), warnings=tuple(warnings))
