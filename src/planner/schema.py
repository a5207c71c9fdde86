"""Plan schema (Pydantic models).

This schema is the contract between the planner and the downstream pricing/execution engine.
Every model is frozen: a plan is created once per request and never mutated after return.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MIN_STEPS = 1
MAX_STEPS = 10

_BASE_UNITS_RE = re.compile(r"[1-9][0-9]*")


class ActionType(StrEnum):
    """Kinds of on-stream effects a channel can sell."""

    sticker = "sticker"
    flash = "flash"
    sound = "sound"


class QATier(StrEnum):
    """Question priority classification (affects price and display order downstream)."""

    normal = "normal"
    priority = "priority"


class Action(BaseModel):
    """A catalog effect supplied by the caller for one request."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    action_key: str = Field(min_length=1)
    type: ActionType


class MembershipPlan(BaseModel):
    """A catalog membership plan supplied by the caller for one request."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class EffectStep(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["effect"] = "effect"
    action_key: str


class DonationStep(BaseModel):
    """A donation of an exact amount in base units (millionths of the stable unit)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["donation"] = "donation"
    amount_base_units: str
    message: str | None = None
    display_name: str | None = None

    @field_validator("amount_base_units")
    @classmethod
    def validate_base_units(cls, value: str) -> str:
        """Validate the amount is a strictly positive base-10 integer without leading zeros."""

        if not _BASE_UNITS_RE.fullmatch(value):
            raise ValueError("amount_base_units must be a positive integer string")
        return value


class QAStep(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["qa"] = "qa"
    message: str = Field(min_length=1)
    tier: QATier = QATier.normal
    display_name: str | None = None


class MembershipStep(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["membership"] = "membership"
    plan_id: str


Step = Annotated[
    EffectStep | DonationStep | QAStep | MembershipStep,
    Field(discriminator="kind"),
]


def step_signature(step: EffectStep | DonationStep | QAStep | MembershipStep) -> str:
    """Semantic identity of a step; two steps with the same signature are duplicates."""

    match step:
        case EffectStep():
            return f"effect:{step.action_key}"
        case DonationStep():
            return f"donation:{step.amount_base_units}:{step.message or ''}"
        case QAStep():
            return f"qa:{step.tier}:{step.message}"
        case MembershipStep():
            return f"membership:{step.plan_id}"
    raise TypeError(f"unknown step type: {type(step).__name__}")


class Plan(BaseModel):
    """An ordered, deduplicated sequence of chargeable steps for one instruction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    steps: tuple[Step, ...]
    summary: str
    warnings: tuple[str, ...] = ()

    @model_validator(mode="after")
    def validate_steps(self) -> Plan:
        """Enforce the step-count ceiling and signature uniqueness."""

        if not MIN_STEPS <= len(self.steps) <= MAX_STEPS:
            raise ValueError(f"a plan must have between {MIN_STEPS} and {MAX_STEPS} steps")

        signatures = [step_signature(s) for s in self.steps]
        if len(set(signatures)) != len(signatures):
            raise ValueError("plan steps must be unique")
        return self


def clamp_max_steps(value: int | None, *, default: int = 5) -> int:
    """Clamp a requested step ceiling into `[MIN_STEPS, MAX_STEPS]`."""

    requested = default if value is None else value
    return max(MIN_STEPS, min(requested, MAX_STEPS))


class ChannelCatalog(BaseModel):
    """The enabled actions and membership plans of one channel, in catalog order."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    channel_id: str
    actions: tuple[Action, ...] = ()
    membership_plans: tuple[MembershipPlan, ...] = ()
