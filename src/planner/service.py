"""Request/response boundary around the planner.

Transports (the bot, or any other host) hand a decoded request payload and the channel's catalog to
`handle_plan_request` and get back a `PlanResponse`. Invalid requests and planner failures are
reported in the response; they never raise.
"""

from __future__ import annotations

import logging
import math
from time import monotonic
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.planner.assembler import DEFAULT_MAX_STEPS, PlannerError, plan_agent
from src.planner.schema import ChannelCatalog, Plan

logger = logging.getLogger(__name__)

DEFAULT_MAX_INSTRUCTION_LENGTH = 1000


class PlanRequest(BaseModel):
    """A planning request as received from a transport."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    input: str
    max_steps: int | None = Field(default=None, alias="maxSteps")

    @field_validator("max_steps", mode="before")
    @classmethod
    def coerce_max_steps(cls, value: Any) -> int | None:
        """Keep numeric values (fractions round up); anything else means "use the default"."""

        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and math.isfinite(value):
            return math.ceil(value)
        return None

    @field_validator("input")
    @classmethod
    def validate_input(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("input must not be blank")
        return value


class PlanResponse(BaseModel):
    """Outcome of one planning request: a plan, or a short human-readable error."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    plan: Plan | None = None
    error: str | None = None


def handle_plan_request(
        payload: Any,
        catalog: ChannelCatalog,
        *,
        max_instruction_length: int = DEFAULT_MAX_INSTRUCTION_LENGTH,
        default_max_steps: int = DEFAULT_MAX_STEPS,
) -> PlanResponse:
    """Validate a request payload, plan it against `catalog`, and wrap the outcome."""

    started = monotonic()

    try:
        request = PlanRequest.model_validate(payload)
    except ValidationError:
        logger.info("rejected reason=invalid_request channel=%s", catalog.channel_id)
        return PlanResponse(ok=False, error="Missing or invalid input")

    if len(request.input) > max_instruction_length:
        logger.info("rejected reason=too_long length=%d", len(request.input))
        return PlanResponse(ok=False, error="Input too long")

    max_steps = request.max_steps if request.max_steps is not None else default_max_steps
    try:
        plan = plan_agent(
            request.input,
            actions=catalog.actions,
            membership_plans=catalog.membership_plans,
            max_steps=max_steps,
        )
    except PlannerError as exc:
        latency_ms = int((monotonic() - started) * 1000)
        logger.info("unplannable reason=%s latency_ms=%d", exc, latency_ms)
        return PlanResponse(ok=False, error=str(exc))

    latency_ms = int((monotonic() - started) * 1000)
    logger.info(
        "planned channel=%s summary=%s warnings=%d latency_ms=%d",
        catalog.channel_id,
        plan.summary,
        len(plan.warnings),
        latency_ms,
    )
    return PlanResponse(ok=True, plan=plan)
