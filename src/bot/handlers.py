"""aiogram message handlers.

Hard contract: every incoming message produces exactly one reply. A planned instruction is answered
with the plan as JSON; anything else is answered with a single `error: ...` line. Internal details are
logged, never sent to the viewer.
"""

from __future__ import annotations

import logging

from aiogram.types import Message

from src.app import App
from src.planner.service import PlanResponse, handle_plan_request

logger = logging.getLogger(__name__)

INTERNAL_ERROR_REPLY = "error: Internal error"
CHANNEL_NOT_FOUND_REPLY = "error: Channel not found"


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


def render_response(response: PlanResponse) -> str:
    """Render a planner response as one reply message."""

    if response.ok and response.plan is not None:
        return response.plan.model_dump_json(indent=2)
    return f"error: {response.error or 'Unknown error'}"


async def handle_message(message: Message, app: App) -> None:
    """Plan an incoming viewer instruction and reply with exactly one message."""

    raw_text = message.text or message.caption or ""
    if _is_command_text(raw_text):
        await message.answer("error: Commands are not instructions")
        return

    reply = INTERNAL_ERROR_REPLY

    # noinspection PyBroadException
    try:
        catalog = await app.load_catalog()

        if catalog is None:
            logger.warning("channel not found slug=%s", app.settings.channel_slug)
            reply = CHANNEL_NOT_FOUND_REPLY
        else:
            response = handle_plan_request(
                {"input": raw_text},
                catalog,
                max_instruction_length=app.settings.max_instruction_length,
                default_max_steps=app.settings.planner_max_steps,
            )
            reply = render_response(response)
    except Exception:
        # Handler boundary: any internal error must still produce a single reply.
        logger.exception("handler failed")

    await message.answer(reply)
