"""Bot router composition: every message is treated as a viewer instruction."""

from __future__ import annotations

from aiogram import Router

from src.bot.handlers import handle_message

router = Router(name="instructions")
router.message.register(handle_message)
