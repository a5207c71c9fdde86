"""Bot process entrypoint."""

from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties

from src.app import App, create_app
from src.bot.router import router
from src.config.logging import configure_logging
from src.config.settings import load_settings

logger = logging.getLogger(__name__)


async def check_catalog(app: App) -> None:
    """Fail fast when the configured channel does not exist; warn when it sells nothing."""

    catalog = await app.load_catalog()
    if catalog is None:
        raise RuntimeError(f"Channel not found: {app.settings.channel_slug}")

    if not catalog.actions and not catalog.membership_plans:
        logger.warning("channel %s has no enabled actions or membership plans", catalog.channel_id)
    logger.info(
        "planning for channel=%s actions=%d plans=%d max_steps=%d",
        app.settings.channel_slug,
        len(catalog.actions),
        len(catalog.membership_plans),
        app.settings.planner_max_steps,
    )


async def main() -> None:
    """Open the catalog pool, verify the channel, then run the Telegram polling loop."""

    settings = load_settings()
    configure_logging(settings.log_level)

    app = create_app(settings)
    await app.catalog_pool.open(wait=True)

    try:
        await check_catalog(app)

        bot = Bot(token=settings.telegram_bot_token, default=DefaultBotProperties(parse_mode=None))
        dp = Dispatcher()
        dp.include_router(router)
        await dp.start_polling(bot, app=app)
    finally:
        logger.info("shutting down")
        await app.catalog_pool.close()


if __name__ == "__main__":
    asyncio.run(main())
