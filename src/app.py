"""Application composition root.

The bot only needs two things per message: the channel it plans for and a way to read that
channel's catalog. Both live in `App`.
"""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from src.config.settings import Settings
from src.db.catalog import fetch_channel_catalog
from src.db.pool import create_pool, get_conn
from src.planner.schema import ChannelCatalog

# Catalog reads are short single-row/small-list SELECTs.
CATALOG_POOL_MAX_SIZE = 5


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    catalog_pool: AsyncConnectionPool

    async def load_catalog(self) -> ChannelCatalog | None:
        """Load the configured channel's enabled catalog (`None` if the slug is unknown)."""

        async with get_conn(self.catalog_pool) as conn:
            return await fetch_channel_catalog(conn, self.settings.channel_slug)


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The catalog pool is not opened. Call `await app.catalog_pool.open()` at startup.
    """

    catalog_pool = create_pool(settings.database_url, max_size=CATALOG_POOL_MAX_SIZE)
    return App(settings=settings, catalog_pool=catalog_pool)
