"""Channel catalog queries.

The planner treats the catalog as read-only request input. These helpers load one channel's enabled
actions and membership plans in a stable order; user values are always passed as parameters.
"""

from __future__ import annotations

import logging

from psycopg import AsyncConnection

from src.planner.schema import Action, ChannelCatalog, MembershipPlan

logger = logging.getLogger(__name__)

_CHANNEL_SQL = "SELECT id FROM channels WHERE slug = %s"

_ACTIONS_SQL = """
    SELECT action_key, type
    FROM actions
    WHERE channel_id = %s AND enabled
    ORDER BY position, action_key
"""

_MEMBERSHIP_PLANS_SQL = """
    SELECT id, name
    FROM membership_plans
    WHERE channel_id = %s AND enabled
    ORDER BY position, id
"""


async def fetch_channel_catalog(conn: AsyncConnection, slug: str) -> ChannelCatalog | None:
    """Load the enabled catalog of the channel identified by `slug`.

    Returns:
        The catalog, or `None` if no channel has that slug.
        DB errors are not swallowed (caller decides how to handle them).
    """

    async with conn.cursor() as cur:
        await cur.execute(_CHANNEL_SQL, (slug,))
        row = await cur.fetchone()
        if not row:
            return None
        channel_id = row[0]

        await cur.execute(_ACTIONS_SQL, (channel_id,))
        actions = tuple(Action(action_key=key, type=type_) for key, type_ in await cur.fetchall())

        await cur.execute(_MEMBERSHIP_PLANS_SQL, (channel_id,))
        plans = tuple(MembershipPlan(id=id_, name=name) for id_, name in await cur.fetchall())

    logger.debug("catalog loaded channel=%s actions=%d plans=%d", channel_id, len(actions), len(plans))
    return ChannelCatalog(channel_id=channel_id, actions=actions, membership_plans=plans)
