"""Action picker: resolve a concrete catalog action for an effect cue without an explicit key."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.planner.dictionaries import EFFECT_TYPE_KEYWORDS, EFFECT_TYPE_PREFERENCE
from src.planner.schema import Action, ActionType

logger = logging.getLogger(__name__)


def _first_of_type(actions: Sequence[Action], action_type: ActionType) -> Action | None:
    return next((a for a in actions if a.type == action_type), None)


def pick_action_key(
        input_lower: str,
        actions: Sequence[Action],
        desired_type: ActionType | None = None,
) -> str | None:
    """Pick an action key from the catalog.

    Resolution order (strict):
        1) The first catalog action whose key appears in the input.
        2) The first action of `desired_type`, if given.
        3) Keyword re-scan of the input (sound, then flash, then sticker).
        4) The first action in catalog order.

    Returns:
        The action key, or `None` only if the catalog is empty.
    """

    for action in actions:
        if action.action_key.lower() in input_lower:
            return action.action_key

    if desired_type is not None:
        match = _first_of_type(actions, desired_type)
        if match is not None:
            return match.action_key

    for action_type in EFFECT_TYPE_PREFERENCE:
        if not EFFECT_TYPE_KEYWORDS[action_type].search(input_lower):
            continue
        match = _first_of_type(actions, action_type)
        if match is not None:
            return match.action_key

    if not actions:
        return None

    logger.debug("no typed action matched; falling back to first catalog action")
    return actions[0].action_key
