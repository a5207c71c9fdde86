"""Occurrence scanning.

Every detector runs independently over the normalized instruction and appends position-tagged
occurrences to one shared list. Detectors run in the fixed order of `DETECTORS`; that order is
what breaks ties between occurrences at the same offset after sorting.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum

from src.planner.dictionaries import (
    DONATION_KEYWORDS,
    EFFECT_TYPE_KEYWORDS,
    MEMBERSHIP_KEYWORDS,
    QA_KEYWORDS,
    KeywordSet,
)
from src.planner.schema import Action, ActionType


class NoIntentFound(LookupError):
    """Raised when no detector found any cue in the instruction."""


class OccurrenceKind(StrEnum):
    effect = "effect"
    donation = "donation"
    qa = "qa"
    membership = "membership"


@dataclass(frozen=True)
class Occurrence:
    """A detected cue for one intent kind."""

    kind: OccurrenceKind
    index: int
    match: str
    desired_type: ActionType | None = None
    action_key: str | None = None

    @property
    def end(self) -> int:
        return self.index + len(self.match)


@dataclass(frozen=True)
class ScanContext:
    """Inputs shared by all detectors for one instruction."""

    text: str
    text_lower: str
    actions: Sequence[Action]


Detector = Callable[[ScanContext], list[Occurrence]]


def _keyword_detector(keywords: KeywordSet, kind: OccurrenceKind) -> Detector:
    def detect(ctx: ScanContext) -> list[Occurrence]:
        return [
            Occurrence(kind=kind, index=m.index, match=m.text)
            for m in keywords.find_all(ctx.text)
        ]

    detect.__name__ = f"detect_{keywords.name}"
    return detect


def _effect_type_detector(action_type: ActionType) -> Detector:
    keywords = EFFECT_TYPE_KEYWORDS[action_type]

    def detect(ctx: ScanContext) -> list[Occurrence]:
        return [
            Occurrence(kind=OccurrenceKind.effect, index=m.index, match=m.text, desired_type=action_type)
            for m in keywords.find_all(ctx.text)
        ]

    detect.__name__ = f"detect_{keywords.name}_effect"
    return detect


def detect_explicit_action_keys(ctx: ScanContext) -> list[Occurrence]:
    """Find every non-overlapping, case-insensitive mention of a catalog action key."""

    found: list[Occurrence] = []
    for action in ctx.actions:
        key_lower = action.action_key.lower()
        start = ctx.text_lower.find(key_lower)
        while start != -1:
            found.append(
                Occurrence(
                    kind=OccurrenceKind.effect,
                    index=start,
                    match=ctx.text[start: start + len(key_lower)],
                    action_key=action.action_key,
                )
            )
            start = ctx.text_lower.find(key_lower, start + len(key_lower))
    return found


DETECTORS: tuple[Detector, ...] = (
    _keyword_detector(DONATION_KEYWORDS, OccurrenceKind.donation),
    _keyword_detector(QA_KEYWORDS, OccurrenceKind.qa),
    _keyword_detector(MEMBERSHIP_KEYWORDS, OccurrenceKind.membership),
    detect_explicit_action_keys,
    _effect_type_detector(ActionType.sticker),
    _effect_type_detector(ActionType.flash),
    _effect_type_detector(ActionType.sound),
)


def scan_occurrences(text: str, actions: Sequence[Action] = ()) -> list[Occurrence]:
    """Run every detector over normalized `text` and return occurrences sorted by offset.

    Raises:
        NoIntentFound: If no detector matched anything.
    """

    ctx = ScanContext(text=text, text_lower=text.lower(), actions=actions)

    occurrences: list[Occurrence] = []
    for detect in DETECTORS:
        occurrences.extend(detect(ctx))

    if not occurrences:
        raise NoIntentFound("no intent keywords found")

    # `sorted` is stable, so detector registration order breaks offset ties.
    return sorted(occurrences, key=lambda o: o.index)
