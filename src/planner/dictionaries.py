"""Keyword dictionaries for intent cues (English + Korean).

Each intent cue is an explicit `KeywordSet`: Latin words match as whole ASCII words (so "sticker를"
still counts as "sticker"), host-language phrases match as plain substrings, both
case-insensitively. These sets should remain small and deterministic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.planner.schema import ActionType


# Word boundaries are ASCII-only: Hangul next to a Latin keyword still separates it.
_ASCII_WORD = r"[A-Za-z0-9_]"


def _build_regex_alternation(phrases: tuple[str, ...]) -> str:
    # Sort by length desc to prefer longer phrases (e.g. "멤버십" over "멤버").
    parts = sorted(phrases, key=lambda p: (-len(p), p))
    return "|".join(re.escape(p) for p in parts)


@dataclass(frozen=True)
class KeywordMatch:
    """A keyword hit: zero-based offset into the searched text plus the matched substring."""

    index: int
    text: str

    @property
    def end(self) -> int:
        return self.index + len(self.text)


@dataclass(frozen=True)
class KeywordSet:
    """A named, case-insensitive multi-pattern matcher."""

    name: str
    words: tuple[str, ...]
    phrases: tuple[str, ...] = ()
    pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        alternatives = []
        if self.words:
            alternatives.append(
                rf"(?<!{_ASCII_WORD})(?:{_build_regex_alternation(self.words)})(?!{_ASCII_WORD})"
            )
        if self.phrases:
            alternatives.append(_build_regex_alternation(self.phrases))
        object.__setattr__(self, "pattern", re.compile("|".join(alternatives), re.IGNORECASE))

    def find_all(self, text: str) -> list[KeywordMatch]:
        """Return every non-overlapping match, left to right."""

        return [KeywordMatch(index=m.start(), text=m.group(0)) for m in self.pattern.finditer(text)]

    def search(self, text: str) -> bool:
        return self.pattern.search(text) is not None


DONATION_KEYWORDS = KeywordSet(
    name="donation",
    words=("donate", "donation", "tip", "support", "send"),
    phrases=("후원", "도네", "기부"),
)

QA_KEYWORDS = KeywordSet(
    name="qa",
    words=("q&a", "qa", "question", "ask"),
    phrases=("질문",),
)

MEMBERSHIP_KEYWORDS = KeywordSet(
    name="membership",
    words=("membership", "member", "subscribe", "sub"),
    phrases=("멤버십", "멤버", "구독"),
)

PRIORITY_KEYWORDS = KeywordSet(
    name="priority",
    words=("priority", "prio", "urgent"),
    phrases=("우선", "긴급", "프리미엄"),
)

EFFECT_TYPE_KEYWORDS: dict[ActionType, KeywordSet] = {
    ActionType.sticker: KeywordSet(
        name="sticker",
        words=("sticker", "emoji", "emote"),
        phrases=("스티커", "이모지"),
    ),
    ActionType.flash: KeywordSet(
        name="flash",
        words=("flash", "blink"),
        phrases=("번쩍", "플래시"),
    ),
    ActionType.sound: KeywordSet(
        name="sound",
        words=("airhorn", "horn", "sound"),
        phrases=("사운드", "에어혼"),
    ),
}

# Order in which the action picker re-scans the input for an effect type.
EFFECT_TYPE_PREFERENCE: tuple[ActionType, ...] = (
    ActionType.sound,
    ActionType.flash,
    ActionType.sticker,
)
