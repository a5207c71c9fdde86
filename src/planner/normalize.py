"""Instruction normalization."""

from __future__ import annotations

import re

_MULTISPACE_RE = re.compile(r"\s+")


def normalize_instruction(text: str) -> str:
    """Collapse whitespace runs (including newlines) to one space and trim.

    Case is preserved for display; callers derive a lower-cased copy for matching.
    """

    return _MULTISPACE_RE.sub(" ", text or "").strip()
