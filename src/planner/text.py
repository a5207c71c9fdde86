"""Small text-window heuristics used when turning a cue into a step."""

from __future__ import annotations

import re

QUOTE_CHARS = "\"“”'‘’"

_QUOTED_RE = re.compile(rf"[{QUOTE_CHARS}](?P<body>.+?)[{QUOTE_CHARS}]")
_LEADING_SEPARATOR_RE = re.compile(r"^[:\-–—]\s*")
_AMOUNT_CANDIDATE_RE = re.compile(r"[0-9]+(?:\.[0-9]{1,6})?")


def _clean_quoted(match: re.Match[str] | None) -> str | None:
    if not match:
        return None
    body = match.group("body").strip()
    return body or None


def extract_first_quoted(text: str) -> str | None:
    """Return the trimmed body of the first quoted substring anywhere in `text`.

    Any straight or curly quote may open or close. An unclosed quote, or one enclosing only
    whitespace, yields `None`.
    """

    return _clean_quoted(_QUOTED_RE.search(text))


def extract_leading_quoted(text: str) -> str | None:
    """Like `extract_first_quoted`, but only when `text` starts with the opening quote."""

    return _clean_quoted(_QUOTED_RE.match(text))


def strip_leading_separator(text: str) -> str:
    """Drop a single leading colon or dash (any variant) and the whitespace after it."""

    return _LEADING_SEPARATOR_RE.sub("", text, count=1).strip()


def find_amount_candidate(text: str) -> str | None:
    """Return the first digit run (optionally with up to 6 decimals) in `text`."""

    match = _AMOUNT_CANDIDATE_RE.search(text)
    return match.group(0) if match else None
