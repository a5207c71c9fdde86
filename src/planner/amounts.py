"""Exact stable-currency amount parsing.

Amounts are represented as base units: an integer count of one-millionth of the reference unit.
Parsing never goes through floating point, so the 6th decimal is always exact.
"""

from __future__ import annotations

import re

BASE_UNITS_PER_UNIT = 1_000_000
FRACTION_DIGITS = 6

# Fallback donation amount ($0.05) used when no usable amount is present.
DEFAULT_DONATION_BASE_UNITS = "50000"

# Applied in order: thousands separators, dollar sign, then currency tickers.
_CURRENCY_NOISE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r","),
    re.compile(r"\$"),
    re.compile(r"usdc(?:\.e)?", flags=re.IGNORECASE),
    re.compile(r"cro", flags=re.IGNORECASE),
)
_AMOUNT_RE = re.compile(rf"(?P<whole>[0-9]+)(?:\.(?P<fraction>[0-9]{{0,{FRACTION_DIGITS}}}))?")


class AmountError(ValueError):
    """Raised when a raw string cannot be converted into a positive base-unit amount."""


class MissingAmountError(AmountError):
    def __init__(self) -> None:
        super().__init__("Missing amount")


class InvalidAmountFormatError(AmountError):
    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid amount format: {raw!r}")


class NonPositiveAmountError(AmountError):
    def __init__(self) -> None:
        super().__init__("Amount must be > 0")


def parse_amount_to_base_units(raw: str) -> str:
    """Convert a free-form amount like `"$1,000.5 USDC"` into a base-unit integer string.

    Raises:
        MissingAmountError: If nothing numeric remains after stripping currency noise.
        InvalidAmountFormatError: If the value has more than 6 fractional digits or any other shape.
        NonPositiveAmountError: If the value is zero.
    """

    value = raw or ""
    for pattern in _CURRENCY_NOISE_PATTERNS:
        value = pattern.sub("", value)
    value = value.strip()
    if not value:
        raise MissingAmountError()

    if value.startswith("."):
        value = f"0{value}"
    if value.endswith("."):
        value = value[:-1]

    match = _AMOUNT_RE.fullmatch(value)
    if not match:
        raise InvalidAmountFormatError(raw)

    whole = int(match.group("whole"))
    fraction = int((match.group("fraction") or "").ljust(FRACTION_DIGITS, "0"))

    base_units = whole * BASE_UNITS_PER_UNIT + fraction
    if base_units <= 0:
        raise NonPositiveAmountError()
    return str(base_units)
