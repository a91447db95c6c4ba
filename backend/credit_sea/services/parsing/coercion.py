"""
Credit Sea - Type Coercion

Permissive converters for the string-typed fields of the bureau feed. A
single bad sub-field must not abort the rest of the report, so every
converter falls back to a default instead of raising.
"""
from __future__ import annotations
import math
import re
from decimal import Decimal
from typing import Optional

# Base-10 only. Python's int()/Decimal() also accept "1_000", "NaN",
# "1e3" and non-ASCII digits, none of which the bureau emits.
# 19 digits covers every signed 64-bit value.
INT_RE = re.compile(r"[+-]?\d{1,19}", re.ASCII)
DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)

# Storable range: BIGINT columns for integers, JSON numbers (float) for amounts
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

ZERO = Decimal("0")


def to_trimmed_string(value: Optional[str]) -> str:
    """Strip surrounding whitespace; absent values become ''."""
    if value is None:
        return ""
    return value.strip()


def to_int(value: Optional[str], default: int = 0) -> int:
    """
    Parse an integer-valued field. No rounding: "7.5" yields `default`.
    Values outside the signed 64-bit range are treated as unparsable.
    """
    cleaned = to_trimmed_string(value)
    if not INT_RE.fullmatch(cleaned):
        return default
    number = int(cleaned)
    if not INT64_MIN <= number <= INT64_MAX:
        return default
    return number


def to_decimal(value: Optional[str], default: Decimal = ZERO) -> Decimal:
    """
    Parse a decimal amount using '.' as the fraction separator.
    Amounts too large to store as a finite float are treated as unparsable.
    """
    cleaned = to_trimmed_string(value)
    if not DECIMAL_RE.fullmatch(cleaned):
        return Decimal(default)
    amount = Decimal(cleaned)
    if not math.isfinite(float(amount)):
        return Decimal(default)
    return amount
