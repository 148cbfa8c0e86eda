"""
Shared input rules for the ledger services.

Each helper raises ValidationError naming the offending field.
"""

import math
from datetime import date

from procurement.core.exceptions import ValidationError

# Upper bound for any monetary amount accepted from callers
MAX_AMOUNT = 999_999_999.0


def to_cents(value: float) -> float:
    """Round a computed money value to whole cents."""
    return round(value, 2)


def ensure_finite(field: str, value: float) -> None:
    if value is None or not math.isfinite(value):
        raise ValidationError(field, "must be a finite number", value)


def ensure_positive(field: str, value: float, upper: float | None = None) -> None:
    ensure_finite(field, value)
    if value <= 0:
        raise ValidationError(field, "must be greater than 0", value)
    if upper is not None and value > upper:
        raise ValidationError(field, f"must not exceed {upper:,.0f}", value)


def ensure_non_negative(field: str, value: float) -> None:
    ensure_finite(field, value)
    if value < 0:
        raise ValidationError(field, "cannot be negative", value)


def ensure_not_future(field: str, value: date, today: date | None = None) -> None:
    """Calendar-date check; the whole of today is allowed."""
    today = today or date.today()
    if value > today:
        raise ValidationError(field, "cannot be in the future", value.isoformat())


def ensure_max_length(field: str, value: str | None, limit: int) -> None:
    if value is not None and len(value) > limit:
        raise ValidationError(field, f"cannot exceed {limit} characters", value)
