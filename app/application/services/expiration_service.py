"""Expiration service — duration validation, expiry calculation and guest status.

A duration is a calendar-aware offset (months, days, hours, minutes, seconds).
Units are applied one after another in that fixed order, each on the result of
the previous one, so "1 month then 1 day" from Jan 31 is not the same as adding
a flat 31-day interval.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional

from dateutil.relativedelta import relativedelta

from app.core.exceptions import ValidationError

DURATION_UNITS = ("months", "days", "hours", "minutes", "seconds")


class GuestStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Duration:
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def is_zero(self) -> bool:
        return not any(getattr(self, unit) for unit in DURATION_UNITS)


def _coerce_unit(unit: str, value: Any) -> int:
    """Coerce one duration unit to a non-negative int or raise ValidationError."""
    error = ValidationError(
        f"Invalid expiration: {unit} must be a non-negative integer.", field=unit
    )

    if value is None:
        return 0
    if isinstance(value, bool):
        raise error
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise error
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = int(text)
        except ValueError:
            try:
                as_float = float(text)
            except ValueError:
                raise error from None
            if not as_float.is_integer():
                raise error
            number = int(as_float)
    else:
        raise error

    if number < 0:
        raise error
    return number


def validate_duration(raw: Optional[Mapping[str, Any]]) -> Duration:
    """Validate a raw duration payload and return a Duration.

    Absent units default to 0. Every present unit must be a non-negative
    integer, and at least one unit must be positive.

    Raises:
        ValidationError: naming the offending unit, or the whole expiration
            when it is missing, not an object, or all zero.
    """
    if raw is None or not isinstance(raw, Mapping):
        raise ValidationError("Expiration object is required.", field="expiration")

    duration = Duration(**{unit: _coerce_unit(unit, raw.get(unit)) for unit in DURATION_UNITS})

    if duration.is_zero():
        raise ValidationError(
            "Expiration must have at least one non-zero value.", field="expiration"
        )
    return duration


def apply_duration(base: datetime, duration: Duration) -> datetime:
    """Add a duration to `base`: months, days, hours, minutes, seconds, in order.

    Month addition clamps to the end of the target month
    (2024-01-31 + 1 month == 2024-02-29).

    Raises:
        ValidationError: naming the unit that pushed the result past the
            largest representable date.
    """
    result = base
    for unit in DURATION_UNITS:
        amount = getattr(duration, unit)
        if not amount:
            continue
        try:
            result = result + relativedelta(**{unit: amount})
        except (OverflowError, ValueError):
            raise ValidationError(
                f"Invalid expiration: {unit} is too large.", field=unit
            ) from None
    return result


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def guest_status(expires_at: datetime, is_active: bool, now: Optional[datetime] = None) -> GuestStatus:
    """Derive the lifecycle status. Expiry wins over the activation flag."""
    now = as_utc(now or utcnow())
    if now >= as_utc(expires_at):
        return GuestStatus.EXPIRED
    if not is_active:
        return GuestStatus.INACTIVE
    return GuestStatus.ACTIVE
