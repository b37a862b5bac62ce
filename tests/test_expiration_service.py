from datetime import datetime, timedelta, timezone

import pytest

from app.application.services.expiration_service import (
    Duration,
    GuestStatus,
    apply_duration,
    guest_status,
    validate_duration,
)
from app.core.exceptions import ValidationError

UTC = timezone.utc


class TestValidateDuration:

    def test_defaults_missing_units_to_zero(self):
        assert validate_duration({"days": 3}) == Duration(days=3)

    def test_none_values_count_as_zero(self):
        assert validate_duration({"days": None, "hours": 2}) == Duration(hours=2)

    @pytest.mark.parametrize("unit, value", [
        ("days", -1),
        ("hours", 1.5),
        ("minutes", "abc"),
        ("seconds", True),
        ("months", [1]),
        ("days", "-2"),
        ("hours", float("nan")),
    ])
    def test_rejects_bad_unit_and_names_it(self, unit, value):
        with pytest.raises(ValidationError) as excinfo:
            validate_duration({unit: value})
        assert excinfo.value.field == unit
        assert unit in excinfo.value.message

    def test_accepts_integral_float_and_numeric_string(self):
        assert validate_duration({"months": 2.0, "days": "3"}) == Duration(months=2, days=3)

    def test_rejects_all_zero(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_duration({"months": 0, "days": 0, "hours": 0, "minutes": 0, "seconds": 0})
        assert excinfo.value.field == "expiration"

    def test_rejects_empty_object(self):
        with pytest.raises(ValidationError):
            validate_duration({})

    @pytest.mark.parametrize("raw", [None, "14 days", 14, [1, 2]])
    def test_rejects_missing_or_non_object(self, raw):
        with pytest.raises(ValidationError) as excinfo:
            validate_duration(raw)
        assert excinfo.value.field == "expiration"


class TestApplyDuration:

    def test_month_addition_clamps_to_month_end(self):
        base = datetime(2024, 1, 31, tzinfo=UTC)
        assert apply_duration(base, Duration(months=1)) == datetime(2024, 2, 29, tzinfo=UTC)

    def test_month_addition_non_leap_year(self):
        base = datetime(2023, 1, 31, tzinfo=UTC)
        assert apply_duration(base, Duration(months=1)) == datetime(2023, 2, 28, tzinfo=UTC)

    def test_units_applied_in_order(self):
        # Feb 29 + 1 day; a flat 31 + 1 days would give Mar 2
        base = datetime(2024, 1, 31, tzinfo=UTC)
        assert apply_duration(base, Duration(months=1, days=1)) == datetime(2024, 3, 1, tzinfo=UTC)

    def test_time_units_follow_shifted_date(self):
        base = datetime(2024, 3, 31, 23, 0, tzinfo=UTC)
        result = apply_duration(base, Duration(months=1, hours=2, minutes=30, seconds=15))
        assert result == datetime(2024, 5, 1, 1, 30, 15, tzinfo=UTC)

    def test_small_units_only(self):
        base = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
        result = apply_duration(base, Duration(days=14))
        assert result == base + timedelta(days=14)

    @pytest.mark.parametrize("duration, unit", [
        (Duration(days=10**9), "days"),
        (Duration(months=10**6), "months"),
        (Duration(days=1, seconds=10**15), "seconds"),
    ])
    def test_out_of_range_result_names_unit(self, duration, unit):
        base = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
        with pytest.raises(ValidationError) as excinfo:
            apply_duration(base, duration)
        assert excinfo.value.field == unit


class TestGuestStatus:
    now = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)

    def test_past_and_active_is_expired(self):
        assert guest_status(self.now - timedelta(seconds=1), True, self.now) is GuestStatus.EXPIRED

    def test_past_and_inactive_is_still_expired(self):
        assert guest_status(self.now - timedelta(days=1), False, self.now) is GuestStatus.EXPIRED

    def test_expiry_instant_counts_as_expired(self):
        assert guest_status(self.now, True, self.now) is GuestStatus.EXPIRED

    def test_future_and_inactive_is_inactive(self):
        assert guest_status(self.now + timedelta(days=1), False, self.now) is GuestStatus.INACTIVE

    def test_future_and_active_is_active(self):
        assert guest_status(self.now + timedelta(days=1), True, self.now) is GuestStatus.ACTIVE

    def test_naive_timestamps_are_utc(self):
        naive = datetime(2024, 6, 1, 12, 30)
        assert guest_status(naive, True, self.now) is GuestStatus.ACTIVE
