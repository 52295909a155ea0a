"""
Tests for the record integrity check.
"""
import json
import pytest
from datetime import date, datetime, timezone

from streakboard.core.errors import InvariantViolationError
from streakboard.models.user import UserRecord
from streakboard.services.integrity import verify_record

D = date(2026, 3, 10)


def _record(days, **overrides) -> UserRecord:
    record = UserRecord(
        id="check-me",
        start_date=datetime(2026, 3, 1, tzinfo=timezone.utc),
        checkin_history=json.dumps([d.isoformat() for d in days]),
        last_checkin_date=max(days) if days else None,
        streak=overrides.pop("streak", 0),
        best_streak=overrides.pop("best_streak", 0),
        total_checkins=len(days),
    )
    for key, value in overrides.items():
        setattr(record, key, value)
    return record


def _violation(record) -> str:
    with pytest.raises(InvariantViolationError) as exc:
        verify_record(record)
    return exc.value.details["invariant"]


def test_consistent_record_passes():
    days = [date(2026, 3, 8), date(2026, 3, 9), D]
    verify_record(_record(days, streak=3, best_streak=3))


def test_empty_record_passes():
    verify_record(_record([]))


def test_duplicate_days():
    assert _violation(_record([D, D], streak=1, best_streak=1)) == "unique_days"


def test_total_mismatch():
    assert _violation(_record([D], streak=1, best_streak=1, total_checkins=2)) == "total_matches_history"


def test_last_checkin_not_latest():
    record = _record([D], streak=1, best_streak=1, last_checkin_date=date(2026, 3, 9))
    assert _violation(record) == "last_checkin_is_latest"


def test_stored_streak_drifted():
    assert _violation(_record([D], streak=4, best_streak=4)) == "streak_matches_history"


def test_best_below_current():
    days = [date(2026, 3, 9), D]
    assert _violation(_record(days, streak=2, best_streak=1)) == "best_at_least_current"


def test_error_shape():
    err = InvariantViolationError("check-me", "unique_days", "2 duplicate day(s)")
    assert err.http_status == 500
    assert err.code == "INVARIANT_VIOLATION"
    assert err.to_dict()["details"] == {"user_id": "check-me", "invariant": "unique_days"}
