from datetime import date, datetime, timezone

from streakboard.core.clock import Clock, FrozenClock


def test_frozen_clock_day_in_utc():
    clock = FrozenClock(datetime(2026, 3, 10, 23, 59, tzinfo=timezone.utc))
    assert clock.today() == date(2026, 3, 10)


def test_day_boundary_follows_configured_zone():
    instant = datetime(2026, 3, 10, 20, 0, tzinfo=timezone.utc)
    assert FrozenClock(instant, "Asia/Tokyo").today() == date(2026, 3, 11)
    assert FrozenClock(instant, "America/New_York").today() == date(2026, 3, 10)


def test_naive_instant_is_taken_as_utc():
    clock = FrozenClock(datetime(2026, 3, 10, 12, 0))
    assert clock.now().tzinfo is timezone.utc


def test_live_clock_is_aware():
    assert Clock().now().tzinfo is not None
