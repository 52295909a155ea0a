"""
Single canonical clock.

Routes never call ``datetime.now()`` directly: they receive a ``Clock``
through the ``get_clock`` dependency and pass ``now``/``today`` down into
the services, so tests can pin the date.
"""
from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from streakboard.core.config import settings


def _zone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


class Clock:
    def __init__(self, tz_name: str = "UTC"):
        self.tz = _zone(tz_name)

    def now(self) -> datetime:
        return datetime.now(tz=timezone.utc)

    def today(self) -> date:
        """Calendar day of ``now()`` in the configured zone."""
        return self.now().astimezone(self.tz).date()


class FrozenClock(Clock):
    """Clock pinned to a fixed instant. Used by tests and maintenance scripts."""

    def __init__(self, instant: datetime, tz_name: str = "UTC"):
        super().__init__(tz_name)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant


_clock = Clock(settings.TIMEZONE)


def get_clock() -> Clock:
    return _clock
