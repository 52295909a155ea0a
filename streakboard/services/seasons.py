"""
Season calendar.

Two interchangeable policies; a deployment picks one via SEASON_POLICY and
never mixes them:

  quarter  — four 3-month spans per calendar year.
             Jan–Mar "spring", Apr–Jun "summer", Jul–Sep "autumn", Oct–Dec "winter".
             id = "{year}-{name}", e.g. "2026-autumn".
  window   — fixed windows of SEASON_LENGTH_DAYS counted from SEASON_EPOCH.
             id = "1", "2", ... (day 0 of the epoch is in season 1).

Pure functions of the date passed in; no clock reads here.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Protocol

from streakboard.core.config import settings


SEASON_NAMES = ("spring", "summer", "autumn", "winter")


@dataclass(frozen=True)
class Season:
    id: str
    name: str
    start_date: date
    end_date: date          # inclusive
    year: Optional[int] = None


class SeasonPolicy(Protocol):
    def season_for(self, day: date) -> Season: ...


class QuarterSeasonPolicy:
    def season_for(self, day: date) -> Season:
        index = (day.month - 1) // 3
        name = SEASON_NAMES[index]
        first_month = index * 3 + 1
        last_month = first_month + 2
        last_day = calendar.monthrange(day.year, last_month)[1]
        return Season(
            id=f"{day.year}-{name}",
            name=name,
            year=day.year,
            start_date=date(day.year, first_month, 1),
            end_date=date(day.year, last_month, last_day),
        )


class FixedWindowSeasonPolicy:
    def __init__(self, epoch: date, length_days: int = 30):
        if length_days < 1:
            raise ValueError("length_days must be >= 1")
        self.epoch = epoch
        self.length_days = length_days

    def season_for(self, day: date) -> Season:
        number = (day - self.epoch).days // self.length_days + 1
        start = self.epoch + timedelta(days=(number - 1) * self.length_days)
        return Season(
            id=str(number),
            name=f"season-{number}",
            start_date=start,
            end_date=start + timedelta(days=self.length_days - 1),
        )


def get_season_policy() -> SeasonPolicy:
    if settings.SEASON_POLICY == "window":
        return FixedWindowSeasonPolicy(settings.SEASON_EPOCH, settings.SEASON_LENGTH_DAYS)
    return QuarterSeasonPolicy()


def current_season(today: date, policy: Optional[SeasonPolicy] = None) -> Season:
    return (policy or get_season_policy()).season_for(today)
