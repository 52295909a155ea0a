"""
Per-user statistics.

  monthly_buckets : {"{year}-{month}": count}, month 1-based and unpadded ("2026-3")
  total_days      : ceil((now - start_date) / 1 day), at least 1
  consistency     : check-ins / total_days * 100, rounded half-up to 1 decimal
"""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from streakboard.core.clock import Clock
from streakboard.services import store
from streakboard.services.seasons import Season, SeasonPolicy, current_season

ONE_DAY = timedelta(days=1)


@dataclass
class UserStats:
    monthly_buckets: dict[str, int] = field(default_factory=dict)
    total_days: int = 0
    checkins_count: int = 0
    consistency: Decimal = Decimal("0")


def month_key(day: date) -> str:
    return f"{day.year}-{day.month}"


def compute_stats(history: Iterable[date], start_date: datetime, now: datetime) -> UserStats:
    days = set(history)
    buckets = Counter(month_key(d) for d in sorted(days))

    total_days = max(1, math.ceil((now - start_date) / ONE_DAY))
    raw = Decimal(len(days)) / Decimal(total_days) * 100
    consistency = raw.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)

    return UserStats(
        monthly_buckets=dict(buckets),
        total_days=total_days,
        checkins_count=len(days),
        consistency=consistency,
    )


def get_user_stats(
    db: Session,
    user_id: str,
    clock: Clock,
    policy: Optional[SeasonPolicy] = None,
) -> tuple[UserStats, Season]:
    """Stats for ``user_id``; all zeros when the user has no record."""
    season = current_season(clock.today(), policy)
    record = store.get_user(db, user_id)
    if record is None:
        return UserStats(), season
    return compute_stats(record.history, record.started_at, clock.now()), season
