"""
Leaderboard ranker.

Ordering (best first), a strict chain of tie-breaks:
  1. higher best_streak
  2. higher total_checkins
  3. earlier start_date (longest-tenured user wins)
Entries equal on all three keep their input order (stable sort), then get
consecutive ranks 1..N. Only the top `limit` entries are returned.

Candidates come from a provider function (default: full table scan) so an
indexed top-K query can replace it without touching the ordering.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from streakboard.core.clock import Clock
from streakboard.core.config import settings
from streakboard.services import store
from streakboard.services.seasons import SeasonPolicy, current_season
from streakboard.services.streaks import current_streak
from streakboard.services.users import default_display_name

logger = logging.getLogger(__name__)


@dataclass
class RankedEntry:
    rank: int
    user_id: str
    display_name: str
    current_streak: int
    best_streak: int
    total_checkins: int
    start_date: datetime


@dataclass
class Leaderboard:
    season: str
    entries: list[RankedEntry]
    updated_at: datetime


def _sort_key(entry: RankedEntry) -> tuple:
    return (-entry.best_streak, -entry.total_checkins, entry.start_date)


def rank(
    records: Iterable,
    limit: Optional[int] = None,
    today: Optional[date] = None,
) -> list[RankedEntry]:
    """
    Rank user records. ``today`` switches on streak decay for the reported
    current streak; it never affects ordering.
    """
    entries = [
        RankedEntry(
            rank=0,
            user_id=r.id,
            display_name=r.display_name or default_display_name(r.id),
            current_streak=current_streak(r.history, today),
            best_streak=r.best_streak or 0,
            total_checkins=r.total_checkins or 0,
            start_date=r.started_at,
        )
        for r in records
    ]
    entries.sort(key=_sort_key)
    for position, entry in enumerate(entries):
        entry.rank = position + 1
    if limit is not None:
        entries = entries[:limit]
    return entries


def get_leaderboard(
    db: Session,
    clock: Clock,
    season_id: Optional[str] = None,
    limit: Optional[int] = None,
    candidates: store.CandidateProvider = store.list_all_users,
    policy: Optional[SeasonPolicy] = None,
) -> Leaderboard:
    today = clock.today()
    season = season_id or current_season(today, policy).id
    # The season tag is informational unless scoping is switched on.
    scope = season if settings.LEADERBOARD_SEASON_SCOPED else None
    records = candidates(db, scope)

    entries = rank(
        records,
        limit=limit or settings.LEADERBOARD_SIZE,
        today=today if settings.STREAK_DECAY_ON_READ else None,
    )
    logger.debug("Leaderboard %s: %d candidates, %d returned", season, len(records), len(entries))
    return Leaderboard(season=season, entries=entries, updated_at=clock.now())
