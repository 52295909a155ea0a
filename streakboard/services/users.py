"""
User service: profile reads, explicit registration, display-name updates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from streakboard.core.clock import Clock
from streakboard.core.config import settings
from streakboard.core.errors import UserNotFoundError
from streakboard.models.user import UserRecord
from streakboard.services import store
from streakboard.services.checkin import CheckinState
from streakboard.services.integrity import verify_record
from streakboard.services.seasons import Season, SeasonPolicy, current_season
from streakboard.services.streaks import current_streak

logger = logging.getLogger(__name__)

DISPLAY_NAME_PREFIX = "User_"


def default_display_name(user_id: str) -> str:
    return f"{DISPLAY_NAME_PREFIX}{user_id[-4:]}"


@dataclass
class UserView:
    user_id: str
    display_name: str
    start_date: datetime
    last_checkin_date: Optional[date]
    checkin_history: list[date]
    current_streak: int
    best_streak: int
    total_checkins: int
    season: Optional[str]
    current_season: Season
    exists: bool


def _view(record: UserRecord, today: date, season: Season) -> UserView:
    history = sorted(set(record.history))
    decay_today = today if settings.STREAK_DECAY_ON_READ else None
    return UserView(
        user_id=record.id,
        display_name=record.display_name or default_display_name(record.id),
        start_date=record.started_at,
        last_checkin_date=record.last_checkin_date,
        checkin_history=history,
        current_streak=current_streak(history, decay_today),
        best_streak=record.best_streak,
        total_checkins=record.total_checkins,
        season=record.season,
        current_season=season,
        exists=True,
    )


def get_or_create_user(
    db: Session,
    user_id: str,
    clock: Clock,
    policy: Optional[SeasonPolicy] = None,
) -> UserView:
    """
    Return the user's view. A user with no record gets a zeroed default view
    tagged with the current season; nothing is written.
    """
    today = clock.today()
    season = current_season(today, policy)
    record = store.get_user(db, user_id)
    if record is None:
        return UserView(
            user_id=user_id,
            display_name=default_display_name(user_id),
            start_date=clock.now(),
            last_checkin_date=None,
            checkin_history=[],
            current_streak=0,
            best_streak=0,
            total_checkins=0,
            season=season.id,
            current_season=season,
            exists=False,
        )
    verify_record(record)
    return _view(record, today, season)


def register_user(
    db: Session,
    user_id: str,
    clock: Clock,
    display_name: Optional[str] = None,
    policy: Optional[SeasonPolicy] = None,
) -> tuple[UserView, bool]:
    """
    Persist a zero-check-in record for ``user_id``.
    Returns (view, created); an existing record is returned untouched.
    """
    today = clock.today()
    season = current_season(today, policy)
    record = store.get_user(db, user_id)
    if record is not None:
        verify_record(record)
        return _view(record, today, season), False

    try:
        record = store.create_user(
            db, user_id, clock.now(), CheckinState.empty(season.id), display_name=display_name,
        )
        db.commit()
    except IntegrityError:
        # Registered concurrently; the committed row wins.
        db.rollback()
        return _view(store.get_user(db, user_id), today, season), False
    db.refresh(record)
    logger.info("Registered user %s (season %s)", user_id, season.id)
    return _view(record, today, season), True


def rename_user(
    db: Session,
    user_id: str,
    display_name: str,
    clock: Clock,
    policy: Optional[SeasonPolicy] = None,
) -> UserView:
    record = store.get_user(db, user_id)
    if record is None:
        raise UserNotFoundError(user_id)
    verify_record(record)
    record.display_name = display_name
    db.commit()
    db.refresh(record)
    today = clock.today()
    return _view(record, today, current_season(today, policy))
