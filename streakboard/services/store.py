"""
User store: the read/write contract the core needs, on top of SQLAlchemy.

  get_user(id)             -> UserRecord | None
  get_user_for_update(id)  -> same, row-locked until commit/rollback
  create_user(...)         -> full insert (first check-in or explicit register)
  save_checkin(record, s)  -> partial update of the check-in fields
  list_all_users()         -> full scan; the leaderboard's candidate provider

Callers own the transaction (commit/rollback).
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Sequence, TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from streakboard.models.user import UserRecord

if TYPE_CHECKING:
    from streakboard.services.checkin import CheckinState


CandidateProvider = Callable[[Session, Optional[str]], Sequence[UserRecord]]


def get_user(db: Session, user_id: str) -> Optional[UserRecord]:
    return db.get(UserRecord, user_id)


def get_user_for_update(db: Session, user_id: str) -> Optional[UserRecord]:
    return db.execute(
        select(UserRecord).where(UserRecord.id == user_id).with_for_update()
    ).scalar_one_or_none()


def create_user(
    db: Session,
    user_id: str,
    started_at: datetime,
    state: "CheckinState",
    display_name: Optional[str] = None,
) -> UserRecord:
    record = UserRecord(
        id=user_id,
        display_name=display_name,
        start_date=started_at,
    )
    _write_state(record, state)
    db.add(record)
    db.flush()
    return record


def save_checkin(record: UserRecord, state: "CheckinState") -> UserRecord:
    _write_state(record, state)
    return record


def _write_state(record: UserRecord, state: "CheckinState") -> None:
    record.history = state.history
    record.last_checkin_date = state.last_checkin_date
    record.streak = state.streak
    record.best_streak = state.best_streak
    record.total_checkins = state.total_checkins
    record.season = state.season


def list_all_users(db: Session, season_id: Optional[str] = None) -> list[UserRecord]:
    """Every record, or only those tagged with ``season_id`` when given."""
    q = db.query(UserRecord)
    if season_id is not None:
        q = q.filter(UserRecord.season == season_id)
    return q.order_by(UserRecord.created_at, UserRecord.id).all()
