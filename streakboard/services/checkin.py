"""
Check-in state machine.

Transitions per attempt, evaluated in order
--------------------------------------------
  1. CREATED    no record yet      -> history={today}, streak=1, best=1, total=1
  2. rejected   last >= today      -> AlreadyCheckedIn, nothing written
  3. CONTINUED  last == yesterday  -> streak = current_streak(history) + 1
  4. RESET      anything else      -> streak = 1 (gap, or registered but never checked in)

Every accepted transition adds today to the history, moves last_checkin_date
to today, raises best_streak to max(best, streak), adds exactly one to
total_checkins and re-tags the season.

`apply_checkin` is pure. `checkin` wraps it in a single transaction with the
user row locked, so two concurrent attempts for the same user cannot both
see "not checked in today".
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from streakboard.core.clock import Clock
from streakboard.core.errors import InvariantViolationError
from streakboard.models.user import UserRecord
from streakboard.services import store
from streakboard.services.integrity import verify_record
from streakboard.services.seasons import SeasonPolicy, current_season
from streakboard.services.streaks import current_streak

logger = logging.getLogger(__name__)


class Transition(str, enum.Enum):
    CREATED = "created"
    CONTINUED = "continued"
    RESET = "reset"


REJECTED_ALREADY_CHECKED_IN = "AlreadyCheckedIn"


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CheckinState:
    history: frozenset[date]
    last_checkin_date: Optional[date]
    streak: int
    best_streak: int
    total_checkins: int
    season: Optional[str]

    @classmethod
    def empty(cls, season: Optional[str] = None) -> "CheckinState":
        return cls(
            history=frozenset(),
            last_checkin_date=None,
            streak=0,
            best_streak=0,
            total_checkins=0,
            season=season,
        )

    @classmethod
    def of(cls, record: UserRecord) -> "CheckinState":
        return cls(
            history=frozenset(record.history),
            last_checkin_date=record.last_checkin_date,
            streak=record.streak,
            best_streak=record.best_streak,
            total_checkins=record.total_checkins,
            season=record.season,
        )


@dataclass(frozen=True)
class CheckinAccepted:
    state: CheckinState
    transition: Transition

    success = True

    @property
    def current_streak(self) -> int:
        return self.state.streak

    @property
    def total_checkins(self) -> int:
        return self.state.total_checkins

    @property
    def best_streak(self) -> int:
        return self.state.best_streak

    @property
    def is_first_checkin(self) -> bool:
        return self.transition is Transition.CREATED


@dataclass(frozen=True)
class CheckinRejected:
    day: date
    reason: str = REJECTED_ALREADY_CHECKED_IN

    success = False


CheckinOutcome = Union[CheckinAccepted, CheckinRejected]


# ---------------------------------------------------------------------------
# Pure transition
# ---------------------------------------------------------------------------

def apply_checkin(
    state: Optional[CheckinState],
    today: date,
    season_id: Optional[str] = None,
) -> CheckinOutcome:
    if state is None:
        return CheckinAccepted(
            state=CheckinState(
                history=frozenset({today}),
                last_checkin_date=today,
                streak=1,
                best_streak=1,
                total_checkins=1,
                season=season_id,
            ),
            transition=Transition.CREATED,
        )

    last = state.last_checkin_date
    # A stored day later than today only happens with clock skew; treat it
    # like a repeat so last_checkin_date stays the latest day in the history.
    if last is not None and last >= today:
        return CheckinRejected(day=today)

    if last is not None and last == today - timedelta(days=1):
        new_streak = current_streak(state.history) + 1
        transition = Transition.CONTINUED
    else:
        new_streak = 1
        transition = Transition.RESET

    return CheckinAccepted(
        state=CheckinState(
            history=state.history | {today},
            last_checkin_date=today,
            streak=new_streak,
            best_streak=max(state.best_streak, new_streak),
            total_checkins=state.total_checkins + 1,
            season=season_id,
        ),
        transition=transition,
    )


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

def checkin(
    db: Session,
    user_id: str,
    clock: Clock,
    policy: Optional[SeasonPolicy] = None,
) -> CheckinOutcome:
    """
    Apply one check-in for ``user_id`` on ``clock.today()`` and persist it.

    The row lock is held from read to commit. If two first check-ins race to
    insert the same user, the loser rolls back and re-runs against the row
    the winner committed, which turns it into a same-day rejection.
    """
    today = clock.today()
    season_id = current_season(today, policy).id

    try:
        return _checkin_once(db, user_id, today, clock, season_id)
    except IntegrityError:
        db.rollback()
        logger.info("Concurrent first check-in for user %s; re-reading", user_id)
    return _checkin_once(db, user_id, today, clock, season_id)


def _checkin_once(
    db: Session,
    user_id: str,
    today: date,
    clock: Clock,
    season_id: str,
) -> CheckinOutcome:
    record = store.get_user_for_update(db, user_id)
    if record is not None:
        try:
            verify_record(record)
        except InvariantViolationError:
            db.rollback()
            raise

    outcome = apply_checkin(
        CheckinState.of(record) if record is not None else None,
        today,
        season_id,
    )

    if isinstance(outcome, CheckinRejected):
        db.rollback()
        logger.debug("User %s already checked in on %s", user_id, today)
        return outcome

    if record is None:
        store.create_user(db, user_id, clock.now(), outcome.state)
    else:
        store.save_checkin(record, outcome.state)
    db.commit()

    logger.info(
        "Check-in user=%s day=%s transition=%s streak=%d best=%d total=%d",
        user_id, today, outcome.transition.value,
        outcome.current_streak, outcome.best_streak, outcome.total_checkins,
    )
    return outcome
