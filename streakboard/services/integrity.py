"""
Record integrity check.

History is the ground truth; every other check-in field is derived from it
and written alongside it. A loaded record that disagrees with its own
history is reported, not patched, so persistence bugs stay visible.
"""
from __future__ import annotations

import logging

from streakboard.core.errors import InvariantViolationError
from streakboard.models.user import UserRecord
from streakboard.services.streaks import current_streak

logger = logging.getLogger(__name__)


def verify_record(record: UserRecord) -> None:
    days = record.history
    unique = set(days)

    problem = None
    if len(unique) != len(days):
        problem = ("unique_days", f"{len(days) - len(unique)} duplicate day(s) in history")
    elif record.total_checkins != len(days):
        problem = (
            "total_matches_history",
            f"totalCheckins={record.total_checkins} but history has {len(days)} day(s)",
        )
    elif (max(unique) if unique else None) != record.last_checkin_date:
        problem = (
            "last_checkin_is_latest",
            f"lastCheckinDate={record.last_checkin_date} is not the latest day in history",
        )
    elif record.streak != current_streak(unique):
        problem = (
            "streak_matches_history",
            f"stored streak={record.streak} but history gives {current_streak(unique)}",
        )
    elif record.best_streak < record.streak:
        problem = (
            "best_at_least_current",
            f"bestStreak={record.best_streak} < streak={record.streak}",
        )

    if problem is not None:
        invariant, detail = problem
        logger.error("Invariant %s broken for user %s: %s", invariant, record.id, detail)
        raise InvariantViolationError(record.id, invariant, detail)
