"""
Streak calculator.

The current streak is the length of the unbroken run of consecutive
calendar days that ends at the most recent check-in. It does not have to
end at today: a user who went quiet last week still reports that run
unless the caller asks for decay (``today`` given).
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

ONE_DAY = timedelta(days=1)


def current_streak(history: Iterable[date], today: Optional[date] = None) -> int:
    """
    Return the run length ending at the latest day in ``history``.

    Duplicates are collapsed first, so the result is defined on the set of days.
    With ``today`` set, a run whose last day is before yesterday counts as 0.
    """
    days = sorted(set(history), reverse=True)
    if not days:
        return 0
    if today is not None and days[0] < today - ONE_DAY:
        return 0

    streak = 1
    for prev, nxt in zip(days, days[1:]):
        if prev - ONE_DAY != nxt:
            break
        streak += 1
    return streak
