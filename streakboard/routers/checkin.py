"""
Check-in router.

POST /api/checkin/{user_id}
"""
from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session

from streakboard.core.clock import Clock, get_clock
from streakboard.core.rate_limit import api_limit
from streakboard.core.errors import AlreadyCheckedInError
from streakboard.db.base import get_db
from streakboard.schemas.checkin import CheckinResponse
from streakboard.schemas.common import AlreadyCheckedInResponse
from streakboard.services.checkin import CheckinRejected, checkin

router = APIRouter(prefix="/checkin", tags=["checkin"])


@router.post(
    "/{user_id}",
    response_model=CheckinResponse,
    summary="Record today's check-in",
    responses={
        200: {"description": "Check-in accepted."},
        409: {"model": AlreadyCheckedInResponse, "description": "Already checked in today."},
    },
)
@api_limit
def post_checkin(
    request: Request,
    user_id: str = Path(min_length=1, max_length=64),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Check the user in for today (canonical clock).

    - First ever check-in creates the record (`isFirstCheckin=true`).
    - Checked in yesterday: streak continues.
    - Any gap: streak restarts at 1, `bestStreak` is kept.

    A second call on the same day returns **409** with `reason="AlreadyCheckedIn"`
    and leaves the record unchanged.
    """
    outcome = checkin(db=db, user_id=user_id, clock=clock)
    if isinstance(outcome, CheckinRejected):
        raise AlreadyCheckedInError(user_id=user_id, day=outcome.day)
    return CheckinResponse(
        current_streak=outcome.current_streak,
        total_checkins=outcome.total_checkins,
        best_streak=outcome.best_streak,
        is_first_checkin=outcome.is_first_checkin,
        transition=outcome.transition.value,
    )
