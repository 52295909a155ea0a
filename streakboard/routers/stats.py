"""
Stats router.

GET /api/stats/{user_id}   — monthly buckets and consistency
GET /api/season            — current season descriptor
"""
from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session

from streakboard.core.clock import Clock, get_clock
from streakboard.core.rate_limit import api_limit
from streakboard.db.base import get_db
from streakboard.schemas.season import SeasonResponse
from streakboard.schemas.stats import StatsResponse
from streakboard.services.seasons import current_season
from streakboard.services.stats import get_user_stats

router = APIRouter(tags=["stats"])


@router.get("/stats/{user_id}", response_model=StatsResponse, summary="Check-in statistics")
@api_limit
def user_stats(
    request: Request,
    user_id: str = Path(min_length=1, max_length=64),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    - `monthlyBuckets`: check-ins per `"{year}-{month}"`.
    - `totalDays`: days since the record was created, at least 1.
    - `consistency`: check-ins as a percentage of `totalDays`.

    Unknown users get all zeros.
    """
    stats, season = get_user_stats(db=db, user_id=user_id, clock=clock)
    return StatsResponse(
        user_id=user_id,
        monthly_buckets=stats.monthly_buckets,
        total_days=stats.total_days,
        checkins_count=stats.checkins_count,
        consistency=float(stats.consistency),
        current_season=SeasonResponse.model_validate(season),
    )


@router.get("/season", response_model=SeasonResponse, summary="Current season")
@api_limit
def season_now(request: Request, clock: Clock = Depends(get_clock)):
    return SeasonResponse.model_validate(current_season(clock.today()))
