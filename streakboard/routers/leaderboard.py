"""
Leaderboard router.

GET /api/leaderboard            — current season
GET /api/leaderboard/{season}   — explicit season id
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from streakboard.core.clock import Clock, get_clock
from streakboard.core.rate_limit import api_limit
from streakboard.db.base import get_db
from streakboard.schemas.leaderboard import LeaderboardEntryResponse, LeaderboardResponse
from streakboard.services.leaderboard import Leaderboard, get_leaderboard

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

Limit = Annotated[
    Optional[int],
    Query(ge=1, le=1000, description="Top-N size. Defaults to LEADERBOARD_SIZE."),
]


def _to_response(board: Leaderboard) -> LeaderboardResponse:
    return LeaderboardResponse(
        season=board.season,
        entries=[LeaderboardEntryResponse.model_validate(e) for e in board.entries],
        updated_at=board.updated_at,
    )


@router.get("", response_model=LeaderboardResponse, summary="Leaderboard for the current season")
@api_limit
def leaderboard_current(
    request: Request,
    limit: Limit = None,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Rank every user by `bestStreak`, then `totalCheckins`, then earliest
    `startDate`. Recomputed from live records on each call.
    """
    return _to_response(get_leaderboard(db=db, clock=clock, limit=limit))


@router.get(
    "/{season}",
    response_model=LeaderboardResponse,
    summary="Leaderboard labelled with an explicit season",
)
@api_limit
def leaderboard_for_season(
    request: Request,
    season: str,
    limit: Limit = None,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Same ranking as `/leaderboard`. Records are only filtered by their season
    tag when `LEADERBOARD_SEASON_SCOPED` is enabled.
    """
    return _to_response(get_leaderboard(db=db, clock=clock, season_id=season, limit=limit))
