"""
Leaderboard schemas.

GET /api/leaderboard[/{season}] → LeaderboardResponse
"""
from datetime import datetime

from pydantic import Field

from streakboard.schemas.common import CamelModel


class LeaderboardEntryResponse(CamelModel):
    rank: int = Field(description="1-based, no gaps.")
    user_id: str
    display_name: str
    current_streak: int
    best_streak: int
    total_checkins: int
    start_date: datetime


class LeaderboardResponse(CamelModel):
    season: str
    entries: list[LeaderboardEntryResponse] = Field(
        description="Best first: bestStreak, then totalCheckins, then earliest startDate."
    )
    updated_at: datetime
