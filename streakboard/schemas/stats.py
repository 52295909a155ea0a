from pydantic import Field

from streakboard.schemas.common import CamelModel
from streakboard.schemas.season import SeasonResponse


class StatsResponse(CamelModel):
    user_id: str
    monthly_buckets: dict[str, int] = Field(
        description='Check-ins per month keyed "{year}-{month}", e.g. "2026-3".'
    )
    total_days: int
    checkins_count: int
    consistency: float = Field(description="Percentage, one decimal place.", examples=[42.9])
    current_season: SeasonResponse
