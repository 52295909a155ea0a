"""
User schemas.

GET   /api/user/{user_id} → UserResponse
POST  /api/user/{user_id} → UserResponse   (body: RegisterUserRequest)
PATCH /api/user/{user_id} → UserResponse   (body: RenameUserRequest)
"""
from datetime import date, datetime
from typing import Optional

from pydantic import Field

from streakboard.schemas.common import CamelModel
from streakboard.schemas.season import SeasonResponse


class RegisterUserRequest(CamelModel):
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=128)


class RenameUserRequest(CamelModel):
    display_name: str = Field(min_length=1, max_length=128)


class UserResponse(CamelModel):
    user_id: str
    display_name: str
    start_date: datetime
    last_checkin_date: Optional[date] = None
    checkin_history: list[date] = Field(description="Check-in days, oldest first.")
    current_streak: int
    best_streak: int
    total_checkins: int
    season: Optional[str] = Field(
        default=None, description="Season in which the record was last touched."
    )
    current_season: SeasonResponse
    exists: bool = Field(description="False for the zeroed default of an unknown user.")
