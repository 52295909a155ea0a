from pydantic import Field

from streakboard.schemas.common import CamelModel


class CheckinResponse(CamelModel):
    success: bool = True
    current_streak: int
    total_checkins: int
    best_streak: int
    is_first_checkin: bool
    transition: str = Field(description='"created" | "continued" | "reset"')
