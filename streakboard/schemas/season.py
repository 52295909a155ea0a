from datetime import date
from typing import Optional

from streakboard.schemas.common import CamelModel


class SeasonResponse(CamelModel):
    id: str
    name: str
    year: Optional[int] = None
    start_date: date
    end_date: date
