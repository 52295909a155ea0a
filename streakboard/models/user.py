"""
UserRecord — one row per external user identifier (the bot's user id).

checkin_history: JSON-encoded list of ISO dates stored as Text (no external
deps). It is the ground truth; `streak` is a counter written on every
check-in and verified against the history on read (see services/integrity.py).
"""
from __future__ import annotations

import json
from datetime import datetime, date, timezone

from sqlalchemy import Integer, String, Text, DateTime, Date, func
from sqlalchemy.orm import Mapped, mapped_column

from streakboard.db.base import Base


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_checkin_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    checkin_history: Mapped[str] = mapped_column(
        Text, nullable=False, default="[]",
        comment="JSON-encoded list of ISO calendar days with a successful check-in",
    )
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    best_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_checkins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    season: Mapped[str | None] = mapped_column(String(32), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    @property
    def history(self) -> list[date]:
        """Decoded check-in days in stored order (duplicates are kept so they can be detected)."""
        return [date.fromisoformat(d) for d in json.loads(self.checkin_history or "[]")]

    @history.setter
    def history(self, days) -> None:
        self.checkin_history = json.dumps(sorted(d.isoformat() for d in days))

    @property
    def started_at(self) -> datetime:
        # SQLite hands back naive datetimes even for timezone=True columns.
        if self.start_date.tzinfo is None:
            return self.start_date.replace(tzinfo=timezone.utc)
        return self.start_date
