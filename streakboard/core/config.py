from datetime import date

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://streakboard:streakboard@db:5432/streakboard"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://bot.example.com,https://admin.example.com"
    CORS_ORIGINS: str = "*"

    # Canonical zone used to decide which calendar day "today" is.
    TIMEZONE: str = "UTC"

    # "quarter" -> "{year}-{spring|summer|autumn|winter}"
    # "window"  -> 1, 2, 3 ... counted in SEASON_LENGTH_DAYS windows from SEASON_EPOCH
    SEASON_POLICY: str = Field(default="quarter", pattern="^(quarter|window)$")
    SEASON_EPOCH: date = date(2024, 1, 1)
    SEASON_LENGTH_DAYS: int = Field(default=30, ge=1)

    LEADERBOARD_SIZE: int = Field(default=100, ge=1, le=1000)
    LEADERBOARD_SEASON_SCOPED: bool = False
    STREAK_DECAY_ON_READ: bool = False

    RATE_LIMIT: str = "100/15minutes"
    RATE_LIMIT_ENABLED: bool = True

    DB_POOL_TIMEOUT: int = 5
    DB_STATEMENT_TIMEOUT_MS: int = 5000

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
