from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from streakboard.db.base import get_db
from streakboard.core.config import settings
from streakboard.core.logging import configure_logging
from streakboard.core.rate_limit import limiter
from streakboard.routers import checkin as checkin_router
from streakboard.routers import leaderboard as leaderboard_router
from streakboard.routers import stats as stats_router
from streakboard.routers import users as users_router
from streakboard.core.errors import (
    StreakboardException,
    streakboard_exception_handler,
    validation_exception_handler,
    rate_limit_exceeded_handler,
    store_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL)

API_PREFIX = "/api"

app = FastAPI(
    title="Streakboard API",
    description=(
        "**Daily check-in streaks and leaderboard**\n\n"
        "Records one check-in per user per calendar day, tracks current and best "
        "streaks, and ranks users by best streak, total check-ins and tenure.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Rate limiting ---
app.state.limiter = limiter

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(StreakboardException, streakboard_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(SQLAlchemyError, store_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(users_router.router, prefix=API_PREFIX)
app.include_router(checkin_router.router, prefix=API_PREFIX)
app.include_router(leaderboard_router.router, prefix=API_PREFIX)
app.include_router(stats_router.router, prefix=API_PREFIX)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except SQLAlchemyError:
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
