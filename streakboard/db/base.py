from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from streakboard.core.config import settings


class Base(DeclarativeBase):
    pass


def _connect_args(url: str, statement_timeout_ms: int, connect_timeout_s: int) -> dict:
    if url.startswith("postgresql"):
        return {
            "connect_timeout": connect_timeout_s,
            "options": f"-c statement_timeout={statement_timeout_ms}",
        }
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def make_engine(url: str):
    kwargs = {
        "pool_pre_ping": True,
        "connect_args": _connect_args(url, settings.DB_STATEMENT_TIMEOUT_MS, settings.DB_POOL_TIMEOUT),
    }
    if not url.startswith("sqlite"):
        # Fail fast instead of queueing behind a saturated pool.
        kwargs["pool_timeout"] = settings.DB_POOL_TIMEOUT
    return create_engine(url, **kwargs)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
