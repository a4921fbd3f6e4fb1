from typing import Generator, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .config import settings

def _normalize_db_url(url: str) -> str:
    # Use psycopg v3 driver with SQLAlchemy; sqlite passes through
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    if url.startswith("postgres://"):
        return "postgresql+psycopg://" + url[len("postgres://"):]
    return url

_DB_URL = _normalize_db_url(settings.DATABASE_URL)

_engine = None  # lazy-init so importing the app never opens a connection
_SessionLocal: Optional[sessionmaker] = None

def get_engine():
    global _engine
    if _engine is None:
        connect_args = {"check_same_thread": False} if _DB_URL.startswith("sqlite") else {}
        _engine = create_engine(
            _DB_URL,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
    return _engine

def get_sessionmaker() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=get_engine(),
            autocommit=False,
            autoflush=False,
        )
    return _SessionLocal

class Base(DeclarativeBase):
    pass

def get_db() -> Generator:
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()

def init_db() -> None:
    """Create tables directly (dev/sqlite); Postgres deployments use alembic."""
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=get_engine())
