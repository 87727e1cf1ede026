"""Database session management for the invoice store"""

from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from cashflow_gateway.config import settings

# Forecast reads are short; recycle after 1 hour to avoid stale connections
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=10,
    pool_recycle=3600,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """Per-request session; the gateway only reads, so nothing is committed"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
