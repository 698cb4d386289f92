"""
Database configuration using SQLAlchemy.
SQLite is the default store; PostgreSQL URLs are accepted as well.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from finance_tracker.config import get_settings


def normalize_database_url(database_url: str) -> str:
    # psycopg 3 is the installed PostgreSQL driver
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+psycopg://", 1)
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+psycopg://", 1)
    return database_url


def build_engine(database_url: str, **kwargs):
    """
    Create an engine with dialect-appropriate connection settings.
    """
    db_url = normalize_database_url(database_url)
    if db_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        return create_engine(db_url, connect_args=connect_args, **kwargs)

    return create_engine(
        db_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=10,
        max_overflow=20,
        echo=False,
        **kwargs,
    )


engine = build_engine(get_settings().database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency for FastAPI to get database session.
    Yields a database session and ensures it's closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
