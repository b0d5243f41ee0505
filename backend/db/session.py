"""
Database session management.

Supports SQLite (default, development/testing) and any other SQLAlchemy URL
such as PostgreSQL through the DATABASE_URL setting.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from config_loader import get_config
from db.models import Base

DATABASE_URL = get_config()["database"]["url"]


def build_engine(url):
    # Handle SQLite special case
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True  # Verify connections before use
    )


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create database tables."""
    print(f"📊 Initializing database: {engine.url.render_as_string(hide_password=True)}")
    Base.metadata.create_all(bind=engine)
    print("✅ Database initialized successfully")


def get_db():
    """Dependency for FastAPI - yields database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
