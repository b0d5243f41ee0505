"""
Database models for face-login accounts.

Descriptors are stored as a JSON list of float lists so the same schema
works on SQLite (development/testing) and PostgreSQL.
"""
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, Integer, Float, String, DateTime, JSON

Base = declarative_base()


class User(Base):
    """User account with one or more face descriptors."""
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    age = Column(Float, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    role = Column(String, nullable=False)
    face_descriptors = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
