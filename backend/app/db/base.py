"""SQLAlchemy declarative base for the SQL-backed post store."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""
