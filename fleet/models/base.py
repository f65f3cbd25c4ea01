"""Shared SQLAlchemy base for the fleet schema."""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base class for all fleet models."""
