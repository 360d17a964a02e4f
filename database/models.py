"""SQLAlchemy ORM models for Quote Builder."""

from datetime import datetime
from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class AppStateEntry(Base):
    """One persisted state blob (settings or working quote) stored as JSON text."""
    __tablename__ = 'app_state'

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)

    def __repr__(self):
        return f"<AppStateEntry(key='{self.key}', length={len(self.value or '')})>"
