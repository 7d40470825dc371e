"""SQLAlchemy declarative base and shared mixins.

Every table gets an integer `id`, `created_at`, and `updated_at` via BaseModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class BaseModel(Base):
    """Abstract model adding id, created_at, and updated_at columns."""

    __abstract__ = True
    # Load server-generated timestamps at flush time
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def enum_values(enum_cls) -> list[str]:
    """Persist enum values (not member names) in SQL enum columns."""
    return [member.value for member in enum_cls]
