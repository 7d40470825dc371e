"""Dependency injection for FastAPI endpoints."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError
from app.db.session import get_db

__all__ = ["get_db", "get_session", "parse_path_id"]


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    This is an alias for get_db for clarity in endpoint signatures.
    """
    async for session in get_db():
        yield session


def parse_path_id(value: str, entity: str) -> int:
    """
    Parse a path parameter as a positive integer ID.

    Args:
        value: Raw path segment
        entity: Entity name used in the error message (e.g. "quote")

    Returns:
        The parsed ID

    Raises:
        ValidationError: If the value is not a positive integer
    """
    if not (value.isascii() and value.isdigit()) or int(value) <= 0:
        raise ValidationError(f"Invalid {entity} ID", field="id")
    return int(value)
