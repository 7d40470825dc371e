from .base import BaseRepository
from .lender_repository import LenderRepository
from .match_repository import MatchRepository
from .quote_repository import QuoteRepository

__all__ = [
    "BaseRepository",
    "LenderRepository",
    "MatchRepository",
    "QuoteRepository",
]
