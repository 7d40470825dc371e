"""Business logic services."""

from app.services.lender_service import LenderService
from app.services.matching_service import MatchingService
from app.services.quote_service import QuoteService

__all__ = ["LenderService", "MatchingService", "QuoteService"]
