"""Domain models for the application."""

from app.models.domain.lender import Lender, LoanProduct
from app.models.domain.match import QuoteLenderMatch
from app.models.domain.quote import (
    Quote,
    QuoteApplicantInfo,
    QuoteLoanDetails,
    QuotePriorities,
    QuoteRentalInfo,
)

__all__ = [
    "Quote",
    "QuoteApplicantInfo",
    "QuoteLoanDetails",
    "QuoteRentalInfo",
    "QuotePriorities",
    "Lender",
    "LoanProduct",
    "QuoteLenderMatch",
]
