"""Pydantic schemas for API validation and serialization."""

from app.models.schemas.lender import (
    LenderCreate,
    LenderDetailResponse,
    LenderResponse,
    LenderSummary,
    LenderUpdate,
    LoanProductCreate,
    LoanProductResponse,
    LoanProductUpdate,
    MessageResponse,
)
from app.models.schemas.match import (
    DisqualificationReasonResponse,
    MatchResultResponse,
    MatchRunResponse,
    QuoteMatchesResponse,
)
from app.models.schemas.quote import (
    ApplicantInfoBase,
    ApplicantInfoResponse,
    LoanDetailsBase,
    LoanDetailsResponse,
    PrioritiesBase,
    PrioritiesResponse,
    QuoteCreate,
    QuoteDetailResponse,
    QuoteResponse,
    QuoteStatusCountsResponse,
    QuoteUpdate,
    RentalInfoBase,
    RentalInfoResponse,
)

__all__ = [
    # Quote schemas
    "QuoteCreate",
    "QuoteUpdate",
    "QuoteResponse",
    "QuoteDetailResponse",
    "ApplicantInfoBase",
    "ApplicantInfoResponse",
    "LoanDetailsBase",
    "LoanDetailsResponse",
    "RentalInfoBase",
    "RentalInfoResponse",
    "PrioritiesBase",
    "PrioritiesResponse",
    "QuoteStatusCountsResponse",
    # Lender schemas
    "LenderCreate",
    "LenderResponse",
    "LenderDetailResponse",
    "LenderSummary",
    "LenderUpdate",
    "MessageResponse",
    "LoanProductCreate",
    "LoanProductUpdate",
    "LoanProductResponse",
    # Match schemas
    "DisqualificationReasonResponse",
    "MatchResultResponse",
    "MatchRunResponse",
    "QuoteMatchesResponse",
]
