"""Pydantic schemas for lender matching results."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import MatchStatus
from app.models.schemas.lender import LenderSummary


class DisqualificationReasonResponse(BaseModel):
    """One failed eligibility check."""

    field: str
    reason: str
    lender_value: Any = Field(None, alias="lenderValue")
    quote_value: Any = Field(None, alias="quoteValue")

    model_config = ConfigDict(populate_by_name=True)


class MatchResultResponse(BaseModel):
    """Verdict for one lender, as returned to clients."""

    lender_id: int
    loan_product_id: Optional[int] = None
    lender: LenderSummary
    match_status: MatchStatus
    disqualification_reasons: list[DisqualificationReasonResponse] = []

    model_config = ConfigDict(from_attributes=True)


class MatchRunResponse(BaseModel):
    """Response for a fresh matching run."""

    quote_id: int
    total_lenders: int
    qualified_count: int
    disqualified_count: int
    qualified_lenders: list[MatchResultResponse] = []
    disqualified_lenders: list[MatchResultResponse] = []


class QuoteMatchesResponse(BaseModel):
    """Response built from the last persisted matching run."""

    quote_id: int
    total_matches: int
    qualified_count: int
    disqualified_count: int
    qualified_lenders: list[MatchResultResponse] = []
    disqualified_lenders: list[MatchResultResponse] = []
