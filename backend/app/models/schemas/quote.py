"""Pydantic schemas for quotes and their sub-records."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.enums import ExitPlan, LoanType, QuoteStatus

MAX_AMOUNT_EXPONENT = 15


def _check_decimal_string(value: Optional[str]) -> Optional[str]:
    """Decimal amounts travel as strings; reject anything that is not a number."""
    if value is None:
        return value
    value = value.strip()
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        raise ValueError("must be a decimal number")
    if not parsed.is_finite() or parsed < 0:
        raise ValueError("must be a non-negative decimal number")
    if abs(parsed.adjusted()) > MAX_AMOUNT_EXPONENT:
        raise ValueError("must be a decimal number of reasonable magnitude")
    return value


# ==================== Quote Schemas ====================


class QuoteCreate(BaseModel):
    """Schema for creating a quote."""

    address: str = Field(..., min_length=1)
    is_living_in_property: bool = False
    loan_type: Optional[LoanType] = None


class QuoteUpdate(BaseModel):
    """Schema for updating a quote. The loan type cannot change."""

    address: Optional[str] = Field(None, min_length=1)
    is_living_in_property: Optional[bool] = None


class QuoteResponse(BaseModel):
    """Schema for quote response."""

    id: int
    address: Optional[str] = None
    is_living_in_property: bool
    loan_type: Optional[LoanType] = None
    is_draft: bool
    status: QuoteStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ==================== Applicant Info Schemas ====================


class ApplicantInfoBase(BaseModel):
    """Applicant info as submitted by the applicant."""

    full_name: str = Field(..., min_length=1, max_length=255)
    citizenship: str = Field(..., min_length=1, max_length=100)
    credit_score: int = Field(..., ge=300, le=850)
    phone_number: str = Field(..., min_length=1, max_length=30)
    company_name: str = Field(..., min_length=1, max_length=100)
    company_ein: str = Field(..., min_length=1, max_length=20)
    company_state: str = Field(..., min_length=1, max_length=50)
    liquid_funds_available: str = Field(..., min_length=1)
    properties_owned: int = Field(0, ge=0)
    total_equity_value: Optional[str] = None
    total_debt_value: Optional[str] = None

    @field_validator(
        "liquid_funds_available", "total_equity_value", "total_debt_value"
    )
    @classmethod
    def validate_amount(cls, v: Optional[str]) -> Optional[str]:
        return _check_decimal_string(v)

    @model_validator(mode="after")
    def validate_portfolio_values(self):
        """Equity and debt values are required once the applicant owns properties."""
        if self.properties_owned > 0:
            if not self.total_equity_value:
                raise ValueError("total_equity_value is required when properties_owned > 0")
            if not self.total_debt_value:
                raise ValueError("total_debt_value is required when properties_owned > 0")
        return self


class ApplicantInfoResponse(BaseModel):
    id: int
    quote_id: int
    full_name: str
    citizenship: Optional[str] = None
    credit_score: Optional[int] = None
    phone_number: Optional[str] = None
    company_name: Optional[str] = None
    company_ein: Optional[str] = None
    company_state: Optional[str] = None
    liquid_funds_available: Optional[str] = None
    properties_owned: int
    total_equity_value: Optional[str] = None
    total_debt_value: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ==================== Loan Details Schemas ====================


class LoanDetailsBase(BaseModel):
    """Loan details. Amounts are decimal strings to avoid float rounding."""

    purpose_of_loan: Optional[str] = Field(None, max_length=50)
    requested_loan_amount: Optional[str] = None
    purchase_price: str = Field(..., min_length=1)
    property_purchase_date: Optional[date] = None
    has_rehab_funds_requested: bool = False
    rehab_amount_requested: Optional[str] = None
    as_is_property_value: Optional[str] = None
    after_repair_property_value: Optional[str] = None
    exit_plan: Optional[ExitPlan] = None

    @field_validator(
        "requested_loan_amount",
        "purchase_price",
        "rehab_amount_requested",
        "as_is_property_value",
        "after_repair_property_value",
    )
    @classmethod
    def validate_amount(cls, v: Optional[str]) -> Optional[str]:
        return _check_decimal_string(v)


class LoanDetailsResponse(BaseModel):
    id: int
    quote_id: int
    purpose_of_loan: Optional[str] = None
    requested_loan_amount: Optional[str] = None
    purchase_price: Optional[str] = None
    property_purchase_date: Optional[date] = None
    has_rehab_funds_requested: bool
    rehab_amount_requested: Optional[str] = None
    as_is_property_value: Optional[str] = None
    after_repair_property_value: Optional[str] = None
    exit_plan: Optional[ExitPlan] = None

    model_config = ConfigDict(from_attributes=True)


# ==================== Rental Info Schemas ====================


class RentalInfoBase(BaseModel):
    """Rental income data for DSCR quotes."""

    loan_amount: str = Field(..., min_length=1)
    monthly_rental_income: str = Field(..., min_length=1)
    annual_property_insurance: Optional[str] = None
    annual_property_taxes: Optional[str] = None
    monthly_hoa_fee: Optional[str] = None

    @field_validator(
        "loan_amount",
        "monthly_rental_income",
        "annual_property_insurance",
        "annual_property_taxes",
        "monthly_hoa_fee",
    )
    @classmethod
    def validate_amount(cls, v: Optional[str]) -> Optional[str]:
        return _check_decimal_string(v)


class RentalInfoResponse(RentalInfoBase):
    id: int
    quote_id: int

    model_config = ConfigDict(from_attributes=True)


# ==================== Priorities Schemas ====================


class PrioritiesBase(BaseModel):
    """Applicant priorities; all three flags must be given explicitly."""

    speed_of_closing: bool
    low_fees: bool
    high_leverage: bool
    comments: Optional[str] = None


class PrioritiesResponse(PrioritiesBase):
    id: int
    quote_id: int

    model_config = ConfigDict(from_attributes=True)


class QuoteDetailResponse(QuoteResponse):
    """Quote with all submitted sub-records."""

    applicant_info: Optional[ApplicantInfoResponse] = None
    loan_details: Optional[LoanDetailsResponse] = None
    rental_info: Optional[RentalInfoResponse] = None
    priorities: Optional[PrioritiesResponse] = None

    model_config = ConfigDict(from_attributes=True)


class QuoteStatusCountsResponse(BaseModel):
    """Number of quotes in each workflow state."""

    counts: Dict[str, int]
    total: int
