"""Pydantic schemas for lenders and loan products."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.enums import LoanType


# ==================== Lender Schemas ====================


class LenderBase(BaseModel):
    """Base schema for lender with common fields."""

    company_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    contact_name: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=30)
    is_active: bool = True


class LenderCreate(LenderBase):
    """Schema for creating a lender."""

    pass


class LenderUpdate(BaseModel):
    """Schema for updating a lender (all fields optional)."""

    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    contact_name: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=30)
    is_active: Optional[bool] = None


class LenderResponse(LenderBase):
    """Schema for lender response."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LenderSummary(BaseModel):
    """Lender fields embedded in match results."""

    id: int
    company_name: str
    email: str
    contact_name: Optional[str] = None
    phone_number: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ==================== Loan Product Schemas ====================


class LoanProductBase(BaseModel):
    """Base schema for loan product with eligibility criteria."""

    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    loan_type: LoanType
    min_loan_amount: Optional[Decimal] = Field(None, gt=0)
    max_loan_amount: Optional[Decimal] = Field(None, gt=0)
    min_credit_score: Optional[int] = Field(None, ge=300, le=850)
    citizen_requirements: list[str] = Field(
        default_factory=list,
        description="Accepted citizenship types (e.g., ['US Citizen', 'Permanent Resident'])",
    )
    states_funded: list[str] = Field(
        default_factory=list, description="Funded state codes (e.g., ['TX', 'FL'])"
    )
    seasoning_period_months: Optional[int] = Field(None, ge=0)
    accepts_rehab_loans: bool = False
    max_ltv_percentage: Optional[Decimal] = Field(None, gt=0, le=100)
    appraisal_required: bool = True
    appraisal_requirements: Optional[str] = None

    @model_validator(mode="after")
    def validate_amount_bounds(self):
        """Ensure min_loan_amount does not exceed max_loan_amount."""
        if (
            self.min_loan_amount is not None
            and self.max_loan_amount is not None
            and self.min_loan_amount > self.max_loan_amount
        ):
            raise ValueError("min_loan_amount cannot exceed max_loan_amount")
        return self


class LoanProductCreate(LoanProductBase):
    """Schema for creating a loan product."""

    pass


class LoanProductUpdate(BaseModel):
    """Schema for updating a loan product (all fields optional)."""

    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    loan_type: Optional[LoanType] = None
    min_loan_amount: Optional[Decimal] = Field(None, gt=0)
    max_loan_amount: Optional[Decimal] = Field(None, gt=0)
    min_credit_score: Optional[int] = Field(None, ge=300, le=850)
    citizen_requirements: Optional[list[str]] = None
    states_funded: Optional[list[str]] = None
    seasoning_period_months: Optional[int] = Field(None, ge=0)
    accepts_rehab_loans: Optional[bool] = None
    max_ltv_percentage: Optional[Decimal] = Field(None, gt=0, le=100)
    appraisal_required: Optional[bool] = None
    appraisal_requirements: Optional[str] = None


class LoanProductResponse(LoanProductBase):
    """Schema for loan product response."""

    id: int
    lender_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LenderDetailResponse(LenderResponse):
    """Schema for lender response with loan products."""

    loan_products: list[LoanProductResponse] = []

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement for state-changing actions."""

    message: str
