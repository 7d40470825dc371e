"""Quote domain models: the application and its submitted sub-records."""

from datetime import date
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import ExitPlan, LoanType, QuoteStatus
from app.db.base import BaseModel, enum_values


class Quote(BaseModel):
    """Loan application submitted by an applicant."""

    __tablename__ = "quotes"

    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_living_in_property: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    # Immutable after creation; filters candidate loan products
    loan_type: Mapped[Optional[LoanType]] = mapped_column(
        SQLEnum(LoanType, name="loan_type", values_callable=enum_values),
        nullable=True,
        index=True,
    )

    is_draft: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    status: Mapped[QuoteStatus] = mapped_column(
        SQLEnum(QuoteStatus, name="quote_status", values_callable=enum_values),
        default=QuoteStatus.DRAFT,
        nullable=False,
        index=True,
    )

    # Relationships
    applicant_info: Mapped[Optional["QuoteApplicantInfo"]] = relationship(
        "QuoteApplicantInfo",
        back_populates="quote",
        uselist=False,
        cascade="all, delete-orphan",
    )
    loan_details: Mapped[Optional["QuoteLoanDetails"]] = relationship(
        "QuoteLoanDetails",
        back_populates="quote",
        uselist=False,
        cascade="all, delete-orphan",
    )
    rental_info: Mapped[Optional["QuoteRentalInfo"]] = relationship(
        "QuoteRentalInfo",
        back_populates="quote",
        uselist=False,
        cascade="all, delete-orphan",
    )
    priorities: Mapped[Optional["QuotePriorities"]] = relationship(
        "QuotePriorities",
        back_populates="quote",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        loan_type = self.loan_type.value if self.loan_type else None
        return (
            f"<Quote(id={self.id}, loan_type={loan_type}, "
            f"is_draft={self.is_draft}, status={self.status.value})>"
        )


class QuoteApplicantInfo(BaseModel):
    """Applicant and borrowing entity information."""

    __tablename__ = "quote_applicant_info"

    quote_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    citizenship: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    credit_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    # Borrowing entity
    company_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    company_ein: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    company_state: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Experience & liquidity (decimal strings)
    liquid_funds_available: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )
    properties_owned: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_equity_value: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    total_debt_value: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    quote: Mapped["Quote"] = relationship("Quote", back_populates="applicant_info")

    def __repr__(self) -> str:
        return (
            f"<QuoteApplicantInfo(quote_id={self.quote_id}, "
            f"credit_score={self.credit_score}, citizenship={self.citizenship!r})>"
        )


class QuoteLoanDetails(BaseModel):
    """Requested loan terms. Amounts are stored as decimal strings."""

    __tablename__ = "quote_loan_details"

    quote_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    purpose_of_loan: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    requested_loan_amount: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )
    purchase_price: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    property_purchase_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Rehab
    has_rehab_funds_requested: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    rehab_amount_requested: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )

    # Valuation
    as_is_property_value: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )
    after_repair_property_value: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )
    exit_plan: Mapped[Optional[ExitPlan]] = mapped_column(
        SQLEnum(ExitPlan, name="exit_plan", values_callable=enum_values),
        nullable=True,
    )

    quote: Mapped["Quote"] = relationship("Quote", back_populates="loan_details")

    def __repr__(self) -> str:
        return (
            f"<QuoteLoanDetails(quote_id={self.quote_id}, "
            f"requested={self.requested_loan_amount!r}, price={self.purchase_price!r})>"
        )


class QuoteRentalInfo(BaseModel):
    """Rental income data for DSCR quotes."""

    __tablename__ = "quote_rental_info"

    quote_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    loan_amount: Mapped[str] = mapped_column(String(50), nullable=False)
    monthly_rental_income: Mapped[str] = mapped_column(String(50), nullable=False)
    annual_property_insurance: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )
    annual_property_taxes: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True
    )
    monthly_hoa_fee: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    quote: Mapped["Quote"] = relationship("Quote", back_populates="rental_info")

    def __repr__(self) -> str:
        return f"<QuoteRentalInfo(quote_id={self.quote_id}, rent={self.monthly_rental_income!r})>"


class QuotePriorities(BaseModel):
    """What the applicant cares about most when comparing lenders."""

    __tablename__ = "quote_priorities"

    quote_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    speed_of_closing: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    low_fees: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    high_leverage: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    quote: Mapped["Quote"] = relationship("Quote", back_populates="priorities")

    def __repr__(self) -> str:
        return (
            f"<QuotePriorities(quote_id={self.quote_id}, speed={self.speed_of_closing}, "
            f"fees={self.low_fees}, leverage={self.high_leverage})>"
        )
