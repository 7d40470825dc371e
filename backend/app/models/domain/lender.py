"""Lender and loan product domain models for the matching engine."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import LoanType
from app.db.base import BaseModel, enum_values

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")


class Lender(BaseModel):
    """Lender organisation publishing loan products."""

    __tablename__ = "lenders"

    company_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    contact_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    loan_products: Mapped[list["LoanProduct"]] = relationship(
        "LoanProduct",
        back_populates="lender",
        cascade="all, delete-orphan",
        order_by="LoanProduct.id",
    )

    def __repr__(self) -> str:
        return f"<Lender(id={self.id}, company_name={self.company_name!r})>"


class LoanProduct(BaseModel):
    """Loan product with the eligibility criteria evaluated by the matcher."""

    __tablename__ = "loan_products"

    lender_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("lenders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    loan_type: Mapped[LoanType] = mapped_column(
        SQLEnum(
            LoanType,
            name="loan_type",
            values_callable=enum_values,
        ),
        nullable=False,
        index=True,
    )

    # Loan amount bounds
    min_loan_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2), nullable=True
    )
    max_loan_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2), nullable=True
    )

    # Borrower criteria
    min_credit_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    citizen_requirements: Mapped[list[str]] = mapped_column(
        JSONList, nullable=False, default=list
    )  # e.g., ["US Citizen", "Permanent Resident"]

    # Property criteria
    states_funded: Mapped[list[str]] = mapped_column(
        JSONList, nullable=False, default=list
    )  # e.g., ["TX", "FL"]
    seasoning_period_months: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True
    )
    accepts_rehab_loans: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    max_ltv_percentage: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(5, 2), nullable=True
    )  # e.g., 75.00 for 75%

    # Appraisal
    appraisal_required: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    appraisal_requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    lender: Mapped["Lender"] = relationship("Lender", back_populates="loan_products")

    def __repr__(self) -> str:
        return (
            f"<LoanProduct(id={self.id}, lender_id={self.lender_id}, "
            f"loan_type={self.loan_type.value}, name={self.name!r})>"
        )
