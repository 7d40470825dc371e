"""Shared fixtures: in-memory SQLite database, session, and HTTP client."""

from __future__ import annotations

import os

# Must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"

from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.enums import LoanType
from app.db.base import Base
from app.deps import get_session
from app.main import app
from app.models.domain import (
    Lender,
    LoanProduct,
    Quote,
    QuoteApplicantInfo,
    QuoteLoanDetails,
)


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(engine):
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(db_session):
    async def _override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


# ── Seed helpers ─────────────────────────────────────────────────────


@pytest.fixture()
def create_lender(db_session):
    """Factory persisting a lender with a single loan product."""

    async def _create(
        company_name: str = "Acme Capital",
        email: str | None = None,
        **product_fields,
    ) -> Lender:
        lender = Lender(
            company_name=company_name,
            email=email or f"{company_name.lower().replace(' ', '.')}@example.com",
            contact_name="Jane Doe",
            phone_number="555-0100",
        )
        product_defaults = {
            "loan_type": LoanType.BRIDGE_FIX_AND_FLIP,
            "min_loan_amount": Decimal("100000"),
            "max_loan_amount": Decimal("500000"),
            "min_credit_score": 680,
            "citizen_requirements": ["US Citizen", "Permanent Resident"],
            "states_funded": ["TX", "FL"],
            "accepts_rehab_loans": True,
            "max_ltv_percentage": Decimal("80"),
        }
        product_defaults.update(product_fields)
        lender.loan_products.append(LoanProduct(**product_defaults))
        db_session.add(lender)
        await db_session.commit()
        return lender

    return _create


@pytest.fixture()
def create_quote(db_session):
    """Factory persisting a quote with applicant info and loan details."""

    async def _create(
        address: str = "123 Main St, Austin, TX 78701",
        loan_type: LoanType | None = LoanType.BRIDGE_FIX_AND_FLIP,
        credit_score: int = 720,
        citizenship: str = "US Citizen",
        requested_loan_amount: str | None = "450000",
        purchase_price: str = "600000",
        property_purchase_date: date | None = None,
        has_rehab_funds_requested: bool = False,
    ) -> Quote:
        quote = Quote(address=address, loan_type=loan_type)
        quote.applicant_info = QuoteApplicantInfo(
            full_name="John Smith",
            citizenship=citizenship,
            credit_score=credit_score,
            properties_owned=0,
        )
        quote.loan_details = QuoteLoanDetails(
            requested_loan_amount=requested_loan_amount,
            purchase_price=purchase_price,
            property_purchase_date=property_purchase_date,
            has_rehab_funds_requested=has_rehab_funds_requested,
        )
        db_session.add(quote)
        await db_session.commit()
        return quote

    return _create
