"""Repository for quotes and their sub-records."""

from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.enums import QuoteStatus
from app.models.domain.quote import (
    Quote,
    QuoteApplicantInfo,
    QuoteLoanDetails,
    QuotePriorities,
    QuoteRentalInfo,
)
from app.repositories.base import BaseRepository


class QuoteRepository(BaseRepository[Quote]):
    """
    Repository for Quote with specialized queries.

    Provides eager loading of the applicant info, loan details and rental
    info sub-records the matching engine reads.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the quote repository.

        Args:
            db: Async database session
        """
        super().__init__(Quote, db)

    async def get_by_id_with_relations(self, id: int) -> Optional[Quote]:
        """
        Retrieve a quote by ID with all sub-records eagerly loaded.

        Uses selectinload to avoid lazy loads on the async session.

        Args:
            id: The ID of the quote

        Returns:
            The quote with applicant_info, loan_details and rental_info
            loaded, or None if not found
        """
        stmt = (
            select(Quote)
            .where(Quote.id == id)
            .options(
                selectinload(Quote.applicant_info),
                selectinload(Quote.loan_details),
                selectinload(Quote.rental_info),
                selectinload(Quote.priorities),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_applicant_info(self, quote_id: int) -> Optional[QuoteApplicantInfo]:
        stmt = select(QuoteApplicantInfo).where(QuoteApplicantInfo.quote_id == quote_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_loan_details(self, quote_id: int) -> Optional[QuoteLoanDetails]:
        stmt = select(QuoteLoanDetails).where(QuoteLoanDetails.quote_id == quote_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_rental_info(self, quote_id: int) -> Optional[QuoteRentalInfo]:
        stmt = select(QuoteRentalInfo).where(QuoteRentalInfo.quote_id == quote_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_priorities(self, quote_id: int) -> Optional[QuotePriorities]:
        stmt = select(QuotePriorities).where(QuotePriorities.quote_id == quote_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def count_by_status(self) -> Dict[QuoteStatus, int]:
        """
        Count quotes grouped by workflow status.

        Returns:
            Mapping of status to count; statuses with no quotes are absent
        """
        stmt = select(Quote.status, func.count(Quote.id)).group_by(Quote.status)
        result = await self.db.execute(stmt)
        return {status: count for status, count in result.all()}
