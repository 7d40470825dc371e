"""Quote service for business logic and CRUD operations."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import LoanType, QuoteStatus
from app.core.exceptions import (
    QuoteNotFoundError,
    QuoteRecordNotFoundError,
    ValidationError,
)
from app.models.domain.quote import (
    Quote,
    QuoteApplicantInfo,
    QuoteLoanDetails,
    QuotePriorities,
    QuoteRentalInfo,
)
from app.repositories.quote_repository import QuoteRepository

logger = logging.getLogger(__name__)


class QuoteService:
    """
    Quote service for managing quotes and their sub-records.

    Quotes are created as drafts; applicant info, loan details and rental
    info are attached one at a time, and submit_quote moves a complete
    quote out of draft.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the quote service.

        Args:
            db: Async database session
        """
        self.db = db
        self.repo = QuoteRepository(db)

    async def create_quote(
        self,
        address: str,
        loan_type: Optional[LoanType] = None,
        is_living_in_property: bool = False,
    ) -> Quote:
        """
        Create a new draft quote.

        Args:
            address: Property address (free text, includes the state)
            loan_type: Loan type; fixed once the quote is created
            is_living_in_property: Whether the applicant lives in the property

        Returns:
            Created quote with sub-records loaded
        """
        quote = Quote(
            address=address,
            loan_type=loan_type,
            is_living_in_property=is_living_in_property,
            is_draft=True,
            status=QuoteStatus.DRAFT,
        )
        self.db.add(quote)
        await self.db.commit()

        logger.info(f"Created quote {quote.id}")
        return await self.repo.get_by_id_with_relations(quote.id)

    async def get_quote(self, quote_id: int) -> Quote:
        """
        Retrieve a quote by ID with all sub-records.

        Raises:
            QuoteNotFoundError: If the quote does not exist
        """
        quote = await self.repo.get_by_id_with_relations(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote

    async def update_quote(self, quote_id: int, data: Dict[str, Any]) -> Quote:
        """
        Update a quote's address or occupancy flag.

        Args:
            quote_id: ID of the quote
            data: Fields to update (unset fields are ignored)

        Returns:
            Updated quote with sub-records loaded
        """
        quote = await self.get_quote(quote_id)
        if "loan_type" in data:
            raise ValidationError("Loan type cannot be changed", field="loan_type")

        for field, value in data.items():
            if value is not None:
                setattr(quote, field, value)

        await self.db.commit()
        return await self.repo.get_by_id_with_relations(quote_id)

    async def upsert_applicant_info(
        self, quote_id: int, data: Dict[str, Any]
    ) -> QuoteApplicantInfo:
        """Create or replace the applicant info for a quote."""
        await self.get_quote(quote_id)
        existing = await self.repo.get_applicant_info(quote_id)
        return await self._upsert_sub_record(QuoteApplicantInfo, existing, quote_id, data)

    async def upsert_loan_details(
        self, quote_id: int, data: Dict[str, Any]
    ) -> QuoteLoanDetails:
        """Create or replace the loan details for a quote."""
        await self.get_quote(quote_id)
        existing = await self.repo.get_loan_details(quote_id)
        return await self._upsert_sub_record(QuoteLoanDetails, existing, quote_id, data)

    async def upsert_rental_info(
        self, quote_id: int, data: Dict[str, Any]
    ) -> QuoteRentalInfo:
        """
        Create or replace the rental info for a quote.

        Raises:
            ValidationError: If the quote is not a DSCR rental quote
        """
        quote = await self.get_quote(quote_id)
        if quote.loan_type not in (None, LoanType.DSCR_RENTAL):
            raise ValidationError(
                "Rental info is only accepted for DSCR rental quotes",
                field="loan_type",
            )
        existing = await self.repo.get_rental_info(quote_id)
        return await self._upsert_sub_record(QuoteRentalInfo, existing, quote_id, data)

    async def upsert_priorities(
        self, quote_id: int, data: Dict[str, Any]
    ) -> QuotePriorities:
        """Create or replace the applicant's lender priorities for a quote."""
        await self.get_quote(quote_id)
        existing = await self.repo.get_priorities(quote_id)
        return await self._upsert_sub_record(QuotePriorities, existing, quote_id, data)

    async def get_applicant_info(self, quote_id: int) -> QuoteApplicantInfo:
        """
        Retrieve the applicant info saved on a quote.

        Raises:
            QuoteNotFoundError: If the quote does not exist
            QuoteRecordNotFoundError: If no applicant info was saved
        """
        return await self._get_sub_record(
            quote_id, self.repo.get_applicant_info, "applicant info"
        )

    async def get_loan_details(self, quote_id: int) -> QuoteLoanDetails:
        return await self._get_sub_record(
            quote_id, self.repo.get_loan_details, "loan details"
        )

    async def get_rental_info(self, quote_id: int) -> QuoteRentalInfo:
        return await self._get_sub_record(
            quote_id, self.repo.get_rental_info, "rental info"
        )

    async def get_priorities(self, quote_id: int) -> QuotePriorities:
        return await self._get_sub_record(
            quote_id, self.repo.get_priorities, "priorities"
        )

    async def _get_sub_record(self, quote_id: int, loader, record: str):
        if not await self.repo.exists(quote_id):
            raise QuoteNotFoundError(quote_id)
        sub_record = await loader(quote_id)
        if sub_record is None:
            raise QuoteRecordNotFoundError(quote_id, record)
        return sub_record

    async def _upsert_sub_record(self, model, existing, quote_id: int, data: Dict[str, Any]):
        if existing is None:
            record = model(quote_id=quote_id, **data)
            self.db.add(record)
        else:
            record = existing
            for field, value in data.items():
                setattr(record, field, value)

        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def submit_quote(self, quote_id: int) -> Quote:
        """
        Move a draft quote to submitted.

        Raises:
            QuoteNotFoundError: If the quote does not exist
            ValidationError: If applicant info or loan details are missing
        """
        quote = await self.get_quote(quote_id)
        if quote.applicant_info is None:
            raise ValidationError(
                "Applicant info is required before submitting", field="applicant_info"
            )
        if quote.loan_details is None:
            raise ValidationError(
                "Loan details are required before submitting", field="loan_details"
            )

        if quote.is_draft:
            quote.is_draft = False
            quote.status = QuoteStatus.SUBMITTED
            await self.db.commit()
            logger.info(f"Quote {quote_id} submitted")

        return await self.repo.get_by_id_with_relations(quote_id)

    async def count_by_status(self) -> Dict[str, int]:
        """
        Count quotes in each workflow state.

        Every status is present in the result, with zero when no quote
        is in that state.
        """
        counts = await self.repo.count_by_status()
        return {status.value: counts.get(status, 0) for status in QuoteStatus}
