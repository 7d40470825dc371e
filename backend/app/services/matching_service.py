"""Matching service for running and persisting lender matches for a quote."""

import logging
from collections import Counter
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import QuoteStatus
from app.core.exceptions import MatchPersistenceError, QuoteNotFoundError
from app.models.domain.match import QuoteLenderMatch
from app.repositories.lender_repository import LenderRepository
from app.repositories.match_repository import MatchRepository
from app.repositories.quote_repository import QuoteRepository
from app.services.rule_engine.matcher import Matcher, MatchVerdict

logger = logging.getLogger(__name__)


class MatchingService:
    """
    Matching service to orchestrate quote/lender matching.

    This service:
    - Loads the quote snapshot and its candidate loan products
    - Runs the matcher over every candidate product
    - Persists one verdict per (quote, lender) in a single transaction
    - Reads back the last persisted run
    """

    def __init__(self, db: AsyncSession, matcher: Optional[Matcher] = None):
        """
        Initialize the matching service.

        Args:
            db: Async database session
            matcher: Matcher to use (a default one is built if omitted)
        """
        self.db = db
        self.quote_repo = QuoteRepository(db)
        self.lender_repo = LenderRepository(db)
        self.match_repo = MatchRepository(db)
        self.matcher = matcher or Matcher()

    async def evaluate(
        self, quote_id: int, now: Optional[datetime] = None
    ) -> List[MatchVerdict]:
        """
        Evaluate a quote against every candidate loan product.

        Candidates are the products whose loan type equals the quote's; a
        quote without a loan type is evaluated against every product.

        Args:
            quote_id: ID of the quote
            now: Evaluation time (defaults to the current UTC time)

        Returns:
            One verdict per candidate loan product

        Raises:
            QuoteNotFoundError: If the quote does not exist
        """
        quote = await self.quote_repo.get_by_id_with_relations(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)

        products = await self.lender_repo.get_loan_products_by_type(quote.loan_type)
        logger.info(
            f"Matching quote {quote_id} against {len(products)} loan products"
        )

        return self.matcher.match_quote_to_products(quote, products, now=now)

    async def save(self, quote_id: int, verdicts: List[MatchVerdict]) -> None:
        """
        Persist verdicts as one row per (quote, lender), all or nothing.

        Verdicts are upserted in order, so when a lender has several
        candidate products only the last one's verdict is kept.

        Args:
            quote_id: ID of the quote
            verdicts: Verdicts from evaluate()

        Raises:
            MatchPersistenceError: If any write fails; nothing is committed
        """
        lender_counts = Counter(verdict.lender_id for verdict in verdicts)
        for lender_id, count in lender_counts.items():
            if count > 1:
                logger.debug(
                    f"Lender {lender_id} has {count} candidate products for quote "
                    f"{quote_id}; only the last verdict is stored"
                )

        try:
            for verdict in verdicts:
                await self.match_repo.upsert_match(
                    quote_id=quote_id,
                    lender_id=verdict.lender_id,
                    match_status=verdict.match_status,
                    disqualification_reasons=verdict.reasons_as_dicts(),
                )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Error saving match results for quote {quote_id}: {str(e)}",
                exc_info=True,
            )
            raise MatchPersistenceError("Failed to save match results") from e

    async def match_quote(
        self, quote_id: int, now: Optional[datetime] = None
    ) -> List[MatchVerdict]:
        """
        Run matching for a quote and persist the results.

        A submitted quote is marked as matched once the results are saved.

        Args:
            quote_id: ID of the quote
            now: Evaluation time (defaults to the current UTC time)

        Returns:
            The verdicts that were persisted

        Raises:
            QuoteNotFoundError: If the quote does not exist
            MatchPersistenceError: If the results could not be saved
        """
        verdicts = await self.evaluate(quote_id, now=now)
        await self.save(quote_id, verdicts)

        quote = await self.quote_repo.get_by_id(quote_id)
        if quote is not None and quote.status == QuoteStatus.SUBMITTED:
            quote.status = QuoteStatus.MATCHED
            await self.db.commit()

        qualified = sum(1 for verdict in verdicts if verdict.is_qualified)
        logger.info(
            f"Quote {quote_id} matched: {qualified} qualified, "
            f"{len(verdicts) - qualified} disqualified"
        )
        return verdicts

    async def get_matches(self, quote_id: int) -> List[QuoteLenderMatch]:
        """
        Get the persisted results of the last matching run for a quote.

        Args:
            quote_id: ID of the quote

        Returns:
            Matches ordered qualified first; empty if matching never ran
        """
        return await self.match_repo.get_matches_for_quote(quote_id)

    async def quote_exists(self, quote_id: int) -> bool:
        return await self.quote_repo.exists(quote_id)
