"""Repository for persisted quote/lender match results."""

import json
from typing import Any, Dict, List, Optional

from sqlalchemy import case, delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.enums import MatchStatus
from app.models.domain.match import QuoteLenderMatch
from app.repositories.base import BaseRepository

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class MatchRepository(BaseRepository[QuoteLenderMatch]):
    """
    Repository for quote/lender match results.

    Rows are keyed by (quote_id, lender_id) and written with the database's
    native INSERT ... ON CONFLICT DO UPDATE, so re-running matching
    overwrites the previous verdict in place.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the match repository.

        Args:
            db: Async database session
        """
        super().__init__(QuoteLenderMatch, db)

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        insert_fn = _INSERTS.get(dialect)
        if insert_fn is None:
            raise NotImplementedError(f"Upsert is not supported for dialect: {dialect}")
        return insert_fn(QuoteLenderMatch)

    async def upsert_match(
        self,
        quote_id: int,
        lender_id: int,
        match_status: MatchStatus,
        disqualification_reasons: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """
        Insert or overwrite the match row for a (quote, lender) pair.

        Args:
            quote_id: ID of the quote
            lender_id: ID of the lender
            match_status: Verdict for the pair
            disqualification_reasons: Serialized reasons; stored as NULL when empty
        """
        reason_json = (
            json.dumps(disqualification_reasons) if disqualification_reasons else None
        )

        stmt = self._insert().values(
            quote_id=quote_id,
            lender_id=lender_id,
            match_status=match_status,
            disqualification_reason=reason_json,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[QuoteLenderMatch.quote_id, QuoteLenderMatch.lender_id],
            set_={
                "match_status": stmt.excluded.match_status,
                "disqualification_reason": stmt.excluded.disqualification_reason,
                "updated_at": func.now(),
            },
        )
        await self.db.execute(stmt)

    async def get_matches_for_quote(self, quote_id: int) -> List[QuoteLenderMatch]:
        """
        Get all persisted matches for a quote, qualified lenders first.

        Args:
            quote_id: ID of the quote

        Returns:
            Matches with lender loaded; empty if matching never ran
        """
        qualified_first = case(
            (QuoteLenderMatch.match_status == MatchStatus.QUALIFIED, 0),
            else_=1,
        )
        stmt = (
            select(QuoteLenderMatch)
            .where(QuoteLenderMatch.quote_id == quote_id)
            .options(selectinload(QuoteLenderMatch.lender))
            .order_by(qualified_first, QuoteLenderMatch.lender_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count_for_quote(self, quote_id: int) -> int:
        return await self.count(quote_id=quote_id)

    async def delete_for_lender(self, lender_id: int) -> None:
        """Remove every match row recorded against a lender."""
        await self.db.execute(
            delete(QuoteLenderMatch).where(QuoteLenderMatch.lender_id == lender_id)
        )
