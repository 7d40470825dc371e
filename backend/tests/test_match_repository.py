"""Tests for persisted match results keyed by (quote, lender)."""

from __future__ import annotations

import pytest

from app.core.enums import MatchStatus
from app.repositories.match_repository import MatchRepository

CREDIT_REASON = {
    "field": "credit_score",
    "reason": "Credit score is below lender minimum",
    "lenderValue": 680,
    "quoteValue": 600,
}


@pytest.mark.asyncio()
async def test_upsert_overwrites_existing_pair(db_session, create_lender, create_quote):
    lender = await create_lender()
    quote = await create_quote()
    repo = MatchRepository(db_session)

    await repo.upsert_match(quote.id, lender.id, MatchStatus.DISQUALIFIED, [CREDIT_REASON])
    await db_session.commit()
    await repo.upsert_match(quote.id, lender.id, MatchStatus.QUALIFIED, [])
    await db_session.commit()

    matches = await repo.get_matches_for_quote(quote.id)
    assert len(matches) == 1
    assert matches[0].match_status == MatchStatus.QUALIFIED
    assert matches[0].disqualification_reason is None
    assert matches[0].disqualification_reasons == []


@pytest.mark.asyncio()
async def test_reasons_round_trip_as_list(db_session, create_lender, create_quote):
    lender = await create_lender()
    quote = await create_quote()
    repo = MatchRepository(db_session)

    await repo.upsert_match(quote.id, lender.id, MatchStatus.DISQUALIFIED, [CREDIT_REASON])
    await db_session.commit()

    matches = await repo.get_matches_for_quote(quote.id)
    assert matches[0].disqualification_reasons == [CREDIT_REASON]
    assert matches[0].lender.company_name == "Acme Capital"


@pytest.mark.asyncio()
async def test_qualified_rows_come_first(db_session, create_lender, create_quote):
    first = await create_lender(company_name="First Lender")
    second = await create_lender(company_name="Second Lender")
    third = await create_lender(company_name="Third Lender")
    quote = await create_quote()
    repo = MatchRepository(db_session)

    await repo.upsert_match(quote.id, first.id, MatchStatus.DISQUALIFIED, [CREDIT_REASON])
    await repo.upsert_match(quote.id, second.id, MatchStatus.QUALIFIED)
    await repo.upsert_match(quote.id, third.id, MatchStatus.DISQUALIFIED, [CREDIT_REASON])
    await db_session.commit()

    matches = await repo.get_matches_for_quote(quote.id)
    assert [m.lender_id for m in matches] == [second.id, first.id, third.id]
    assert await repo.count_for_quote(quote.id) == 3


@pytest.mark.asyncio()
async def test_never_matched_quote_has_no_rows(db_session, create_quote):
    quote = await create_quote()
    assert await MatchRepository(db_session).get_matches_for_quote(quote.id) == []
