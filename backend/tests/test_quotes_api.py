"""API tests for quote CRUD and the matching endpoints."""

from __future__ import annotations

from unittest.mock import patch

import pytest

APPLICANT = {
    "full_name": "John Smith",
    "citizenship": "US Citizen",
    "credit_score": 720,
    "phone_number": "555-0101",
    "company_name": "Smith Holdings LLC",
    "company_ein": "12-3456789",
    "company_state": "TX",
    "liquid_funds_available": "150000",
    "properties_owned": 2,
    "total_equity_value": "400000",
    "total_debt_value": "250000",
}

LOAN_DETAILS = {
    "purpose_of_loan": "purchase",
    "requested_loan_amount": "450000",
    "purchase_price": "600000",
    "has_rehab_funds_requested": False,
    "exit_plan": "sell",
}

PRIORITIES = {
    "speed_of_closing": True,
    "low_fees": False,
    "high_leverage": True,
}


async def _create_quote(client, **overrides) -> dict:
    payload = {
        "address": "123 Main St, Austin, TX 78701",
        "loan_type": "bridge_fix_and_flip",
    }
    payload.update(overrides)
    response = await client.post("/api/v1/quotes/", json=payload)
    assert response.status_code == 201
    return response.json()


# ── Quote CRUD ───────────────────────────────────────────────────────


class TestQuoteCrud:
    @pytest.mark.asyncio()
    async def test_create_quote_starts_as_draft(self, client):
        quote = await _create_quote(client)
        assert quote["status"] == "draft"
        assert quote["is_draft"] is True
        assert quote["applicant_info"] is None
        assert quote["loan_details"] is None

    @pytest.mark.asyncio()
    async def test_get_unknown_quote(self, client):
        response = await client.get("/api/v1/quotes/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Quote not found"}

    @pytest.mark.asyncio()
    async def test_update_address(self, client):
        quote = await _create_quote(client)
        response = await client.put(
            f"/api/v1/quotes/{quote['id']}",
            json={"address": "9 Ocean Dr, Miami, FL 33139"},
        )
        assert response.status_code == 200
        assert response.json()["address"] == "9 Ocean Dr, Miami, FL 33139"
        assert response.json()["loan_type"] == "bridge_fix_and_flip"

    @pytest.mark.asyncio()
    async def test_save_sub_records_and_submit(self, client):
        quote = await _create_quote(client)
        quote_id = quote["id"]

        response = await client.put(
            f"/api/v1/quotes/{quote_id}/applicant-info", json=APPLICANT
        )
        assert response.status_code == 200
        assert response.json()["credit_score"] == 720

        response = await client.put(
            f"/api/v1/quotes/{quote_id}/loan-details", json=LOAN_DETAILS
        )
        assert response.status_code == 200
        assert response.json()["requested_loan_amount"] == "450000"

        response = await client.post(f"/api/v1/quotes/{quote_id}/submit")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "submitted"
        assert body["is_draft"] is False
        assert body["applicant_info"]["full_name"] == "John Smith"

    @pytest.mark.asyncio()
    async def test_applicant_info_is_replaced_not_duplicated(self, client):
        quote = await _create_quote(client)
        url = f"/api/v1/quotes/{quote['id']}/applicant-info"
        await client.put(url, json=APPLICANT)
        await client.put(url, json={**APPLICANT, "credit_score": 650})

        response = await client.get(f"/api/v1/quotes/{quote['id']}")
        assert response.json()["applicant_info"]["credit_score"] == 650

    @pytest.mark.asyncio()
    async def test_submit_requires_loan_details(self, client):
        quote = await _create_quote(client)
        await client.put(f"/api/v1/quotes/{quote['id']}/applicant-info", json=APPLICANT)

        response = await client.post(f"/api/v1/quotes/{quote['id']}/submit")
        assert response.status_code == 400
        assert response.json()["field"] == "loan_details"

    @pytest.mark.asyncio()
    async def test_portfolio_values_required_when_properties_owned(self, client):
        quote = await _create_quote(client)
        payload = {**APPLICANT, "total_equity_value": None}
        response = await client.put(
            f"/api/v1/quotes/{quote['id']}/applicant-info", json=payload
        )
        assert response.status_code == 422

    @pytest.mark.asyncio()
    async def test_non_numeric_amount_rejected(self, client):
        quote = await _create_quote(client)
        payload = {**LOAN_DETAILS, "purchase_price": "six hundred"}
        response = await client.put(
            f"/api/v1/quotes/{quote['id']}/loan-details", json=payload
        )
        assert response.status_code == 422

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("amount", ["1E+1000000", "1E-1000000"])
    async def test_out_of_range_amount_rejected(self, client, amount):
        quote = await _create_quote(client)
        payload = {**LOAN_DETAILS, "requested_loan_amount": amount}
        response = await client.put(
            f"/api/v1/quotes/{quote['id']}/loan-details", json=payload
        )
        assert response.status_code == 422

    @pytest.mark.asyncio()
    async def test_rental_info_only_for_dscr_quotes(self, client):
        quote = await _create_quote(client)
        response = await client.put(
            f"/api/v1/quotes/{quote['id']}/rental-info",
            json={"loan_amount": "300000", "monthly_rental_income": "3200"},
        )
        assert response.status_code == 400

        dscr = await _create_quote(client, loan_type="dscr_rental")
        response = await client.put(
            f"/api/v1/quotes/{dscr['id']}/rental-info",
            json={"loan_amount": "300000", "monthly_rental_income": "3200"},
        )
        assert response.status_code == 200
        assert response.json()["monthly_rental_income"] == "3200"


class TestQuoteRecords:
    @pytest.mark.asyncio()
    async def test_read_saved_sub_records(self, client):
        quote = await _create_quote(client)
        quote_id = quote["id"]
        await client.put(f"/api/v1/quotes/{quote_id}/applicant-info", json=APPLICANT)
        await client.put(f"/api/v1/quotes/{quote_id}/loan-details", json=LOAN_DETAILS)

        response = await client.get(f"/api/v1/quotes/{quote_id}/applicant-info")
        assert response.status_code == 200
        assert response.json()["company_name"] == "Smith Holdings LLC"

        response = await client.get(f"/api/v1/quotes/{quote_id}/loan-details")
        assert response.status_code == 200
        assert response.json()["purchase_price"] == "600000"

    @pytest.mark.asyncio()
    async def test_unsaved_sub_record_is_404(self, client):
        quote = await _create_quote(client, loan_type="dscr_rental")

        response = await client.get(f"/api/v1/quotes/{quote['id']}/rental-info")
        assert response.status_code == 404
        assert response.json() == {"error": "Quote rental info not found"}

        response = await client.get(f"/api/v1/quotes/{quote['id']}/applicant-info")
        assert response.json() == {"error": "Quote applicant info not found"}

    @pytest.mark.asyncio()
    async def test_sub_record_of_unknown_quote(self, client):
        response = await client.get("/api/v1/quotes/999/loan-details")
        assert response.status_code == 404
        assert response.json() == {"error": "Quote not found"}

    @pytest.mark.asyncio()
    async def test_save_and_read_priorities(self, client):
        quote = await _create_quote(client)
        url = f"/api/v1/quotes/{quote['id']}/priorities"

        response = await client.get(url)
        assert response.status_code == 404
        assert response.json() == {"error": "Quote priorities not found"}

        response = await client.put(url, json=PRIORITIES)
        assert response.status_code == 200
        assert response.json()["high_leverage"] is True
        assert response.json()["comments"] is None

        await client.put(url, json={**PRIORITIES, "comments": "Rate matters less"})
        response = await client.get(url)
        assert response.status_code == 200
        assert response.json()["comments"] == "Rate matters less"

        response = await client.get(f"/api/v1/quotes/{quote['id']}")
        assert response.json()["priorities"]["speed_of_closing"] is True

    @pytest.mark.asyncio()
    async def test_priority_flags_are_required(self, client):
        quote = await _create_quote(client)
        response = await client.put(
            f"/api/v1/quotes/{quote['id']}/priorities",
            json={"speed_of_closing": True, "high_leverage": False},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio()
    async def test_count_by_status(self, client, create_quote):
        submitted = await create_quote()
        submitted_id = submitted.id
        await create_quote()
        response = await client.post(f"/api/v1/quotes/{submitted_id}/submit")
        assert response.status_code == 200

        response = await client.get("/api/v1/quotes/count-by-status")
        assert response.status_code == 200
        assert response.json() == {
            "counts": {"draft": 1, "submitted": 1, "matched": 0},
            "total": 2,
        }


# ── Matching ─────────────────────────────────────────────────────────


class TestMatchEndpoints:
    @pytest.mark.asyncio()
    @pytest.mark.parametrize("bad_id", ["abc", "0", "-1", "1.5", "\u00b2", "\u0661\u0662"])
    async def test_invalid_quote_id(self, client, bad_id):
        response = await client.post(f"/api/v1/quotes/{bad_id}/match")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid quote ID"

        response = await client.get(f"/api/v1/quotes/{bad_id}/matches")
        assert response.status_code == 400

    @pytest.mark.asyncio()
    async def test_unknown_quote(self, client):
        response = await client.post("/api/v1/quotes/4242/match")
        assert response.status_code == 404
        assert response.json() == {"error": "Quote not found"}

        response = await client.get("/api/v1/quotes/4242/matches")
        assert response.status_code == 404

    @pytest.mark.asyncio()
    async def test_matches_empty_before_first_run(self, client, create_quote):
        quote = await create_quote()
        response = await client.get(f"/api/v1/quotes/{quote.id}/matches")
        assert response.status_code == 200
        assert response.json() == {
            "quote_id": quote.id,
            "total_matches": 0,
            "qualified_count": 0,
            "disqualified_count": 0,
            "qualified_lenders": [],
            "disqualified_lenders": [],
        }

    @pytest.mark.asyncio()
    async def test_match_run_response_shape(self, client, create_lender, create_quote):
        good = await create_lender(company_name="Good Lender")
        good_id = good.id
        good_product_id = good.loan_products[0].id
        await create_lender(company_name="Picky Lender", min_credit_score=760)
        quote = await create_quote(credit_score=720)
        quote_id = quote.id

        response = await client.post(f"/api/v1/quotes/{quote_id}/match")
        assert response.status_code == 200
        body = response.json()

        assert body["quote_id"] == quote_id
        assert body["total_lenders"] == 2
        assert body["qualified_count"] == 1
        assert body["disqualified_count"] == 1

        qualified = body["qualified_lenders"][0]
        assert qualified["lender_id"] == good_id
        assert qualified["loan_product_id"] == good_product_id
        assert qualified["lender"] == {
            "id": good_id,
            "company_name": "Good Lender",
            "email": "good.lender@example.com",
            "contact_name": "Jane Doe",
            "phone_number": "555-0100",
        }
        assert qualified["disqualification_reasons"] == []

        disqualified = body["disqualified_lenders"][0]
        assert disqualified["match_status"] == "disqualified"
        assert disqualified["disqualification_reasons"] == [
            {
                "field": "credit_score",
                "reason": "Credit score is below lender minimum",
                "lenderValue": 760,
                "quoteValue": 720,
            }
        ]

    @pytest.mark.asyncio()
    async def test_matches_read_back_last_run(self, client, create_lender, create_quote):
        await create_lender(company_name="Good Lender")
        await create_lender(company_name="Picky Lender", min_credit_score=760)
        quote = await create_quote(credit_score=720)
        await client.post(f"/api/v1/quotes/{quote.id}/match")

        response = await client.get(f"/api/v1/quotes/{quote.id}/matches")
        assert response.status_code == 200
        body = response.json()
        assert body["total_matches"] == 2
        assert body["qualified_count"] == 1
        assert body["qualified_lenders"][0]["lender"]["company_name"] == "Good Lender"
        reasons = body["disqualified_lenders"][0]["disqualification_reasons"]
        assert reasons[0]["lenderValue"] == 760
        assert reasons[0]["quoteValue"] == 720

    @pytest.mark.asyncio()
    async def test_out_of_range_stored_amount_is_a_reason(
        self, client, create_lender, create_quote
    ):
        await create_lender()
        quote = await create_quote(requested_loan_amount="1E+1000000")

        response = await client.post(f"/api/v1/quotes/{quote.id}/match")
        assert response.status_code == 200
        body = response.json()
        assert body["disqualified_count"] == 1
        assert body["disqualified_lenders"][0]["disqualification_reasons"] == [
            {
                "field": "loan_amount",
                "reason": "Invalid loan amount format",
                "lenderValue": "valid number",
                "quoteValue": "1E+1000000",
            }
        ]

    @pytest.mark.asyncio()
    async def test_loan_amount_quote_value_is_numeric(
        self, client, create_lender, create_quote
    ):
        await create_lender(max_ltv_percentage=None)
        quote = await create_quote(requested_loan_amount="500000.5")

        response = await client.post(f"/api/v1/quotes/{quote.id}/match")
        reasons = response.json()["disqualified_lenders"][0]["disqualification_reasons"]
        assert reasons == [
            {
                "field": "loan_amount",
                "reason": "Requested loan amount exceeds lender maximum",
                "lenderValue": "500000",
                "quoteValue": 500000.5,
            }
        ]

    @pytest.mark.asyncio()
    async def test_unexpected_failure_is_not_leaked(self, client, create_quote):
        quote = await create_quote()
        with patch(
            "app.api.v1.endpoints.quotes.MatchingService.match_quote",
            side_effect=RuntimeError("connection refused by 10.0.0.5"),
        ):
            response = await client.post(f"/api/v1/quotes/{quote.id}/match")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to match quote with lenders"}

    @pytest.mark.asyncio()
    async def test_unexpected_read_failure(self, client, create_quote):
        quote = await create_quote()
        with patch(
            "app.api.v1.endpoints.quotes.MatchingService.get_matches",
            side_effect=RuntimeError("boom"),
        ):
            response = await client.get(f"/api/v1/quotes/{quote.id}/matches")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get lender matches"}


@pytest.mark.asyncio()
async def test_health(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["database"] == "healthy"
