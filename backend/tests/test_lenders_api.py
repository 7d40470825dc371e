"""API tests for lender and loan product management."""

from __future__ import annotations

from decimal import Decimal

import pytest

LENDER = {
    "company_name": "Lone Star Lending",
    "email": "deals@lonestar.example.com",
    "contact_name": "Ana Ruiz",
    "phone_number": "555-0199",
}

PRODUCT = {
    "name": "Fix & Flip Express",
    "loan_type": "bridge_fix_and_flip",
    "min_loan_amount": "100000",
    "max_loan_amount": "500000",
    "min_credit_score": 680,
    "citizen_requirements": ["US Citizen"],
    "states_funded": ["TX"],
    "seasoning_period_months": 6,
    "accepts_rehab_loans": True,
    "max_ltv_percentage": "75",
}


async def _create_lender(client, **overrides) -> dict:
    response = await client.post("/api/v1/lenders/", json={**LENDER, **overrides})
    assert response.status_code == 201
    return response.json()


async def _create_product(client, lender_id: int, **overrides) -> dict:
    response = await client.post(
        f"/api/v1/lenders/{lender_id}/loan-products", json={**PRODUCT, **overrides}
    )
    assert response.status_code == 201
    return response.json()


class TestLenders:
    @pytest.mark.asyncio()
    async def test_create_and_get_lender(self, client):
        lender = await _create_lender(client)
        assert lender["loan_products"] == []

        response = await client.get(f"/api/v1/lenders/{lender['id']}")
        assert response.status_code == 200
        assert response.json()["company_name"] == "Lone Star Lending"

    @pytest.mark.asyncio()
    async def test_duplicate_email_rejected(self, client):
        await _create_lender(client)
        response = await client.post("/api/v1/lenders/", json=LENDER)
        assert response.status_code == 400
        assert response.json()["field"] == "email"

    @pytest.mark.asyncio()
    async def test_list_lenders_by_company_name(self, client):
        await _create_lender(client, company_name="Zephyr Capital", email="z@example.com")
        await _create_lender(client, company_name="Atlas Funding", email="a@example.com")

        response = await client.get("/api/v1/lenders/")
        assert response.status_code == 200
        assert [lender["company_name"] for lender in response.json()] == [
            "Atlas Funding",
            "Zephyr Capital",
        ]

    @pytest.mark.asyncio()
    async def test_unknown_lender(self, client):
        response = await client.get("/api/v1/lenders/77")
        assert response.status_code == 404
        assert response.json() == {"error": "Lender not found"}

    @pytest.mark.asyncio()
    async def test_update_lender(self, client):
        lender = await _create_lender(client)
        response = await client.put(
            f"/api/v1/lenders/{lender['id']}",
            json={"contact_name": "Marco Ruiz", "email": LENDER["email"]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["contact_name"] == "Marco Ruiz"
        assert body["company_name"] == "Lone Star Lending"

    @pytest.mark.asyncio()
    async def test_update_to_taken_email_rejected(self, client):
        await _create_lender(client)
        other = await _create_lender(client, email="other@example.com")

        response = await client.put(
            f"/api/v1/lenders/{other['id']}", json={"email": LENDER["email"]}
        )
        assert response.status_code == 400
        assert response.json()["field"] == "email"

    @pytest.mark.asyncio()
    async def test_disable_lender(self, client):
        lender = await _create_lender(client)

        response = await client.post(f"/api/v1/lenders/{lender['id']}/disable")
        assert response.status_code == 200
        assert response.json() == {"message": "Lender disabled successfully"}

        response = await client.get(f"/api/v1/lenders/{lender['id']}")
        assert response.json()["is_active"] is False

    @pytest.mark.asyncio()
    async def test_disable_unknown_lender(self, client):
        response = await client.post("/api/v1/lenders/77/disable")
        assert response.status_code == 404
        assert response.json() == {"error": "Lender not found"}

    @pytest.mark.asyncio()
    async def test_delete_lender_with_products(self, client):
        lender = await _create_lender(client)
        product = await _create_product(client, lender["id"])

        response = await client.delete(f"/api/v1/lenders/{lender['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Lender deleted successfully"}

        response = await client.get(f"/api/v1/lenders/{lender['id']}")
        assert response.status_code == 404
        response = await client.get(f"/api/v1/loan-products/{product['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio()
    async def test_delete_lender_drops_its_matches(self, client, create_lender, create_quote):
        lender = await create_lender()
        lender_id = lender.id
        quote = await create_quote()
        quote_id = quote.id
        await client.post(f"/api/v1/quotes/{quote_id}/match")

        response = await client.delete(f"/api/v1/lenders/{lender_id}")
        assert response.status_code == 200

        response = await client.get(f"/api/v1/quotes/{quote_id}/matches")
        assert response.status_code == 200
        assert response.json()["total_matches"] == 0

    @pytest.mark.asyncio()
    async def test_delete_unknown_lender(self, client):
        response = await client.delete("/api/v1/lenders/77")
        assert response.status_code == 404

    @pytest.mark.asyncio()
    async def test_invalid_lender_id(self, client):
        response = await client.get("/api/v1/lenders/abc")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid lender ID"


class TestLoanProducts:
    @pytest.mark.asyncio()
    async def test_create_product(self, client):
        lender = await _create_lender(client)
        product = await _create_product(client, lender["id"])

        assert product["lender_id"] == lender["id"]
        assert Decimal(product["max_loan_amount"]) == Decimal("500000")
        assert product["states_funded"] == ["TX"]

        response = await client.get(f"/api/v1/lenders/{lender['id']}")
        assert [p["id"] for p in response.json()["loan_products"]] == [product["id"]]

    @pytest.mark.asyncio()
    async def test_product_for_unknown_lender(self, client):
        response = await client.post("/api/v1/lenders/55/loan-products", json=PRODUCT)
        assert response.status_code == 404

    @pytest.mark.asyncio()
    async def test_min_above_max_rejected_on_create(self, client):
        lender = await _create_lender(client)
        response = await client.post(
            f"/api/v1/lenders/{lender['id']}/loan-products",
            json={**PRODUCT, "min_loan_amount": "600000"},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio()
    async def test_partial_update_checks_stored_bounds(self, client):
        lender = await _create_lender(client)
        product = await _create_product(client, lender["id"])

        response = await client.put(
            f"/api/v1/loan-products/{product['id']}",
            json={"min_loan_amount": "900000"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "min_loan_amount cannot exceed max_loan_amount"

    @pytest.mark.asyncio()
    async def test_update_product(self, client):
        lender = await _create_lender(client)
        product = await _create_product(client, lender["id"])

        response = await client.put(
            f"/api/v1/loan-products/{product['id']}",
            json={"min_credit_score": 700, "states_funded": ["TX", "OK"]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["min_credit_score"] == 700
        assert body["states_funded"] == ["TX", "OK"]
        assert body["name"] == "Fix & Flip Express"

    @pytest.mark.asyncio()
    async def test_list_and_delete_product(self, client):
        lender = await _create_lender(client)
        first = await _create_product(client, lender["id"])
        second = await _create_product(client, lender["id"], name="Second")

        response = await client.get(f"/api/v1/lenders/{lender['id']}/loan-products")
        assert [p["id"] for p in response.json()] == [first["id"], second["id"]]

        response = await client.delete(f"/api/v1/loan-products/{first['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/v1/loan-products/{first['id']}")
        assert response.status_code == 404
        assert response.json() == {"error": "Loan product not found"}
