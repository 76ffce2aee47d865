from datetime import date, timedelta

import pytest

EXPIRES = (date.today() + timedelta(days=365)).isoformat()


async def create_product(client, name, stock, price):
    response = await client.post("/api/v1/products", json={
        "name": name,
        "current_stock": stock,
        "selling_price": price,
        "purchase_price": "1.00",
        "expiration_date": EXPIRES
    })
    assert response.status_code == 201
    return response.json()


class TestAPIIntegration:
    """Integration tests for the API with a real database."""

    @pytest.mark.asyncio
    async def test_sale_round_trip(self, client):
        product = await create_product(client, "Product A", 20, "12.50")

        response = await client.post("/api/v1/sales-transactions", json={
            "customer_id": None,
            "items": [{"product_id": product["id"], "quantity": 7, "unit_price": "12.50"}]
        })

        assert response.status_code == 201
        sale = response.json()
        assert sale["total_amount"] == "87.50"
        assert sale["customer_id"] is None

        detail = (await client.get(f"/api/v1/sales-transactions/{sale['id']}")).json()
        assert detail["total_amount"] == "87.50"
        assert detail["items"][0]["subtotal"] == "87.50"
        assert detail["items"][0]["transaction_id"] == sale["id"]

        stocked = (await client.get(f"/api/v1/products/{product['id']}")).json()
        assert stocked["current_stock"] == 13

        listed = (await client.get("/api/v1/sales-transactions")).json()
        assert [s["id"] for s in listed] == [sale["id"]]

    @pytest.mark.asyncio
    async def test_timestamps_are_utc_on_write_and_read(self, client):
        product = await create_product(client, "Product T", 5, "1.00")
        assert product["created_at"].endswith("Z")

        created = (await client.post("/api/v1/sales-transactions", json={
            "customer_id": None,
            "items": [{"product_id": product["id"], "quantity": 1, "unit_price": "1.00"}]
        })).json()
        fetched = (await client.get(f"/api/v1/sales-transactions/{created['id']}")).json()

        assert created["transaction_date"].endswith("Z")
        assert fetched["transaction_date"] == created["transaction_date"]
        assert fetched["created_at"] == created["created_at"]
        assert fetched["items"][0]["created_at"].endswith("Z")

    @pytest.mark.asyncio
    async def test_insufficient_stock(self, client):
        product = await create_product(client, "Product B", 2, "4.00")

        response = await client.post("/api/v1/sales-transactions", json={
            "customer_id": None,
            "items": [{"product_id": product["id"], "quantity": 5, "unit_price": "4.00"}]
        })

        assert response.status_code == 409
        body = response.json()
        assert body["detail"] == "Insufficient stock for product Product B. Available: 2, Required: 5"
        assert body["error"] == "insufficient_stock"

        stocked = (await client.get(f"/api/v1/products/{product['id']}")).json()
        assert stocked["current_stock"] == 2
        assert (await client.get("/api/v1/sales-transactions")).json() == []

    @pytest.mark.asyncio
    async def test_sale_with_unknown_product(self, client):
        response = await client.post("/api/v1/sales-transactions", json={
            "customer_id": None,
            "items": [{"product_id": 999, "quantity": 1, "unit_price": "1.00"}]
        })

        assert response.status_code == 404
        assert response.json()["detail"] == "Product with id 999 not found"

    @pytest.mark.asyncio
    async def test_prescription_round_trip(self, client):
        first = await create_product(client, "Amoxicillin", 10, "12.50")
        second = await create_product(client, "Cetirizine", 10, "7.25")

        response = await client.post("/api/v1/prescriptions", json={
            "patient_name": "John Doe",
            "doctor_name": "Dr. Smith",
            "prescription_date": "2026-10-17",
            "medicines": [
                {"product_id": first["id"], "dosage": "500mg three times daily", "instructions": "After meals"},
                {"product_id": second["id"], "dosage": "10mg at night", "instructions": None},
            ]
        })

        assert response.status_code == 201
        prescription = response.json()
        assert prescription["prescription_date"] == "2026-10-17"

        detail = (await client.get(f"/api/v1/prescriptions/{prescription['id']}")).json()
        assert [m["product_id"] for m in detail["medicines"]] == [first["id"], second["id"]]
        assert all(m["prescription_id"] == prescription["id"] for m in detail["medicines"])

        response = await client.patch(
            f"/api/v1/prescriptions/{prescription['id']}",
            json={"patient_name": "Jonathan Doe"}
        )
        assert response.status_code == 200
        assert response.json()["patient_name"] == "Jonathan Doe"
        assert response.json()["doctor_name"] == "Dr. Smith"

        found = (await client.get("/api/v1/prescriptions", params={"patient_name": "jonathan"})).json()
        assert [p["id"] for p in found] == [prescription["id"]]

    @pytest.mark.asyncio
    async def test_prescription_with_unknown_product(self, client):
        response = await client.post("/api/v1/prescriptions", json={
            "patient_name": "John Doe",
            "doctor_name": "Dr. Smith",
            "prescription_date": "2026-10-17",
            "medicines": [{"product_id": 999, "dosage": "once", "instructions": None}]
        })

        assert response.status_code == 404
        assert response.json()["detail"] == "Product with id 999 does not exist"
        assert (await client.get("/api/v1/prescriptions")).json() == []

    @pytest.mark.asyncio
    async def test_customer_and_supplier_crud(self, client):
        response = await client.post("/api/v1/customers", json={
            "name": "Maria Garcia", "phone": "555-0102", "email": "maria@example.com", "address": None
        })
        assert response.status_code == 201
        customer = response.json()

        response = await client.patch(f"/api/v1/customers/{customer['id']}", json={"address": "1 Main St"})
        assert response.json()["address"] == "1 Main St"

        response = await client.post("/api/v1/suppliers", json={"name": "PharmaDistrib Ltd"})
        assert response.status_code == 201

        suppliers = (await client.get("/api/v1/suppliers")).json()
        assert [s["name"] for s in suppliers] == ["PharmaDistrib Ltd"]

        response = await client.get("/api/v1/suppliers/999")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, client):
        response = await client.post("/api/v1/customers", json={"name": "Bad", "email": "not-an-email"})

        assert response.status_code == 422
        assert response.json()["error"] == "invalid_input"

    @pytest.mark.asyncio
    async def test_product_listing_filters(self, client):
        await create_product(client, "Plenty", 40, "2.00")
        await create_product(client, "Scarce", 1, "2.00")

        response = await client.get(
            "/api/v1/products",
            params={"low_stock_threshold": 5, "low_stock_only": "true"}
        )

        assert [p["name"] for p in response.json()] == ["Scarce"]

    @pytest.mark.asyncio
    async def test_expired_product_rejected(self, client):
        response = await client.post("/api/v1/products", json={
            "name": "Old Syrup",
            "current_stock": 1,
            "selling_price": "2.00",
            "purchase_price": "1.00",
            "expiration_date": (date.today() - timedelta(days=1)).isoformat()
        })

        assert response.status_code == 422
        assert response.json()["detail"] == "Expiration date must be in the future"
