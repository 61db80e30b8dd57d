"""Integration tests for the FastAPI endpoints."""

import pytest

COD_FORM = {
    "customer_name": "Amina Benali",
    "customer_email": "amina@example.com",
    "customer_phone": "0555 12 34 56",
    "address": "12 Rue Didouche Mourad",
    "city": "Algiers",
    "postal_code": "16000",
    "payment_method": "cash_on_delivery",
}


def add(client, product_id, quantity=1, session=None):
    headers = {"X-Session-Id": session} if session else {}
    return client.post(
        "/api/cart/items",
        json={"product_id": product_id, "quantity": quantity},
        headers=headers,
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestProductEndpoints:
    def test_list_products(self, client):
        response = client.get("/api/products")
        assert response.status_code == 200
        assert len(response.json()) == 3

    def test_get_missing_product(self, client):
        assert client.get("/api/products/404").status_code == 404

    def test_product_crud(self, client):
        created = client.post(
            "/api/products",
            json={"name": "Rug", "price": 49.99, "category": "Home", "seller": "Tapis"},
        )
        assert created.status_code == 201
        product_id = created.json()["id"]

        updated = client.put(f"/api/products/{product_id}", json={"stock": 3})
        assert updated.status_code == 200
        assert updated.json()["stock"] == 3

        assert client.delete(f"/api/products/{product_id}").status_code == 204
        assert client.get(f"/api/products/{product_id}").status_code == 404

    def test_create_missing_fields(self, client):
        response = client.post("/api/products", json={"name": "Rug"})
        assert response.status_code == 422


class TestCartEndpoints:
    def test_add_items_and_totals(self, client):
        add(client, "1", 2)
        response = add(client, 2)

        assert response.status_code == 200
        data = response.json()
        assert data["total_items"] == 3
        assert data["total_price"] == pytest.approx(559.97)
        assert [i["id"] for i in data["items"]] == ["1", "2"]

    def test_add_merges_same_product(self, client):
        add(client, "1", 1)
        data = add(client, "1", 3).json()
        assert len(data["items"]) == 1
        assert data["items"][0]["quantity"] == 4

    def test_add_unknown_product(self, client):
        assert add(client, "404").status_code == 404

    def test_add_zero_quantity_rejected(self, client):
        assert add(client, "1", 0).status_code == 422

    def test_update_quantity(self, client):
        add(client, "1", 1)
        data = client.patch("/api/cart/items/1", json={"quantity": 5}).json()
        assert data["items"][0]["quantity"] == 5

    def test_update_to_zero_removes(self, client):
        add(client, "1", 1)
        data = client.patch("/api/cart/items/1", json={"quantity": 0}).json()
        assert data["items"] == []

    def test_remove_item_and_missing_item(self, client):
        add(client, "1", 1)
        assert client.delete("/api/cart/items/1").json()["items"] == []
        assert client.delete("/api/cart/items/1").status_code == 200

    def test_clear(self, client):
        add(client, "1", 1)
        add(client, "2", 1)
        data = client.post("/api/cart/clear").json()
        assert data["items"] == []
        assert data["total_items"] == 0

    def test_sessions_are_isolated(self, client):
        add(client, "1", 2, session="alice")
        add(client, "2", 1, session="bob")

        alice = client.get("/api/cart", headers={"X-Session-Id": "alice"}).json()
        bob = client.get("/api/cart", headers={"X-Session-Id": "bob"}).json()
        assert [i["id"] for i in alice["items"]] == ["1"]
        assert [i["id"] for i in bob["items"]] == ["2"]

    def test_invalid_session_id(self, client):
        response = client.get("/api/cart", headers={"X-Session-Id": "../etc"})
        assert response.status_code == 400


class TestCheckoutEndpoints:
    def test_cash_on_delivery_checkout(self, client):
        add(client, "1", 2)

        response = client.post("/api/checkout", json=COD_FORM)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        order_id = data["order_id"]

        assert client.get("/api/cart").json()["items"] == []

        order = client.get(f"/api/orders/{order_id}").json()
        assert order["status"] == "completed"
        assert order["payment_method"] == "cash_on_delivery"
        assert order["total_price"] == pytest.approx(259.98)
        assert order["items"][0]["quantity"] == 2

    def test_card_checkout_drops_cvv(self, client):
        add(client, "3", 1)
        form = {
            **COD_FORM,
            "payment_method": "card",
            "card_number": "4242 4242 4242 1881",
            "expiry_date": "08/29",
            "cvv": "321",
        }

        order_id = client.post("/api/checkout", json=form).json()["order_id"]
        order = client.get(f"/api/orders/{order_id}").json()

        assert order["card_number"] == "************1881"
        assert order["expiry_date"] == "08/29"
        assert "cvv" not in order

    def test_validation_error_names_field(self, client):
        add(client, "1", 1)
        response = client.post("/api/checkout", json={**COD_FORM, "customer_phone": "12"})

        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "customer_phone"
        assert client.get("/api/cart").json()["total_items"] == 1
        assert client.get("/api/orders").json() == []

    def test_first_missing_field_wins(self, client):
        add(client, "1", 1)
        form = {**COD_FORM, "customer_name": "", "customer_email": ""}
        response = client.post("/api/checkout", json=form)
        assert response.json()["detail"]["field"] == "customer_name"

    def test_empty_cart(self, client):
        response = client.post("/api/checkout", json=COD_FORM)
        assert response.status_code == 400

    def test_unknown_payment_method(self, client):
        add(client, "1", 1)
        response = client.post("/api/checkout", json={**COD_FORM, "payment_method": "bitcoin"})
        assert response.status_code == 422

    def test_unknown_order_is_404(self, client):
        assert client.get("/api/orders/ORD-0").status_code == 404

    def test_orders_listed_per_session(self, client):
        add(client, "1", 1, session="alice")
        client.post("/api/checkout", json=COD_FORM, headers={"X-Session-Id": "alice"})

        alice = client.get("/api/orders", headers={"X-Session-Id": "alice"}).json()
        bob = client.get("/api/orders", headers={"X-Session-Id": "bob"}).json()
        assert len(alice) == 1
        assert bob == []
