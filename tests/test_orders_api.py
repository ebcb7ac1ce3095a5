from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from app.models.order import Order
from app.repositories.order_repository import OrderRepository


def checkout(client, items, payment_method="Cash", **extra):
    payload = {
        "customer_name": "Anita Das",
        "customer_phone": "9876543210",
        "customer_address": "Station Road, Bhadrak",
        "payment_method": payment_method,
        "items": items
    }
    payload.update(extra)
    return client.post("/api/orders", json=payload)


@pytest.fixture
def product(make_product):
    return make_product(name="Whey Protein Powder", price="100.00", stock=5)


def test_place_cash_order(client, db, product):
    response = checkout(client, [{"product_id": product.id, "quantity": 3}])

    assert response.status_code == 201
    body = response.json()
    assert Decimal(body["total_amount"]) == Decimal("300.00")
    assert body["payment_status"] == "Approved"
    assert body["requires_approval"] is False

    db.refresh(product)
    assert product.stock_quantity == 2


def test_place_upi_order(client, product):
    body = checkout(client, [{"product_id": product.id, "quantity": 1}], payment_method="UPI").json()

    assert body["payment_status"] == "Pending"
    assert body["requires_approval"] is True


def test_client_price_is_ignored(client, product):
    response = checkout(client, [{"product_id": product.id, "quantity": 2, "price": 1, "unit_price": 1}])

    assert Decimal(response.json()["total_amount"]) == Decimal("200.00")


def test_out_of_stock_conflict(client, db, product):
    response = checkout(client, [{"product_id": product.id, "quantity": 6}])

    assert response.status_code == 409
    assert "Whey Protein Powder" in response.json()["detail"]
    db.refresh(product)
    assert product.stock_quantity == 5
    assert client.get("/api/admin/orders").json() == []


def test_storage_failure_returns_503(client, db, product, monkeypatch):
    def fail_insert(self, order_data, items_data):
        raise OperationalError("INSERT INTO orders", {}, Exception("database is locked"))

    monkeypatch.setattr(OrderRepository, "add_with_items", fail_insert)

    response = checkout(client, [{"product_id": product.id, "quantity": 2}])

    assert response.status_code == 503
    db.refresh(product)
    assert product.stock_quantity == 5
    assert db.query(Order).count() == 0


def test_unknown_product(client):
    response = checkout(client, [{"product_id": 404, "quantity": 1}])

    assert response.status_code == 404


def test_validation_errors(client, product):
    assert checkout(client, []).status_code == 400
    assert checkout(client, [{"product_id": product.id, "quantity": 1}], customer_phone=" ").status_code == 400
    assert checkout(client, [{"product_id": product.id, "quantity": 1}], payment_method="Card").status_code == 422
    assert checkout(client, [{"product_id": product.id, "quantity": 0}]).status_code == 422


def test_admin_order_detail_and_filters(client, product):
    cash_id = checkout(client, [{"product_id": product.id, "quantity": 1}]).json()["order_id"]
    upi_id = checkout(client, [{"product_id": product.id, "quantity": 2}], payment_method="UPI").json()["order_id"]

    upi_orders = client.get("/api/admin/orders", params={"payment_method": "UPI"}).json()
    assert [o["id"] for o in upi_orders] == [upi_id]

    all_ids = [o["id"] for o in client.get("/api/admin/orders").json()]
    assert all_ids == [upi_id, cash_id]

    detail = client.get(f"/api/admin/orders/{upi_id}").json()
    assert detail["customer_name"] == "Anita Das"
    assert detail["items"][0]["product_name"] == "Whey Protein Powder"
    assert Decimal(detail["items"][0]["unit_price"]) == Decimal("100.00")
    assert Decimal(detail["items"][0]["total_price"]) == Decimal(detail["total_amount"])

    assert client.get("/api/admin/orders/999").status_code == 404


def test_payment_approval_flow(client, product):
    order_id = checkout(client, [{"product_id": product.id, "quantity": 1}], payment_method="UPI").json()["order_id"]

    approved = client.put(f"/api/admin/orders/{order_id}/payment", json={"payment_status": "Approved"})
    assert approved.status_code == 200
    assert approved.json()["order"]["payment_status"] == "Approved"

    pending = client.get("/api/admin/orders", params={"payment_status": "Pending"}).json()
    assert pending == []


def test_order_status_errors(client, product):
    order_id = checkout(client, [{"product_id": product.id, "quantity": 1}]).json()["order_id"]

    assert client.put(f"/api/admin/orders/{order_id}/status", json={"order_status": "Shipped"}).status_code == 200
    assert client.put(f"/api/admin/orders/{order_id}/status", json={"order_status": "Archived"}).status_code == 400
    assert client.put("/api/admin/orders/999/status", json={"order_status": "Shipped"}).status_code == 404
    assert client.put(f"/api/admin/orders/{order_id}/payment", json={"payment_status": "Paid"}).status_code == 400


def test_customer_order_history(client, product):
    customer = client.post("/api/customers/register", json={
        "name": "Priya",
        "email": "priya@example.com",
        "phone": "9437000000",
        "password": "pw"
    }).json()["customer"]

    order_id = checkout(client, [{"product_id": product.id, "quantity": 1}], customer_id=customer["id"]).json()["order_id"]
    checkout(client, [{"product_id": product.id, "quantity": 1}])

    history = client.get(f"/api/customers/{customer['id']}/orders").json()
    assert [o["id"] for o in history] == [order_id]

    detail = client.get(f"/api/customers/{customer['id']}/orders/{order_id}")
    assert detail.status_code == 200
    assert len(detail.json()["items"]) == 1

    assert client.get(f"/api/customers/{customer['id'] + 1}/orders/{order_id}").status_code == 404


def test_dashboard_endpoint(client, db, product):
    checkout(client, [{"product_id": product.id, "quantity": 2}])
    checkout(client, [{"product_id": product.id, "quantity": 1}], payment_method="UPI")

    body = client.get("/api/admin/dashboard", params={"period": "week"}).json()

    assert body["total_orders"] == 2
    assert body["pending_payments"] == 1
    assert Decimal(body["total_revenue"]) == Decimal("200.00")
    assert body["top_products"][0]["total_sold"] == 2
    assert len(body["recent_orders"]) == 2

    assert client.get("/api/admin/dashboard", params={"period": "decade"}).status_code == 422
    assert client.get("/api/admin/dashboard").json()["analytics"] == []
