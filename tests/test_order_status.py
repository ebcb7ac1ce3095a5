import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import OrderNotFoundError, InvalidStatusError, PersistenceError
from app.models.order import Order
from app.repositories.order_repository import OrderRepository
from app.services.order_service import OrderService

from tests.conftest import order_request


@pytest.fixture
def upi_order(db, make_product):
    product = make_product()
    return OrderService(db).place_order(order_request([(product.id, 1)], payment_method="UPI"))


def test_approve_payment(db, upi_order):
    updated = OrderService(db).update_payment_status(upi_order.order_id, "Approved")

    assert updated.payment_status == "Approved"
    assert db.get(Order, upi_order.order_id).payment_status == "Approved"


def test_transitions_are_unguarded(db, upi_order):
    service = OrderService(db)

    service.update_payment_status(upi_order.order_id, "Rejected")
    assert service.update_payment_status(upi_order.order_id, "Approved").payment_status == "Approved"

    service.update_order_status(upi_order.order_id, "Delivered")
    assert service.update_order_status(upi_order.order_id, "Pending").order_status == "Pending"


def test_order_status_leaves_payment_status_alone(db, upi_order):
    updated = OrderService(db).update_order_status(upi_order.order_id, "Shipped")

    assert updated.order_status == "Shipped"
    assert updated.payment_status == "Pending"


def test_unknown_order(db):
    with pytest.raises(OrderNotFoundError):
        OrderService(db).update_order_status(12345, "Confirmed")
    with pytest.raises(OrderNotFoundError):
        OrderService(db).update_payment_status(12345, "Approved")


def test_invalid_status_values(db, upi_order):
    service = OrderService(db)

    with pytest.raises(InvalidStatusError):
        service.update_order_status(upi_order.order_id, "Archived")
    with pytest.raises(InvalidStatusError):
        service.update_payment_status(upi_order.order_id, "Refunded")

    order = db.get(Order, upi_order.order_id)
    assert order.order_status == "Pending"
    assert order.payment_status == "Pending"


def test_get_order_includes_items(db, upi_order):
    order = OrderService(db).get_order(upi_order.order_id)

    assert len(order.items) == 1
    assert order.items[0].quantity == 1
    assert order.total_amount == order.items[0].total_price


def test_customer_cannot_read_other_customers_order(db, make_product, make_customer):
    product = make_product()
    owner = make_customer(email="owner@example.com")
    other = make_customer(email="other@example.com")
    service = OrderService(db)
    placed = service.place_order(order_request([(product.id, 1)], customer_id=owner.id))

    assert service.get_customer_order(owner.id, placed.order_id).id == placed.order_id
    assert [o.id for o in service.get_customer_orders(owner.id)] == [placed.order_id]
    assert service.get_customer_orders(other.id) == []
    with pytest.raises(OrderNotFoundError):
        service.get_customer_order(other.id, placed.order_id)


def test_status_update_storage_failure(db, upi_order, monkeypatch):
    def fail_update(self, order_id, new_status):
        raise OperationalError("UPDATE orders", {}, Exception("database is locked"))

    monkeypatch.setattr(OrderRepository, "update_payment_status", fail_update)
    monkeypatch.setattr(OrderRepository, "update_order_status", fail_update)
    service = OrderService(db)

    with pytest.raises(PersistenceError) as exc_info:
        service.update_payment_status(upi_order.order_id, "Approved")
    assert exc_info.value.retryable is True
    with pytest.raises(PersistenceError):
        service.update_order_status(upi_order.order_id, "Shipped")

    order = db.get(Order, upi_order.order_id)
    assert order.payment_status == "Pending"
    assert order.order_status == "Pending"
