import pytest
from decimal import Decimal
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import init_db
from app.main import create_app
from app.models.product import Product
from app.models.account import Customer
from app.schemas.order import OrderCreate


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="sqlite://",
        METRICS_ENABLED=False,
        EVENTS_ENABLED=False,
        SEED_DEFAULTS=False,
        BCRYPT_ROUNDS=4,
        MAX_RETRIES=1,
        LOG_LEVEL="WARNING"
    )


@pytest.fixture
def app(test_settings):
    application = create_app(test_settings)
    init_db(application.state.engine, max_retries=1)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_product(db):
    def _make(name="Whey Protein Powder", price="100.00", stock=5, category="Protein", is_active=True, description=None):
        product = Product(
            name=name,
            description=description,
            price=Decimal(price),
            category=category,
            stock_quantity=stock,
            is_active=is_active
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make


@pytest.fixture
def make_customer(db):
    def _make(email="ravi@example.com"):
        customer = Customer(name="Ravi", phone="9000000000", email=email, is_registered=True)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer
    return _make


def order_request(items, payment_method="Cash", **overrides) -> OrderCreate:
    data = {
        "customer_name": "Anita Das",
        "customer_phone": "9876543210",
        "customer_address": "Station Road, Bhadrak",
        "payment_method": payment_method,
        "items": [{"product_id": pid, "quantity": qty} for pid, qty in items],
    }
    data.update(overrides)
    return OrderCreate(**data)
