from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.exceptions import ValidationError
from app.models.order import Order
from app.services.dashboard_service import DashboardService
from app.services.order_service import OrderService

from tests.conftest import order_request


@pytest.fixture
def orders(db, make_product):
    whey = make_product(name="Whey", price="100.00", stock=50)
    bcaa = make_product(name="BCAA", price="40.00", stock=50)
    make_product(name="Retired", is_active=False)
    service = OrderService(db)

    recent_cash = service.place_order(order_request([(whey.id, 2), (bcaa.id, 5)], payment_method="Cash"))
    recent_upi = service.place_order(order_request([(bcaa.id, 1)], payment_method="UPI"))
    old_cash = service.place_order(order_request([(bcaa.id, 10)], payment_method="Cash"))

    old = db.get(Order, old_cash.order_id)
    old.created_at = datetime.now(timezone.utc) - timedelta(days=10)
    db.commit()

    return {"recent_cash": recent_cash, "recent_upi": recent_upi, "old_cash": old_cash}


def test_all_period_has_totals_without_analytics(db, orders):
    dashboard = DashboardService(db).get_dashboard("all")

    assert dashboard.total_products == 2
    assert dashboard.total_orders == 3
    assert dashboard.pending_payments == 1
    assert dashboard.total_revenue == Decimal("800.00")
    assert len(dashboard.recent_orders) == 3
    assert dashboard.analytics == []
    assert dashboard.top_products == []


def test_week_only_counts_last_seven_days(db, orders):
    dashboard = DashboardService(db).get_dashboard("week")

    old_day = (datetime.now(timezone.utc) - timedelta(days=10)).strftime("%Y-%m-%d")
    assert dashboard.total_orders == 2
    assert dashboard.pending_payments == 1
    assert dashboard.total_revenue == Decimal("400.00")
    assert orders["old_cash"].order_id not in [o.id for o in dashboard.recent_orders]

    assert all(len(row.period) == 10 for row in dashboard.analytics)
    assert old_day not in [row.period for row in dashboard.analytics]
    assert sum(row.orders for row in dashboard.analytics) == 2
    assert sum(row.revenue for row in dashboard.analytics) == Decimal("400.00")


def test_week_top_products_from_approved_orders(db, orders):
    top = DashboardService(db).get_dashboard("week").top_products

    # the UPI order is still pending and the old order is outside the window
    assert [(p.product_name, p.total_sold) for p in top] == [("BCAA", 5), ("Whey", 2)]
    assert top[0].revenue == Decimal("200.00")


def test_month_includes_older_orders_by_day(db, orders):
    dashboard = DashboardService(db).get_dashboard("month")

    old_day = (datetime.now(timezone.utc) - timedelta(days=10)).strftime("%Y-%m-%d")
    assert dashboard.total_orders == 3
    assert old_day in [row.period for row in dashboard.analytics]
    assert [p.product_name for p in dashboard.top_products][0] == "BCAA"
    assert dashboard.top_products[0].total_sold == 15


def test_year_buckets_by_month(db, orders):
    dashboard = DashboardService(db).get_dashboard("year")

    assert dashboard.analytics
    assert all(len(row.period) == 7 for row in dashboard.analytics)
    assert sum(row.orders for row in dashboard.analytics) == 3


def test_window_follows_clock(db, orders):
    later = lambda: datetime.now(timezone.utc) + timedelta(days=30)
    dashboard = DashboardService(db, clock=later).get_dashboard("week")

    assert dashboard.total_orders == 0
    assert dashboard.total_revenue == Decimal("0")
    assert dashboard.analytics == []
    assert dashboard.total_products == 2


def test_recent_orders_limited_to_five(db, make_product):
    product = make_product(stock=100)
    service = OrderService(db)
    placed = [service.place_order(order_request([(product.id, 1)])).order_id for _ in range(7)]

    recent = DashboardService(db).get_dashboard("all").recent_orders

    assert [o.id for o in recent] == list(reversed(placed))[:5]


def test_unknown_period(db):
    with pytest.raises(ValidationError):
        DashboardService(db).get_dashboard("decade")
