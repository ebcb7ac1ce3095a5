"""
Dashboard Service - read-only statistics over persisted orders
"""
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Optional
from sqlalchemy.orm import Session

from app.exceptions import ValidationError
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.schemas.dashboard import AnalyticsRow, TopProduct, DashboardResponse
from app.schemas.order import OrderSummaryResponse

# period -> (window length, bucket format)
PERIOD_WINDOWS = {
    'week': (timedelta(days=7), '%Y-%m-%d'),
    'month': (timedelta(days=30), '%Y-%m-%d'),
    'year': (timedelta(days=365), '%Y-%m'),
}

RECENT_ORDERS_LIMIT = 5
TOP_PRODUCTS_LIMIT = 5


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DashboardService:
    """Service computing admin dashboard statistics"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = _utc_now):
        self.order_repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.clock = clock

    def get_dashboard(self, period: str = 'all') -> DashboardResponse:
        """
        Compute dashboard for the given period

        'all' covers every order and carries no analytics. 'week' and
        'month' bucket revenue by day, 'year' by month.
        """
        if period != 'all' and period not in PERIOD_WINDOWS:
            raise ValidationError(f"Unknown period '{period}'")

        since = self._window_start(period)

        recent = self.order_repository.get_recent(limit=RECENT_ORDERS_LIMIT, since=since)

        analytics = []
        top_products = []
        if since is not None:
            analytics = self._bucket_revenue(since, PERIOD_WINDOWS[period][1])
            top_products = [
                TopProduct(product_id=product_id, product_name=name, total_sold=int(sold), revenue=Decimal(str(revenue)))
                for product_id, name, sold, revenue in self.order_repository.get_top_products(
                    since=since, limit=TOP_PRODUCTS_LIMIT
                )
            ]

        return DashboardResponse(
            period=period,
            total_products=self.product_repository.count_active(),
            total_orders=self.order_repository.count(since=since),
            pending_payments=self.order_repository.count_by_payment_status('Pending', since=since),
            total_revenue=self.order_repository.sum_approved_revenue(since=since),
            recent_orders=[OrderSummaryResponse.model_validate(o) for o in recent],
            analytics=analytics,
            top_products=top_products
        )

    def _window_start(self, period: str) -> Optional[datetime]:
        if period == 'all':
            return None
        return self.clock() - PERIOD_WINDOWS[period][0]

    def _bucket_revenue(self, since: datetime, bucket_format: str) -> list:
        """Group orders in the window into day or month buckets, oldest first"""
        buckets = OrderedDict()
        for created_at, total_amount, payment_status in self.order_repository.get_created_since(since):
            if created_at.tzinfo is not None:
                created_at = created_at.astimezone(timezone.utc)
            key = created_at.strftime(bucket_format)
            bucket = buckets.setdefault(key, {'orders': 0, 'revenue': Decimal("0.00")})
            bucket['orders'] += 1
            if payment_status == 'Approved':
                bucket['revenue'] += Decimal(str(total_amount))

        return [
            AnalyticsRow(period=key, orders=values['orders'], revenue=values['revenue'])
            for key, values in buckets.items()
        ]
