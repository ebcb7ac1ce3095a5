"""
Pydantic schemas for the admin dashboard
"""
from decimal import Decimal
from pydantic import BaseModel
from typing import List, Literal

from app.schemas.order import OrderSummaryResponse

Period = Literal['all', 'week', 'month', 'year']


class AnalyticsRow(BaseModel):
    """Revenue bucket; period is YYYY-MM-DD or YYYY-MM"""
    period: str
    orders: int
    revenue: Decimal


class TopProduct(BaseModel):
    product_id: int
    product_name: str
    total_sold: int
    revenue: Decimal


class DashboardResponse(BaseModel):
    """Summary statistics for the selected period"""
    period: Period
    total_products: int
    total_orders: int
    pending_payments: int
    total_revenue: Decimal
    recent_orders: List[OrderSummaryResponse]
    analytics: List[AnalyticsRow]
    top_products: List[TopProduct]
