"""
Services package
"""
from app.services.product_service import ProductService
from app.services.account_service import AccountService
from app.services.order_service import OrderService
from app.services.dashboard_service import DashboardService

__all__ = ["ProductService", "AccountService", "OrderService", "DashboardService"]
