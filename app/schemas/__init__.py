"""
Schemas package
"""
from app.schemas.product import (
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductCreatedResponse,
    BulkDeactivateResponse
)
from app.schemas.account import (
    AdminLogin,
    AdminResponse,
    AdminLoginResponse,
    CustomerRegister,
    CustomerLogin,
    CustomerResponse,
    CustomerAuthResponse
)
from app.schemas.order import (
    OrderItemCreate,
    OrderCreate,
    OrderPlacedResponse,
    OrderItemResponse,
    OrderSummaryResponse,
    OrderResponse,
    PaymentStatusUpdate,
    OrderStatusUpdate,
    StatusUpdateResponse
)
from app.schemas.dashboard import AnalyticsRow, TopProduct, DashboardResponse

__all__ = [
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductCreatedResponse",
    "BulkDeactivateResponse",
    "AdminLogin",
    "AdminResponse",
    "AdminLoginResponse",
    "CustomerRegister",
    "CustomerLogin",
    "CustomerResponse",
    "CustomerAuthResponse",
    "OrderItemCreate",
    "OrderCreate",
    "OrderPlacedResponse",
    "OrderItemResponse",
    "OrderSummaryResponse",
    "OrderResponse",
    "PaymentStatusUpdate",
    "OrderStatusUpdate",
    "StatusUpdateResponse",
    "AnalyticsRow",
    "TopProduct",
    "DashboardResponse"
]
