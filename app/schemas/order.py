"""
Pydantic schemas for order request/response validation
"""
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Literal
from datetime import datetime


class OrderItemCreate(BaseModel):
    """One cart line; the price is always taken from the catalog"""
    product_id: int = Field(..., gt=0, description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity to order")


class OrderCreate(BaseModel):
    """Schema for placing a new order"""
    customer_id: Optional[int] = Field(None, gt=0, description="Registered customer ID")
    customer_name: str = Field(..., max_length=255, description="Customer name")
    customer_phone: str = Field(..., max_length=50, description="Customer phone")
    customer_address: Optional[str] = Field(None, description="Delivery address")
    payment_method: Literal['Cash', 'UPI'] = Field(..., description="Payment method")
    items: List[OrderItemCreate] = Field(..., description="Cart lines")


class OrderPlacedResponse(BaseModel):
    """Result of a successful checkout"""
    message: str = "Order placed successfully"
    order_id: int
    total_amount: Decimal
    payment_status: str
    requires_approval: bool


class OrderItemResponse(BaseModel):
    """Schema for order line item response"""
    id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    
    model_config = ConfigDict(from_attributes=True)


class OrderSummaryResponse(BaseModel):
    """Order header without line items"""
    id: int
    customer_id: Optional[int]
    customer_name: str
    customer_phone: str
    customer_address: Optional[str]
    total_amount: Decimal
    payment_method: str
    payment_status: str
    order_status: str
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class OrderResponse(OrderSummaryResponse):
    """Order header with line items"""
    items: List[OrderItemResponse]


class PaymentStatusUpdate(BaseModel):
    """Schema for updating payment status"""
    payment_status: str = Field(..., description="Pending, Approved or Rejected")


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    order_status: str = Field(..., description="Pending, Confirmed, Shipped, Delivered or Cancelled")


class StatusUpdateResponse(BaseModel):
    message: str
    order: OrderSummaryResponse
