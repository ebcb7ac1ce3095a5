"""
Order API endpoints: checkout, customer order history, admin order management
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config import Settings, get_settings
from app.database import get_db
from app.exceptions import (
    ValidationError,
    ProductNotFoundError,
    OutOfStockError,
    OrderNotFoundError,
    InvalidStatusError,
    PersistenceError
)
from app.publishers.event_publisher import EventPublisher
from app.services.order_service import OrderService
from app.schemas.order import (
    OrderCreate,
    OrderPlacedResponse,
    OrderResponse,
    OrderSummaryResponse,
    PaymentStatusUpdate,
    OrderStatusUpdate,
    StatusUpdateResponse
)

router = APIRouter(prefix="/api", tags=["orders"])


def get_order_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db, EventPublisher.from_settings(settings))


@router.post("/orders", response_model=OrderPlacedResponse, status_code=status.HTTP_201_CREATED, summary="Place order")
def place_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """
    Place a new order
    
    Process:
    1. Validate customer details and cart
    2. Check every product is active and has enough stock
    3. Price each line from the catalog (client prices are ignored)
    4. Save order and line items, decrementing stock in the same transaction
    
    Cash orders are approved immediately; UPI orders wait for admin approval.
    """
    try:
        return service.place_order(order_data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except OutOfStockError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get(
    "/customers/{customer_id}/orders",
    response_model=List[OrderSummaryResponse],
    summary="Get orders by customer"
)
def get_customer_orders(
    customer_id: int,
    service: OrderService = Depends(get_order_service)
):
    """Get all orders placed by a registered customer, newest first"""
    return service.get_customer_orders(customer_id)


@router.get(
    "/customers/{customer_id}/orders/{order_id}",
    response_model=OrderResponse,
    summary="Get customer order"
)
def get_customer_order(
    customer_id: int,
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    try:
        return service.get_customer_order(customer_id, order_id)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/admin/orders", response_model=List[OrderSummaryResponse], summary="Get all orders")
def get_orders(
    payment_method: Optional[str] = Query(None, description="Cash or UPI"),
    payment_status: Optional[str] = Query(None, description="Pending, Approved or Rejected"),
    order_status: Optional[str] = Query(None, description="Order status"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve orders, newest first
    
    - **payment_method**: e.g. UPI to list orders awaiting payment review
    """
    return service.get_orders(
        payment_method=payment_method,
        payment_status=payment_status,
        order_status=order_status
    )


@router.get("/admin/orders/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order with its line items
    
    - **order_id**: Order ID
    """
    try:
        return service.get_order(order_id)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _status_error(e: Exception) -> HTTPException:
    if isinstance(e, OrderNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, InvalidStatusError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.put("/admin/orders/{order_id}/status", response_model=StatusUpdateResponse, summary="Update order status")
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status
    
    - **order_status**: Pending, Confirmed, Shipped, Delivered or Cancelled
    """
    try:
        order = service.update_order_status(order_id, status_data.order_status)
    except (OrderNotFoundError, InvalidStatusError, PersistenceError) as e:
        raise _status_error(e)
    return StatusUpdateResponse(message=f"Order status updated to {order.order_status}", order=order)


@router.put("/admin/orders/{order_id}/payment", response_model=StatusUpdateResponse, summary="Update payment status")
def update_payment_status(
    order_id: int,
    status_data: PaymentStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Approve or reject a payment
    
    - **payment_status**: Pending, Approved or Rejected
    """
    try:
        order = service.update_payment_status(order_id, status_data.payment_status)
    except (OrderNotFoundError, InvalidStatusError, PersistenceError) as e:
        raise _status_error(e)
    return StatusUpdateResponse(message=f"Payment status updated to {order.payment_status}", order=order)
