"""
Order Service - Business Logic Layer

Checkout (validate, price, reserve stock, persist) and the admin status
transitions on persisted orders.
"""
import logging
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import (
    StoreError,
    ValidationError,
    ProductNotFoundError,
    OutOfStockError,
    OrderNotFoundError,
    InvalidStatusError,
    PersistenceError
)
from app.models.order import PAYMENT_METHODS, PAYMENT_STATUSES, ORDER_STATUSES
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository
from app.repositories.account_repository import AccountRepository
from app.publishers.event_publisher import EventPublisher
from app.schemas.order import (
    OrderCreate,
    OrderPlacedResponse,
    OrderResponse,
    OrderSummaryResponse
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session, event_publisher: Optional[EventPublisher] = None):
        self.db = db
        self.repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.account_repository = AccountRepository(db)
        self.event_publisher = event_publisher

    def place_order(self, order_data: OrderCreate) -> OrderPlacedResponse:
        """
        Place a new order

        Steps:
        1. Validate customer details and cart
        2. For each line, resolve the active product and atomically
           decrement its stock
        3. Price every line from the catalog and sum the order total
        4. Insert the order and its line items
        5. Commit, then publish OrderPlaced

        Steps 2-5 share one transaction; any failure rolls back every
        stock decrement and nothing is persisted.

        Args:
            order_data: Order creation data

        Returns:
            Order id, payment status and whether admin approval is required

        Raises:
            ValidationError: Missing customer details, empty cart, unknown customer
            ProductNotFoundError: Product missing or inactive
            OutOfStockError: Requested quantity exceeds stock
            PersistenceError: Storage failure
        """
        try:
            self._validate(order_data)

            items = []
            total_amount = Decimal("0.00")

            for line in order_data.items:
                product = self.product_repository.get_active(line.product_id)
                if not product:
                    raise ProductNotFoundError(line.product_id)

                if not self.product_repository.decrement_stock(product.id, line.quantity):
                    self.db.refresh(product)
                    if not product.is_active:
                        raise ProductNotFoundError(product.id)
                    raise OutOfStockError(product.id, product.name, line.quantity, product.stock_quantity)

                unit_price = Decimal(product.price).quantize(CENTS)
                line_total = (unit_price * line.quantity).quantize(CENTS)
                total_amount += line_total

                items.append({
                    'product_id': product.id,
                    'product_name': product.name,
                    'quantity': line.quantity,
                    'unit_price': unit_price,
                    'total_price': line_total
                })

            payment_status = 'Approved' if order_data.payment_method == 'Cash' else 'Pending'

            order = self.repository.add_with_items({
                'customer_id': order_data.customer_id,
                'customer_name': order_data.customer_name.strip(),
                'customer_phone': order_data.customer_phone.strip(),
                'customer_address': order_data.customer_address,
                'total_amount': total_amount,
                'payment_method': order_data.payment_method,
                'payment_status': payment_status,
                'order_status': 'Pending'
            }, items)
            order_id = order.id

            self.db.commit()

        except StoreError as e:
            self.db.rollback()
            logger.warning("Order rejected: %s", e)
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to place order: %s", e, exc_info=True)
            raise PersistenceError("Failed to place order, please try again") from e

        logger.info(
            "✓ Order %s placed: %s items, total %s, payment %s (%s)",
            order_id, len(items), total_amount, order_data.payment_method, payment_status
        )

        self._publish(
            "publish_order_placed",
            {
                'order_id': order_id,
                'customer_id': order_data.customer_id,
                'customer_name': order_data.customer_name,
                'total_amount': total_amount,
                'payment_method': order_data.payment_method,
                'payment_status': payment_status,
                'items': items
            }
        )

        return OrderPlacedResponse(
            order_id=order_id,
            total_amount=total_amount,
            payment_status=payment_status,
            requires_approval=order_data.payment_method == 'UPI'
        )

    def _validate(self, order_data: OrderCreate) -> None:
        if not order_data.customer_name or not order_data.customer_name.strip():
            raise ValidationError("Customer name is required")
        if not order_data.customer_phone or not order_data.customer_phone.strip():
            raise ValidationError("Customer phone is required")
        if order_data.payment_method not in PAYMENT_METHODS:
            raise ValidationError(f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}")
        if not order_data.items:
            raise ValidationError("Order must contain at least one item")
        if order_data.customer_id is not None and not self.account_repository.get_customer_by_id(order_data.customer_id):
            raise ValidationError(f"Customer {order_data.customer_id} not found")

    def get_orders(
        self,
        payment_method: Optional[str] = None,
        payment_status: Optional[str] = None,
        order_status: Optional[str] = None
    ) -> List[OrderSummaryResponse]:
        """Get orders, newest first"""
        orders = self.repository.get_all(
            payment_method=payment_method,
            payment_status=payment_status,
            order_status=order_status
        )
        return [OrderSummaryResponse.model_validate(o) for o in orders]

    def get_order(self, order_id: int) -> OrderResponse:
        """Get order with its line items"""
        order = self.repository.get_by_id(order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        return OrderResponse.model_validate(order)

    def get_customer_orders(self, customer_id: int) -> List[OrderSummaryResponse]:
        orders = self.repository.get_by_customer(customer_id)
        return [OrderSummaryResponse.model_validate(o) for o in orders]

    def get_customer_order(self, customer_id: int, order_id: int) -> OrderResponse:
        """Get one of the customer's own orders"""
        order = self.repository.get_by_id(order_id)
        if not order or order.customer_id != customer_id:
            raise OrderNotFoundError(order_id)
        return OrderResponse.model_validate(order)

    def update_payment_status(self, order_id: int, new_status: str) -> OrderSummaryResponse:
        """
        Overwrite payment status

        Any value in PAYMENT_STATUSES is accepted regardless of the current one.

        Raises:
            InvalidStatusError: Value not in PAYMENT_STATUSES
            OrderNotFoundError: Unknown order id
        """
        if new_status not in PAYMENT_STATUSES:
            raise InvalidStatusError('payment_status', new_status, PAYMENT_STATUSES)

        order = self._apply(self.repository.update_payment_status, order_id, new_status)

        self._publish(
            "publish_payment_status_changed",
            {
                'order_id': order.id,
                'new_status': order.payment_status,
                'updated_at': order.updated_at.isoformat()
            }
        )
        return OrderSummaryResponse.model_validate(order)

    def update_order_status(self, order_id: int, new_status: str) -> OrderSummaryResponse:
        """
        Overwrite order status

        Raises:
            InvalidStatusError: Value not in ORDER_STATUSES
            OrderNotFoundError: Unknown order id
        """
        if new_status not in ORDER_STATUSES:
            raise InvalidStatusError('order_status', new_status, ORDER_STATUSES)

        order = self._apply(self.repository.update_order_status, order_id, new_status)

        self._publish(
            "publish_order_status_changed",
            {
                'order_id': order.id,
                'new_status': order.order_status,
                'updated_at': order.updated_at.isoformat()
            }
        )
        return OrderSummaryResponse.model_validate(order)

    def _apply(self, update, order_id: int, new_status: str):
        try:
            order = update(order_id, new_status)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to update order %s: %s", order_id, e, exc_info=True)
            raise PersistenceError("Failed to update order, please try again") from e

        if not order:
            raise OrderNotFoundError(order_id)

        logger.info("Order %s updated to %s", order_id, new_status)
        return order

    def _publish(self, method: str, event_data: dict) -> None:
        # Events are best effort; the order is already committed
        if self.event_publisher is None:
            return
        try:
            published = getattr(self.event_publisher, method)(event_data)
        except Exception as e:
            logger.warning("Failed to publish event for order %s: %s", event_data.get('order_id'), e)
            return
        if not published:
            logger.debug("Event %s not published for order %s", method, event_data.get('order_id'))
