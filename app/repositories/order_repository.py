"""
Order Repository - Data Access Layer
"""
from datetime import datetime
from typing import List, Optional, Tuple
from decimal import Decimal
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc, func

from app.models.order import Order, OrderItem


class OrderRepository:
    """Repository for Order and OrderItem operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(
        self,
        payment_method: Optional[str] = None,
        payment_status: Optional[str] = None,
        order_status: Optional[str] = None
    ) -> List[Order]:
        """Get orders, newest first, optionally filtered by method and status"""
        query = self.db.query(Order)
        if payment_method:
            query = query.filter(Order.payment_method == payment_method)
        if payment_status:
            query = query.filter(Order.payment_status == payment_status)
        if order_status:
            query = query.filter(Order.order_status == order_status)
        return query.order_by(desc(Order.created_at), desc(Order.id)).all()
    
    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID with its items loaded"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).filter(Order.id == order_id).first()
    
    def get_by_customer(self, customer_id: int) -> List[Order]:
        """Get orders placed by a registered customer"""
        return self.db.query(Order).filter(
            Order.customer_id == customer_id
        ).order_by(desc(Order.created_at), desc(Order.id)).all()
    
    def add_with_items(self, order_data: dict, items_data: List[dict]) -> Order:
        """
        Stage an order and its line items in the current transaction
        
        Flushes to obtain the order id but does not commit.
        """
        order = Order(**order_data)
        order.items = [OrderItem(**item) for item in items_data]
        self.db.add(order)
        self.db.flush()
        return order
    
    def update_payment_status(self, order_id: int, new_status: str) -> Optional[Order]:
        """Overwrite payment status"""
        order = self.get_by_id(order_id)
        if not order:
            return None
        
        order.payment_status = new_status
        self.db.commit()
        self.db.refresh(order)
        return order
    
    def update_order_status(self, order_id: int, new_status: str) -> Optional[Order]:
        """Overwrite order status"""
        order = self.get_by_id(order_id)
        if not order:
            return None
        
        order.order_status = new_status
        self.db.commit()
        self.db.refresh(order)
        return order
    
    # Aggregations for the dashboard. ``since`` of None means no time window.
    
    def _windowed(self, query, since: Optional[datetime]):
        if since is not None:
            query = query.filter(Order.created_at >= since)
        return query
    
    def count(self, since: Optional[datetime] = None) -> int:
        """Get count of orders"""
        return self._windowed(self.db.query(func.count(Order.id)), since).scalar()
    
    def count_by_payment_status(self, status: str, since: Optional[datetime] = None) -> int:
        """Get count of orders by payment status"""
        query = self.db.query(func.count(Order.id)).filter(Order.payment_status == status)
        return self._windowed(query, since).scalar()
    
    def sum_approved_revenue(self, since: Optional[datetime] = None) -> Decimal:
        """Sum of total_amount over orders with approved payment"""
        query = self.db.query(func.coalesce(func.sum(Order.total_amount), 0)).filter(
            Order.payment_status == 'Approved'
        )
        return Decimal(str(self._windowed(query, since).scalar()))
    
    def get_recent(self, limit: int = 5, since: Optional[datetime] = None) -> List[Order]:
        """Most recent orders"""
        query = self._windowed(self.db.query(Order), since)
        return query.order_by(desc(Order.created_at), desc(Order.id)).limit(limit).all()
    
    def get_created_since(self, since: datetime) -> List[Tuple[datetime, Decimal, str]]:
        """(created_at, total_amount, payment_status) for every order in the window"""
        rows = self.db.query(
            Order.created_at,
            Order.total_amount,
            Order.payment_status
        ).filter(Order.created_at >= since).order_by(Order.created_at).all()
        return [tuple(row) for row in rows]
    
    def get_top_products(self, since: Optional[datetime] = None, limit: int = 5) -> List[Tuple[int, str, int, Decimal]]:
        """Products ranked by quantity sold within approved orders"""
        total_sold = func.sum(OrderItem.quantity).label("total_sold")
        query = self.db.query(
            OrderItem.product_id,
            OrderItem.product_name,
            total_sold,
            func.sum(OrderItem.total_price).label("revenue")
        ).join(Order, Order.id == OrderItem.order_id).filter(
            Order.payment_status == 'Approved'
        )
        query = self._windowed(query, since)
        rows = query.group_by(
            OrderItem.product_id, OrderItem.product_name
        ).order_by(desc(total_sold), OrderItem.product_id).limit(limit).all()
        return [tuple(row) for row in rows]
