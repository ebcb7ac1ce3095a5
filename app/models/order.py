"""
SQLAlchemy Order and OrderItem models

Customer and product fields are copied onto the rows at order time so that
historical orders are not affected by later profile or catalog edits.
"""
from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

PAYMENT_METHODS = ('Cash', 'UPI')
PAYMENT_STATUSES = ('Pending', 'Approved', 'Rejected')
ORDER_STATUSES = ('Pending', 'Confirmed', 'Shipped', 'Delivered', 'Cancelled')


def _in_check(column: str, values: tuple) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


class Order(Base):
    """Order database model"""
    
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    customer_address = Column(Text, nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(20), nullable=False)
    payment_status = Column(String(20), nullable=False, default='Pending', index=True)
    order_status = Column(String(20), nullable=False, default='Pending', index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id"
    )
    
    # Constraints
    __table_args__ = (
        CheckConstraint(_in_check('payment_method', PAYMENT_METHODS), name='check_payment_method_valid'),
        CheckConstraint(_in_check('payment_status', PAYMENT_STATUSES), name='check_payment_status_valid'),
        CheckConstraint(_in_check('order_status', ORDER_STATUSES), name='check_order_status_valid'),
    )
    
    def __repr__(self):
        return (
            f"<Order(id={self.id}, total_amount={self.total_amount}, "
            f"payment_status='{self.payment_status}', order_status='{self.order_status}')>"
        )


class OrderItem(Base):
    """Line item frozen at purchase-time pricing"""
    
    __tablename__ = "order_items"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    
    order = relationship("Order", back_populates="items")
    
    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )
    
    def __repr__(self):
        return f"<OrderItem(id={self.id}, order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"
