"""
Domain errors raised by the service layer

Routers translate these into HTTP responses; none of them are swallowed.
"""
from typing import Optional


class StoreError(Exception):
    """Base exception for store errors"""
    retryable = False


class ValidationError(StoreError):
    """Required input is missing or malformed"""
    pass


class ProductNotFoundError(StoreError):
    """Product does not exist or is not active"""
    
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class OutOfStockError(StoreError):
    """Requested quantity exceeds the product's stock"""
    
    def __init__(self, product_id: int, product_name: str, requested: int, available: int):
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name} (ID: {product_id}). "
            f"Requested: {requested}, Available: {available}"
        )


class OrderNotFoundError(StoreError):
    """Order not found"""
    
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order with id={order_id} not found")


class InvalidStatusError(StoreError):
    """Status value outside the allowed set"""
    
    def __init__(self, field: str, value: str, allowed: tuple):
        self.field = field
        self.value = value
        self.allowed = allowed
        super().__init__(f"Invalid {field} '{value}'. Allowed: {', '.join(allowed)}")


class PersistenceError(StoreError):
    """Underlying storage failure; the caller may resubmit"""
    retryable = True


class EmailAlreadyRegisteredError(StoreError):
    """Customer email already in use"""
    
    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class InvalidCredentialsError(StoreError):
    """Login failed"""
    
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Invalid credentials")
