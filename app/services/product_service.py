"""
Product Service - Business Logic Layer
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import PersistenceError
from app.repositories.product_repository import ProductRepository
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse
)

logger = logging.getLogger(__name__)


class ProductService:
    """Service layer for catalog business logic"""
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductRepository(db)
    
    def get_active_products(self, category: Optional[str] = None, search: Optional[str] = None) -> List[ProductResponse]:
        """Get active products filtered by category and search text"""
        products = self.repository.get_active_products(category=category, search=search)
        return [ProductResponse.model_validate(p) for p in products]
    
    def get_product_by_id(self, product_id: int) -> Optional[ProductResponse]:
        """Get active product by ID"""
        product = self.repository.get_active(product_id)
        if not product:
            return None
        return ProductResponse.model_validate(product)
    
    def get_categories(self) -> List[str]:
        return self.repository.get_categories()
    
    def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """
        Create new product
        
        Raises:
            PersistenceError: Storage failure
        """
        product = self._write("create product", self.repository.create, product_data)
        logger.info("Product created: %s (ID: %s)", product.name, product.id)
        return ProductResponse.model_validate(product)
    
    def update_product(self, product_id: int, product_data: ProductUpdate) -> Optional[ProductResponse]:
        """Update existing product"""
        product = self._write("update product", self.repository.update, product_id, product_data)
        if not product:
            return None
        return ProductResponse.model_validate(product)
    
    def delete_product(self, product_id: int) -> bool:
        """Soft delete product"""
        deleted = self._write("delete product", self.repository.soft_delete, product_id)
        if deleted:
            logger.info("Product %s deactivated", product_id)
        return deleted
    
    def deactivate_all(self) -> int:
        """Soft delete the whole catalog"""
        count = self._write("deactivate products", self.repository.deactivate_all)
        logger.warning("Deactivated %s products", count)
        return count
    
    def _write(self, action: str, operation, *args):
        try:
            return operation(*args)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to %s: %s", action, e, exc_info=True)
            raise PersistenceError(f"Failed to {action}, please try again") from e
