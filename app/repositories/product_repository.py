"""
Product Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import update, or_, func

from app.models.product import Product
from app.schemas.product import ProductCreate, ProductUpdate


class ProductRepository:
    """Repository for Product CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_active_products(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
        """Get active products, optionally filtered by category and search text"""
        query = self.db.query(Product).filter(Product.is_active.is_(True))
        
        if category:
            query = query.filter(Product.category == category)
        
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))
        
        return query.order_by(Product.name.asc()).all()
    
    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID, active or not"""
        return self.db.query(Product).filter(Product.id == product_id).first()
    
    def get_active(self, product_id: int) -> Optional[Product]:
        """Get product by ID if it is active"""
        return self.db.query(Product).filter(
            Product.id == product_id,
            Product.is_active.is_(True)
        ).first()
    
    def get_categories(self) -> List[str]:
        """Distinct categories of active products"""
        rows = self.db.query(Product.category).filter(
            Product.is_active.is_(True)
        ).distinct().order_by(Product.category).all()
        return [row[0] for row in rows]
    
    def create(self, product_data: ProductCreate) -> Product:
        """Create new product"""
        product = Product(**product_data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product
    
    def update(self, product_id: int, product_data: ProductUpdate) -> Optional[Product]:
        """Update existing product"""
        product = self.get_by_id(product_id)
        if not product:
            return None
        
        # Update only provided fields
        update_data = product_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(product, field, value)
        
        self.db.commit()
        self.db.refresh(product)
        return product
    
    def soft_delete(self, product_id: int) -> bool:
        """Mark product inactive; the row is kept for order history"""
        product = self.get_by_id(product_id)
        if not product:
            return False
        
        product.is_active = False
        self.db.commit()
        return True
    
    def deactivate_all(self) -> int:
        """Mark every active product inactive, returns number of rows changed"""
        result = self.db.execute(
            update(Product)
            .where(Product.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount
    
    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        Atomically subtract quantity from stock if enough is available
        
        Does not commit; the caller owns the transaction.
        
        Returns:
            True if the row was updated, False if stock was insufficient
        """
        result = self.db.execute(
            update(Product)
            .where(
                Product.id == product_id,
                Product.is_active.is_(True),
                Product.stock_quantity >= quantity
            )
            .values(stock_quantity=Product.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
    
    def count_active(self) -> int:
        """Get count of active products"""
        return self.db.query(func.count(Product.id)).filter(Product.is_active.is_(True)).scalar()
