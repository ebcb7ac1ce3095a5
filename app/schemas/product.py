"""
Pydantic schemas for product request/response validation
"""
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


class ProductBase(BaseModel):
    """Base Product schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Product price (must be positive)")
    category: str = Field(..., min_length=1, max_length=100, description="Product category")
    stock_quantity: int = Field(0, ge=0, description="Stock quantity (must be non-negative)")
    image_url: Optional[str] = Field(None, max_length=500, description="Product image URL")


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass


class ProductUpdate(BaseModel):
    """Schema for updating a product (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    stock_quantity: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None

    @field_validator('name', 'price', 'category', 'stock_quantity', 'is_active')
    @classmethod
    def reject_null(cls, value):
        # Omit a field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("field cannot be null")
        return value


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class ProductCreatedResponse(BaseModel):
    """Schema returned after an admin creates a product"""
    message: str = "Product added successfully"
    product: ProductResponse


class BulkDeactivateResponse(BaseModel):
    """Schema returned after deactivating the whole catalog"""
    message: str = "All products deactivated successfully"
    products_deactivated: int
