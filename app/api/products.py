"""
Product API endpoints (public catalog and admin management)
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.exceptions import PersistenceError
from app.services.product_service import ProductService
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductCreatedResponse,
    BulkDeactivateResponse
)

router = APIRouter(prefix="/api", tags=["products"])


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get ProductService instance"""
    return ProductService(db)


def _not_found(product_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Product with id={product_id} not found"
    )


def _unavailable(error: PersistenceError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))


@router.get("/products", response_model=List[ProductResponse], summary="Get active products")
def get_products(
    category: Optional[str] = Query(None, description="Exact category"),
    search: Optional[str] = Query(None, description="Text to find in name or description"),
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve active products ordered by name
    
    - **category**: Only products in this category
    - **search**: Case-insensitive match on name or description
    """
    return service.get_active_products(category=category, search=search)


@router.get("/products/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve a specific active product by ID
    
    - **product_id**: Product ID
    """
    product = service.get_product_by_id(product_id)
    if not product:
        raise _not_found(product_id)
    return product


@router.get("/categories", response_model=List[str], summary="Get product categories")
def get_categories(service: ProductService = Depends(get_product_service)):
    """Distinct categories of active products"""
    return service.get_categories()


@router.post(
    "/admin/products",
    response_model=ProductCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create product"
)
def create_product(
    product_data: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product
    
    - **name**: Product name (required)
    - **description**: Product description (optional)
    - **price**: Product price (required, must be positive)
    - **category**: Product category (required)
    - **stock_quantity**: Stock quantity (default 0)
    - **image_url**: Product image URL (optional)
    """
    try:
        return ProductCreatedResponse(product=service.create_product(product_data))
    except PersistenceError as e:
        raise _unavailable(e)


@router.put(
    "/admin/products/deactivate-all",
    response_model=BulkDeactivateResponse,
    summary="Deactivate all products"
)
def deactivate_all_products(service: ProductService = Depends(get_product_service)):
    """Soft delete every product; order history is untouched"""
    try:
        return BulkDeactivateResponse(products_deactivated=service.deactivate_all())
    except PersistenceError as e:
        raise _unavailable(e)


@router.put("/admin/products/{product_id}", response_model=ProductResponse, summary="Update product")
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """
    Update an existing product
    
    All fields are optional. Only provided fields will be updated.
    Setting **is_active** to true restores a deleted product.
    """
    try:
        product = service.update_product(product_id, product_data)
    except PersistenceError as e:
        raise _unavailable(e)
    if not product:
        raise _not_found(product_id)
    return product


@router.delete("/admin/products/{product_id}", summary="Delete product")
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """
    Delete a product (sets is_active to false)
    
    - **product_id**: Product ID
    """
    try:
        deleted = service.delete_product(product_id)
    except PersistenceError as e:
        raise _unavailable(e)
    if not deleted:
        raise _not_found(product_id)
    return {"message": "Product deleted successfully", "product_id": product_id}
