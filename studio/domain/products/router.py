"""Product router - FastAPI endpoints for the product catalog"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ProductCreate, ProductResponse, ProductUpdate
from .service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency injection for ProductService"""
    return ProductService(db)


@router.get("", response_model=list[ProductResponse])
async def get_products(
    search: Optional[str] = Query(None, description="Match on name or SKU"),
    status: str = Query("all", description="active, inactive or all"),
    category: Optional[str] = Query(None),
    starred_first: bool = Query(False),
    current_user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    """List the product catalog"""
    return service.get_products(current_user, search, status, category, starred_first)


@router.get("/categories", response_model=list[str])
async def get_categories(
    current_user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    """Distinct product categories in use"""
    return service.get_categories(current_user)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    current_user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    return service.get_product(product_id, current_user)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    data: ProductCreate,
    current_user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    return service.create_product(data, current_user)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    data: ProductUpdate,
    current_user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    return service.update_product(product_id, data, current_user)


@router.post("/{product_id}/star", response_model=ProductResponse)
async def toggle_star(
    product_id: int,
    current_user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    """Star or unstar a product (starred products sort first in pickers)"""
    return service.toggle_star(product_id, current_user)


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    current_user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    return service.delete_product(product_id, current_user)
