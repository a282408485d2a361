"""Product service - Business logic for the product catalog"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Product, User
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

PRODUCT_STATUSES = ("active", "inactive", "all")


class ProductService:
    """Service layer for product business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository()

    def get_products(
        self,
        user: User,
        search: Optional[str] = None,
        status: str = "all",
        category: Optional[str] = None,
        starred_first: bool = False,
    ) -> list[Product]:
        if status not in PRODUCT_STATUSES:
            raise HTTPException(
                status_code=400, detail=f"Status must be one of: {', '.join(PRODUCT_STATUSES)}"
            )
        return self.repo.get_products(self.db, user.id, search, status, category, starred_first)

    def get_product(self, product_id: int, user: User) -> Product:
        product = self.repo.get_product_by_id(self.db, product_id, user.id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def get_categories(self, user: User) -> list[str]:
        return self.repo.get_categories(self.db, user.id)

    def create_product(self, data: ProductCreate, user: User) -> Product:
        logger.info(f"📦 Creating product '{data.name}' for user_id: {user.id}")
        return self.repo.create_product(self.db, user.id, **data.model_dump())

    def update_product(self, product_id: int, data: ProductUpdate, user: User) -> Product:
        product = self.get_product(product_id, user)
        return self.repo.update_product(self.db, product, **data.model_dump(exclude_unset=True))

    def toggle_star(self, product_id: int, user: User) -> Product:
        product = self.get_product(product_id, user)
        product.starred = not product.starred
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: int, user: User) -> dict:
        product = self.get_product(product_id, user)
        if self.repo.is_used_in_bookings(self.db, product.id):
            # Booking history keeps referencing the catalog cost and price
            raise HTTPException(
                status_code=409,
                detail="Product is used in bookings. Mark it inactive instead of deleting it.",
            )
        self.repo.delete_product(self.db, product)
        logger.info(f"🗑️ User {user.id} deleted product {product_id}")
        return {"message": "Product deleted"}
