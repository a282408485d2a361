"""Product repository - Database operations for the product catalog"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import BookingBrokenItem, BookingProductItem, Product


class ProductRepository:
    """Repository for product database operations"""

    @staticmethod
    def get_products(
        db: Session,
        user_id: int,
        search: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        starred_first: bool = False,
    ) -> list[Product]:
        """List products; status is 'active', 'inactive' or 'all'"""
        query = db.query(Product).filter(Product.user_id == user_id)

        if search:
            search_term = f"%{search.strip().lower()}%"
            query = query.filter(or_(Product.name.ilike(search_term), Product.sku.ilike(search_term)))

        if status == "active":
            query = query.filter(Product.active.is_(True))
        elif status == "inactive":
            query = query.filter(Product.active.is_(False))

        if category and category != "all":
            query = query.filter(Product.category == category)

        ordering = [Product.starred.desc()] if starred_first else []
        ordering.append(Product.created_at.desc())
        ordering.append(Product.id.desc())
        return query.order_by(*ordering).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: int, user_id: int) -> Optional[Product]:
        return (
            db.query(Product)
            .filter(Product.id == product_id, Product.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_products_by_ids(db: Session, product_ids: list[int], user_id: int) -> dict[int, Product]:
        """Catalog lookup keyed by id, restricted to the user's products"""
        if not product_ids:
            return {}
        products = (
            db.query(Product)
            .filter(Product.id.in_(set(product_ids)), Product.user_id == user_id)
            .all()
        )
        return {product.id: product for product in products}

    @staticmethod
    def get_categories(db: Session, user_id: int) -> list[str]:
        rows = (
            db.query(Product.category)
            .filter(Product.user_id == user_id, Product.category.isnot(None))
            .distinct()
            .all()
        )
        return sorted(row[0] for row in rows if row[0])

    @staticmethod
    def create_product(db: Session, user_id: int, **product_data) -> Product:
        product = Product(user_id=user_id, **product_data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def update_product(db: Session, product: Product, **updates) -> Product:
        for key, value in updates.items():
            if hasattr(product, key):
                setattr(product, key, value)

        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def is_used_in_bookings(db: Session, product_id: int) -> bool:
        sold = db.query(BookingProductItem.id).filter(BookingProductItem.product_id == product_id).first()
        broken = (
            db.query(BookingBrokenItem.id)
            .filter(BookingBrokenItem.product_id == product_id)
            .first()
        )
        return bool(sold or broken)

    @staticmethod
    def delete_product(db: Session, product: Product) -> None:
        db.delete(product)
        db.commit()
