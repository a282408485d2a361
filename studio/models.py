from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .config import DEFAULT_TIMEZONE, TAX_RATE_PERCENT
from .database import Base

# All DateTime columns hold naive UTC values.


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    timezone = Column(String(64), default=DEFAULT_TIMEZONE, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    clients = relationship("Client", back_populates="user")
    products = relationship("Product", back_populates="user")
    services = relationship("Service", back_populates="user")
    bookings = relationship("Booking", back_populates="user")
    additional_costs = relationship("AdditionalCost", back_populates="user")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    source = Column(String(20), nullable=True)  # booksy, instagram, referral, walk-in
    notes = Column(String(2000), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="clients")
    # Deleting a client keeps its bookings; client_id is nulled out
    bookings = relationship("Booking", back_populates="client")


class Product(Base):
    """Jewelry / earrings sold during bookings"""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    sku = Column(String(100), nullable=True)
    category = Column(String(100), nullable=True)
    cost = Column(Float, nullable=True)  # Purchase cost per unit
    sale_price = Column(Float, nullable=False)
    sold_qty = Column(Integer, default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    starred = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="products")


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    base_price = Column(Float, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="services")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)

    is_model = Column(Boolean, default=False, nullable=False)  # Free session for portfolio
    travel_fee = Column(Float, default=0, nullable=False)  # 0 when travel is disabled
    location = Column(String(500), nullable=True)
    payment_method = Column(String(20), nullable=True)  # cash, blik, card
    total_paid = Column(Float, default=0, nullable=False)
    tax_enabled = Column(Boolean, default=False, nullable=False)
    tax_rate = Column(Float, default=TAX_RATE_PERCENT, nullable=False)
    booksy_fee_enabled = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)

    # Snapshot of the financial model, rewritten on every save
    service_price = Column(Float, default=0, nullable=False)
    product_cost = Column(Float, default=0, nullable=False)
    product_revenue = Column(Float, default=0, nullable=False)
    booksy_fee = Column(Float, default=0, nullable=False)
    broken_product_loss = Column(Float, default=0, nullable=False)
    tax_amount = Column(Float, default=0, nullable=False)
    profit = Column(Float, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="bookings")
    client = relationship("Client", back_populates="bookings")
    service_items = relationship(
        "BookingServiceItem",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingServiceItem.id",
    )
    product_items = relationship(
        "BookingProductItem",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingProductItem.id",
    )
    broken_items = relationship(
        "BookingBrokenItem",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingBrokenItem.id",
    )


class BookingServiceItem(Base):
    __tablename__ = "booking_services"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    price = Column(Float, default=0, nullable=False)

    booking = relationship("Booking", back_populates="service_items")
    service = relationship("Service")


class BookingProductItem(Base):
    __tablename__ = "booking_products"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    qty = Column(Integer, default=1, nullable=False)
    price = Column(Float, nullable=True)  # Unit price override; null means sale_price
    sale_price = Column(Float, nullable=True)  # Catalog sale price at save time
    cost = Column(Float, nullable=True)  # Catalog unit cost at save time

    booking = relationship("Booking", back_populates="product_items")
    product = relationship("Product")


class BookingBrokenItem(Base):
    __tablename__ = "booking_broken_products"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    qty = Column(Integer, default=1, nullable=False)
    cost = Column(Float, nullable=True)  # Unit cost override; null means catalog_cost
    catalog_cost = Column(Float, nullable=True)  # Catalog unit cost at save time

    booking = relationship("Booking", back_populates="broken_items")
    product = relationship("Product")


class AdditionalCost(Base):
    """Operating costs outside bookings (rent, ads, print, consumables...)"""

    __tablename__ = "additional_costs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(100), nullable=False)  # Free-text category
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(String(1000), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="additional_costs")
