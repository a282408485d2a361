"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_payment_method
from ...utils.sanitization import clean_text
from ..clients.schemas import ClientCreate, ClientResponse


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ServiceItemInput(BaseModel):
    service_id: int
    # None takes the catalog base price
    price: Optional[float] = Field(None, ge=0)


class ProductItemInput(BaseModel):
    product_id: int
    qty: int = Field(1, ge=1)
    # Unit price override; None sells at catalog sale price
    price: Optional[float] = Field(None, ge=0)


class BrokenItemInput(BaseModel):
    product_id: int
    qty: int = Field(1, ge=1)
    # Unit cost override; None uses catalog cost
    cost: Optional[float] = Field(None, ge=0)


class BookingDraft(BaseModel):
    """
    A booking as edited in the form. Used as-is for the live preview, where
    empty line collections and a missing client are allowed.

    tax_enabled and booksy_fee_enabled default from the payment method and
    the client source when left out.
    """

    client_id: Optional[int] = None
    new_client: Optional[ClientCreate] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    service_items: list[ServiceItemInput] = []
    product_items: list[ProductItemInput] = []
    broken_items: list[BrokenItemInput] = []

    is_model: bool = False
    travel_enabled: bool = False
    travel_fee: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    broken_enabled: bool = False
    total_paid: Optional[float] = Field(None, ge=0)
    payment_method: str = "cash"
    tax_enabled: Optional[bool] = None
    booksy_fee_enabled: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("payment_method")
    @classmethod
    def normalize_payment_method(cls, v):
        return validate_payment_method(v)

    @field_validator("location")
    @classmethod
    def validate_location(cls, v):
        return clean_text(v, max_length=500)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return clean_text(v)


class BookingCreate(BookingDraft):
    """Schema for saving a booking (create and full update)"""

    start_time: datetime
    service_items: list[ServiceItemInput] = Field(..., min_length=1)
    product_items: list[ProductItemInput] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_client(self):
        if self.client_id is None and self.new_client is None:
            raise ValueError("Select a client or add a new one")
        if self.client_id is not None and self.new_client is not None:
            raise ValueError("Provide either client_id or new_client, not both")
        if self.end_time is not None:
            same_kind = (self.end_time.tzinfo is None) == (self.start_time.tzinfo is None)
            if same_kind and self.end_time < self.start_time:
                raise ValueError("End time cannot be before start time")
        return self


class BookingFinancialsResponse(BaseModel):
    service_revenue: float
    product_revenue: float
    product_cost: float
    broken_loss: float
    travel_amount: float
    booksy_fee: float
    tax_amount: float
    total_paid: float
    revenue: float
    total_costs: float
    projected_profit: float
    real_profit: float
    profits_equal: bool


class ServiceItemResponse(BaseModel):
    service_id: int
    name: Optional[str] = None
    duration_minutes: Optional[int] = None
    base_price: Optional[float] = None
    price: float
    is_overridden: bool = False


class ProductItemResponse(BaseModel):
    product_id: int
    name: Optional[str] = None
    qty: int
    sale_price: Optional[float] = None
    cost: Optional[float] = None
    price: Optional[float] = None
    unit_price: float
    is_overridden: bool = False


class BrokenItemResponse(BaseModel):
    product_id: int
    name: Optional[str] = None
    qty: int
    catalog_cost: Optional[float] = None
    cost: Optional[float] = None
    unit_cost: float
    is_overridden: bool = False


class BookingPreviewResponse(BaseModel):
    """Live form figures for an unsaved booking"""

    service_items: list[ServiceItemResponse]
    product_items: list[ProductItemResponse]
    broken_items: list[BrokenItemResponse]
    end_time: Optional[datetime] = None
    travel_fee: float
    tax_enabled: bool
    booksy_fee_enabled: bool
    financials: BookingFinancialsResponse

    @field_validator("end_time")
    @classmethod
    def mark_utc(cls, v):
        return _as_utc(v)


class BookingDetailResponse(BaseModel):
    id: int
    client_id: Optional[int] = None
    client: Optional[ClientResponse] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    is_model: bool
    travel_fee: float
    location: Optional[str] = None
    payment_method: Optional[str] = None
    total_paid: float
    tax_enabled: bool
    tax_rate: float
    booksy_fee_enabled: bool
    notes: Optional[str] = None
    service_items: list[ServiceItemResponse]
    product_items: list[ProductItemResponse]
    broken_items: list[BrokenItemResponse]
    financials: BookingFinancialsResponse
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("start_time", "end_time", "created_at", "updated_at")
    @classmethod
    def mark_utc(cls, v):
        return _as_utc(v)


class BookingListItem(BaseModel):
    """Calendar entry"""

    id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    client_id: Optional[int] = None
    client_name: Optional[str] = None
    services: list[str] = []
    is_model: bool = False
    payment_method: Optional[str] = None
    total_paid: float
    profit: Optional[float] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def mark_utc(cls, v):
        return _as_utc(v)
