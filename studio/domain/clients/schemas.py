"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import reject_null_fields, validate_client_source, validate_phone
from ...utils.sanitization import clean_text


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: str
    phone: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = clean_text(v, max_length=255)
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v):
        return validate_phone(v)

    @field_validator("source")
    @classmethod
    def validate_source(cls, v):
        return validate_client_source(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return clean_text(v)


class ClientUpdate(BaseModel):
    """Schema for updating an existing client; omitted fields are left alone"""

    name: Optional[str] = None
    phone: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = clean_text(v, max_length=255)
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v):
        return validate_phone(v)

    @field_validator("source")
    @classmethod
    def validate_source(cls, v):
        return validate_client_source(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return clean_text(v)

    @model_validator(mode="after")
    def check_required(self):
        return reject_null_fields(self, ("name",))


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    name: str
    phone: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientBookingRow(BaseModel):
    """One line of a client's booking history"""

    id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    payment_method: Optional[str] = None
    total_paid: float
    profit: float


class ClientSummary(BaseModel):
    total_bookings: int
    total_revenue: float
    total_profit: float


class ClientDetailResponse(ClientResponse):
    bookings: list[ClientBookingRow]
    summary: ClientSummary
