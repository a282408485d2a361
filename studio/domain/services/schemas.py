"""Service catalog schemas (piercing sessions offered by the studio)"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import reject_null_fields
from ...utils.sanitization import clean_text


class ServiceCreate(BaseModel):
    name: str
    duration_minutes: int = Field(..., ge=1)
    base_price: float = Field(..., ge=0)
    active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = clean_text(v, max_length=255)
        if not v:
            raise ValueError("Name is required")
        return v


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=1)
    base_price: Optional[float] = Field(None, ge=0)
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = clean_text(v, max_length=255)
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    @model_validator(mode="after")
    def check_required(self):
        return reject_null_fields(self, ("name", "duration_minutes", "base_price", "active"))


class ServiceResponse(BaseModel):
    id: int
    name: str
    duration_minutes: int
    base_price: float
    active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
