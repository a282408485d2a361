"""Additional cost schemas"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import reject_null_fields, validate_category
from ...utils.sanitization import clean_text


class AdditionalCostCreate(BaseModel):
    type: str
    amount: float = Field(..., ge=0.01)
    date: dt.date
    description: Optional[str] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        v = validate_category(v)
        if not v:
            raise ValueError("Cost type is required")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return clean_text(v, max_length=1000)


class AdditionalCostUpdate(BaseModel):
    type: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0.01)
    date: Optional[dt.date] = None
    description: Optional[str] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        if v is None:
            return v
        v = validate_category(v)
        if not v:
            raise ValueError("Cost type cannot be empty")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return clean_text(v, max_length=1000)

    @model_validator(mode="after")
    def check_required(self):
        return reject_null_fields(self, ("type", "amount", "date"))


class AdditionalCostResponse(BaseModel):
    id: int
    type: str
    amount: float
    date: dt.date
    description: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
