"""Product domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from ...shared.validators import reject_null_fields, validate_category
from ...utils.sanitization import clean_text


class ProductCreate(BaseModel):
    name: str
    sku: Optional[str] = None
    category: Optional[str] = None
    cost: Optional[float] = Field(None, ge=0)
    sale_price: float = Field(..., ge=0)
    sold_qty: int = Field(0, ge=0)
    active: bool = True
    starred: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = clean_text(v, max_length=255)
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("sku")
    @classmethod
    def validate_sku(cls, v):
        return clean_text(v, max_length=100)

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v):
        return validate_category(v)


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    cost: Optional[float] = Field(None, ge=0)
    sale_price: Optional[float] = Field(None, ge=0)
    sold_qty: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None
    starred: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = clean_text(v, max_length=255)
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    @field_validator("sku")
    @classmethod
    def validate_sku(cls, v):
        return clean_text(v, max_length=100)

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v):
        return validate_category(v)

    @model_validator(mode="after")
    def check_required(self):
        return reject_null_fields(self, ("name", "sale_price", "sold_qty", "active", "starred"))


class ProductResponse(BaseModel):
    id: int
    name: str
    sku: Optional[str] = None
    category: Optional[str] = None
    cost: Optional[float] = None
    sale_price: float
    sold_qty: int = 0
    active: bool = True
    starred: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @computed_field
    @property
    def margin_percent(self) -> Optional[float]:
        """Gross margin on the catalog price"""
        if not self.cost or not self.sale_price:
            return None
        return round((self.sale_price - self.cost) / self.sale_price * 100, 1)
