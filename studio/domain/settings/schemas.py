"""User settings schemas"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import reject_null_fields, validate_timezone
from ...utils.sanitization import clean_text


class SettingsResponse(BaseModel):
    email: str
    full_name: Optional[str] = None
    timezone: str
    # Current calendar date in the user's timezone
    today: date


class SettingsUpdate(BaseModel):
    timezone: Optional[str] = None
    full_name: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v):
        if v is None:
            return v
        return validate_timezone(v)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        return clean_text(v, max_length=255)

    @model_validator(mode="after")
    def check_required(self):
        return reject_null_fields(self, ("timezone",))
