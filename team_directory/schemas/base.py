# team_directory/schemas/base.py
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, field_validator

# Largest value an INTEGER primary key can hold on every supported store
MAX_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


def _reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise be read as 1/0
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    return value


RecordId = Annotated[int, BeforeValidator(_reject_bool), Field(ge=1, le=MAX_ID)]


class CreatedAtMixin(BaseModel):
    """Creation timestamp, exposed to clients as a date only (YYYY-MM-DD)"""
    created_at: date

    @field_validator("created_at", mode="before")
    @classmethod
    def _date_only(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value


class BaseSchema(BaseModel):
    """Base schema with common configuration"""
    class Config:
        from_attributes = True
