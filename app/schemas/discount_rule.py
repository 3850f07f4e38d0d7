from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from app.utils.datetimes import as_naive_utc


class DiscountRuleBase(BaseModel):
    name: str = "Discount Rule"
    category_id: str
    discount_percent: float = Field(ge=0, le=100)
    max_discount: Optional[float] = None
    active: bool = True
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None

    @field_validator("start_at", "end_at")
    @classmethod
    def to_utc(cls, v):
        return as_naive_utc(v)


class DiscountRuleCreate(DiscountRuleBase):
    pass


class DiscountRuleUpdate(BaseModel):
    name: Optional[str] = None
    category_id: Optional[str] = None
    discount_percent: Optional[float] = Field(default=None, ge=0, le=100)
    max_discount: Optional[float] = None
    active: Optional[bool] = None
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None

    @field_validator("start_at", "end_at")
    @classmethod
    def to_utc(cls, v):
        return as_naive_utc(v)


class DiscountRuleResponse(DiscountRuleBase):
    id: str
    category_name: Optional[str] = None

    class Config:
        from_attributes = True
