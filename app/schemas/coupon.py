from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.enums.statuses import DiscountType
from app.utils.datetimes import as_naive_utc


class CouponCreate(BaseModel):
    code: str = Field(min_length=1)
    discount_type: DiscountType
    amount: float = Field(ge=0)
    usage_limit: Optional[int] = Field(default=None, ge=1)
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None

    @field_validator("start_at", "end_at")
    @classmethod
    def to_utc(cls, v):
        return as_naive_utc(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.start_at and self.end_at and self.end_at < self.start_at:
            raise ValueError("end_at must not be before start_at")
        return self


class CouponResponse(BaseModel):
    id: str
    code: str
    discount_type: str
    amount: float
    usage_limit: Optional[int] = None
    used_count: int
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
