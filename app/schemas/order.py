from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class OrderItemCreate(BaseModel):
    product_id: str
    quantity: int = Field(default=1, gt=0)
    # only honoured when TRUST_CLIENT_PRICES is enabled
    unit_price: Optional[float] = Field(default=None, ge=0)


class OrderCreate(BaseModel):
    items: List[OrderItemCreate] = []
    coupon_code: Optional[str] = None


class OrderItemResponse(BaseModel):
    product_id: str
    quantity: int
    unit_price: float
    line_total: float
    commission_rate: float
    commission_amount: float

    class Config:
        from_attributes = True


class OrderQuoteResponse(BaseModel):
    subtotal: float
    discount: float
    total: float
    commission_amount: float
    coupon_code: Optional[str] = None
    items: List[OrderItemResponse] = []


class OrderResponse(BaseModel):
    id: str
    buyer_id: Optional[str] = None
    coupon_code: Optional[str] = None
    subtotal: float
    discount: float
    total: float
    commission_amount: float
    status: str
    payment_status: str
    paid_at: Optional[datetime] = None
    created_at: datetime
    items: List[OrderItemResponse] = []

    class Config:
        from_attributes = True
