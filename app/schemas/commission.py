from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.schemas.order import OrderResponse


class CommissionResponse(BaseModel):
    id: str
    order_id: str
    vendor_id: Optional[str] = None
    amount: float
    status: str
    payable_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PayoutResponse(BaseModel):
    id: str
    commission_id: str
    vendor_id: Optional[str] = None
    amount: float
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class CommissionPayResponse(BaseModel):
    commission: CommissionResponse
    payout: PayoutResponse


# ---------- Payments ----------

class PaymentSimulateRequest(BaseModel):
    order_id: str


class PaymentSimulateResponse(BaseModel):
    order: OrderResponse
    commission: Optional[CommissionResponse] = None
