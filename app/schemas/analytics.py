from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


# ---------- Category analytics ----------

class CategoryMetrics(BaseModel):
    category_id: str
    category_name: str
    products: int
    orders: int
    total_revenue: float
    total_commission: float
    avg_order_value: float
    avg_commission: float
    commission_rate: str  # e.g. "10.0%"


# ---------- Orders per category ----------

class CategoryOrderEntry(BaseModel):
    order_id: str
    buyer_id: Optional[str] = None
    subtotal: float
    commission: float
    discount: float
    total: float
    created_at: datetime
    item_count: int


class CategoryOrdersResponse(BaseModel):
    category: str
    orders: List[CategoryOrderEntry]
    order_count: int
