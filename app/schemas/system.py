from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    status: str  # ok / degraded
    database: str  # up / down
    uptime_seconds: float
    checked_at: datetime
    error: Optional[str] = None


class RequestMetrics(BaseModel):
    count: int
    avg_response_ms: Optional[float] = None
    slow: int = 0


class OrderMetrics(BaseModel):
    total: int
    today: int
    average_value: Optional[float] = None


class CommissionMetrics(BaseModel):
    pending: int
    payable_total: float
    paid_out_total: float


class SystemMetricsResponse(BaseModel):
    uptime_seconds: float
    generated_at: datetime
    requests: RequestMetrics
    orders: OrderMetrics
    commissions: CommissionMetrics
