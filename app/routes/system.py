import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.dependencies.auth import require_admin
from app.enums.statuses import CommissionStatus
from app.models.commission import Commission, Payout
from app.models.order import Order
from app.schemas.system import (
    CommissionMetrics,
    HealthCheckResponse,
    OrderMetrics,
    RequestMetrics,
    SystemMetricsResponse,
)
from app.schemas.vendor import AuditLogResponse
from app.services.audit_service import list_audit_logs

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


def _uptime(request: Request, now: datetime) -> float:
    started = getattr(request.app.state, "start_time", None) or now
    return (now - started).total_seconds()


def _request_metrics(request: Request) -> RequestMetrics:
    counters = getattr(request.app.state, "metrics", None) or {}
    count = int(counters.get("requests", 0))
    total_ms = float(counters.get("total_response_ms", 0.0))
    return RequestMetrics(
        count=count,
        avg_response_ms=round(total_ms / count, 2) if count else None,
        slow=int(counters.get("slow_requests", 0)),
    )


def _order_metrics(db: Session, now: datetime) -> OrderMetrics:
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    total, average = db.query(func.count(Order.id), func.avg(Order.total)).one()
    today = db.query(func.count(Order.id)).filter(Order.created_at >= midnight).scalar()
    return OrderMetrics(
        total=total or 0,
        today=today or 0,
        average_value=round(float(average), 2) if average is not None else None,
    )


def _commission_metrics(db: Session) -> CommissionMetrics:
    pending = (
        db.query(func.count(Commission.id))
        .filter(Commission.status == CommissionStatus.pending.value)
        .scalar()
    )
    payable = (
        db.query(func.coalesce(func.sum(Commission.amount), 0.0))
        .filter(Commission.status == CommissionStatus.payable.value)
        .scalar()
    )
    paid_out = db.query(func.coalesce(func.sum(Payout.amount), 0.0)).scalar()
    return CommissionMetrics(
        pending=pending or 0,
        payable_total=round(float(payable), 2),
        paid_out_total=round(float(paid_out), 2),
    )


@router.get("/health", response_model=HealthCheckResponse)
def health(request: Request, db: Session = Depends(get_db)):
    """Public liveness probe; also runs SELECT 1 against the database."""
    now = datetime.utcnow()
    error = None
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("health check: database unreachable: %s", e)
        error = str(e)

    return HealthCheckResponse(
        status="degraded" if error else "ok",
        database="down" if error else "up",
        uptime_seconds=_uptime(request, now),
        checked_at=now,
        error=error,
    )


@router.get("/metrics", response_model=SystemMetricsResponse, dependencies=[Depends(require_admin)])
def metrics(request: Request, db: Session = Depends(get_db)):
    """
    Request counters kept by MetricsMiddleware on app.state, plus order and
    commission figures read from the database.
    """
    now = datetime.utcnow()
    return SystemMetricsResponse(
        uptime_seconds=_uptime(request, now),
        generated_at=now,
        requests=_request_metrics(request),
        orders=_order_metrics(db, now),
        commissions=_commission_metrics(db),
    )


@router.get("/audit-logs", response_model=List[AuditLogResponse], dependencies=[Depends(require_admin)])
def audit_logs(
    vendor_id: Optional[str] = None,
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return list_audit_logs(db, vendor_id=vendor_id, limit=limit)
