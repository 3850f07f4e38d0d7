from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.schemas.analytics import CategoryMetrics, CategoryOrdersResponse
from app.services.analytics_service import get_category_analytics, get_category_orders
from app.dependencies.auth import require_admin

router = APIRouter(prefix="/analytics", tags=["Analytics & Reporting"])


@router.get("/categories", response_model=Dict[str, CategoryMetrics], dependencies=[Depends(require_admin)])
def category_analytics(
    db: Session = Depends(get_db),
):
    return get_category_analytics(db)


@router.get("/categories/{category_id}/orders", response_model=CategoryOrdersResponse, dependencies=[Depends(require_admin)])
def category_orders(
    category_id: str,
    db: Session = Depends(get_db),
):
    return get_category_orders(db, category_id)
