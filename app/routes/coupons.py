from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.dependencies.auth import require_admin
from app.schemas.coupon import CouponCreate, CouponResponse
from app.services.coupon_service import create_coupon, list_coupons

router = APIRouter(prefix="/coupons", tags=["Coupons"])


@router.get("/", response_model=List[CouponResponse])
def list_all(db: Session = Depends(get_db)):
    return list_coupons(db)


@router.post(
    "/",
    response_model=CouponResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create(data: CouponCreate, db: Session = Depends(get_db)):
    return create_coupon(db, data)
