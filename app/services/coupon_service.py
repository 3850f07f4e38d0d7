import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import and_, or_, update
from sqlalchemy.orm import Session

from app.core.errors import CouponExhausted
from app.models.coupon import Coupon
from app.schemas.coupon import CouponCreate
from app.services.pricing_service.calculate_price import CouponTerms
from app.utils.ids import generate_id
from app.utils.money import D

logger = logging.getLogger(__name__)


def create_coupon(db: Session, data: CouponCreate) -> Coupon:
    if get_coupon_by_code(db, data.code):
        raise HTTPException(status_code=400, detail="Coupon code already exists")

    coupon = Coupon(
        id=generate_id("CPN"),
        code=data.code,
        discount_type=data.discount_type.value,
        amount=data.amount,
        usage_limit=data.usage_limit,
        used_count=0,
        start_at=data.start_at,
        end_at=data.end_at,
    )
    db.add(coupon)
    db.commit()
    db.refresh(coupon)
    logger.info("coupon %s created (%s %s)", coupon.code, coupon.discount_type, coupon.amount)
    return coupon


def list_coupons(db: Session) -> List[Coupon]:
    return db.query(Coupon).order_by(Coupon.created_at.desc()).all()


def get_coupon_by_code(db: Session, code: str) -> Optional[Coupon]:
    # codes are matched exactly as stored
    return db.query(Coupon).filter(Coupon.code == code).first()


def to_coupon_terms(coupon: Coupon) -> CouponTerms:
    return CouponTerms(
        code=coupon.code,
        discount_type=coupon.discount_type,
        amount=D(coupon.amount),
        usage_limit=coupon.usage_limit,
        used_count=coupon.used_count or 0,
        start_at=coupon.start_at,
        end_at=coupon.end_at,
    )


def consume_coupon_use(db: Session, code: str) -> None:
    """
    Atomically take one use of the coupon inside the caller's transaction.

    The guard lives in the UPDATE itself, so two concurrent orders cannot
    both pass a read-then-write check on used_count. Does not commit.
    """
    upd = (
        update(Coupon)
        .where(
            and_(
                Coupon.code == code,
                or_(
                    Coupon.usage_limit.is_(None),
                    Coupon.used_count < Coupon.usage_limit,
                ),
            )
        )
        .values(used_count=Coupon.used_count + 1)
        .execution_options(synchronize_session=False)
    )
    res = db.execute(upd)
    if res.rowcount != 1:
        raise CouponExhausted(f"Coupon {code} has no uses left")
