"""
Commission lifecycle.

A commission only ever moves forward:

    pending -> payable -> paid

`payable` is reached when the order's payment completes, `paid` through an
explicit admin payout. Anything else raises InvalidCommissionTransition.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.errors import InvalidCommissionTransition
from app.enums.statuses import CommissionStatus, PayoutStatus
from app.models.commission import Commission, Payout
from app.utils.ids import generate_id

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    CommissionStatus.pending.value: {CommissionStatus.payable.value},
    CommissionStatus.payable.value: {CommissionStatus.paid.value},
    CommissionStatus.paid.value: set(),
}


def ensure_transition(commission: Commission, target: str) -> None:
    if target not in ALLOWED_TRANSITIONS.get(commission.status, set()):
        raise InvalidCommissionTransition(
            f"Commission {commission.id} is {commission.status}; cannot move to {target}"
        )


def get_commission(db: Session, commission_id: str) -> Optional[Commission]:
    return db.query(Commission).filter(Commission.id == commission_id).first()


def get_commission_for_order(db: Session, order_id: str) -> Optional[Commission]:
    return db.query(Commission).filter(Commission.order_id == order_id).first()


def list_commissions(db: Session, status: Optional[str] = None) -> List[Commission]:
    query = db.query(Commission)
    if status:
        query = query.filter(Commission.status == status)
    return query.order_by(Commission.created_at.desc()).all()


def list_payouts(db: Session, vendor_id: Optional[str] = None) -> List[Payout]:
    query = db.query(Payout)
    if vendor_id:
        query = query.filter(Payout.vendor_id == vendor_id)
    return query.order_by(Payout.created_at.desc()).all()


def mark_payable(commission: Commission) -> bool:
    """
    pending -> payable. Returns False when the commission is already past
    pending, so a repeated payment signal never moves it backwards.
    Does not commit.
    """
    if commission.status != CommissionStatus.pending.value:
        return False
    ensure_transition(commission, CommissionStatus.payable.value)
    commission.status = CommissionStatus.payable.value
    commission.payable_at = datetime.utcnow()
    logger.info("commission %s is payable (order %s)", commission.id, commission.order_id)
    return True


def pay_commission(db: Session, commission_id: str) -> Tuple[Commission, Payout]:
    commission = get_commission(db, commission_id)
    if not commission:
        raise HTTPException(status_code=404, detail="Commission not found")

    ensure_transition(commission, CommissionStatus.paid.value)

    now = datetime.utcnow()
    commission.status = CommissionStatus.paid.value
    commission.paid_at = now

    payout = Payout(
        id=generate_id("PAY"),
        commission_id=commission.id,
        vendor_id=commission.vendor_id,
        amount=commission.amount,
        status=PayoutStatus.processed.value,
        created_at=now,
    )
    db.add(payout)

    try:
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to record payout") from e

    db.refresh(commission)
    db.refresh(payout)
    logger.info("commission %s paid out: %s %.2f", commission.id, payout.id, payout.amount)
    return commission, payout
