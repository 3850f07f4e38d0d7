import logging
from datetime import datetime
from typing import Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.enums.statuses import OrderStatus, PaymentStatus
from app.models.commission import Commission
from app.models.order import Order
from app.services.commission_service import get_commission_for_order, mark_payable
from app.services.order_service import get_order

logger = logging.getLogger(__name__)


def complete_payment(db: Session, order_id: str) -> Tuple[Order, Optional[Commission]]:
    """
    Payment-completion signal for an order: the order is marked paid and its
    commission becomes payable. Repeating the signal is harmless.
    """
    order = get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    if order.payment_status != PaymentStatus.paid.value:
        order.payment_status = PaymentStatus.paid.value
        order.status = OrderStatus.paid.value
        order.paid_at = datetime.utcnow()

    commission = get_commission_for_order(db, order_id)
    if commission is not None:
        mark_payable(commission)

    db.commit()
    db.refresh(order)
    if commission is not None:
        db.refresh(commission)

    logger.info("payment completed for order %s", order.id)
    return order, commission
