from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.config import settings
from app.database.connection import get_db
from app.dependencies.auth import require_auth
from app.models.user import User
from app.schemas.commission import PaymentSimulateRequest, PaymentSimulateResponse
from app.services.order_service import get_order
from app.services.payment_service import complete_payment

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("/simulate", response_model=PaymentSimulateResponse)
def simulate_payment(
    data: PaymentSimulateRequest,
    user: User = Depends(require_auth),
    db: Session = Depends(get_db),
):
    """Development stand-in for a payment gateway confirmation."""
    if not settings.ALLOW_PAYMENT_SIMULATION:
        raise HTTPException(status_code=404, detail="Payment simulation disabled")

    order = get_order(db, data.order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    if user.role != "admin" and order.buyer_id != user.id:
        raise HTTPException(status_code=403, detail="Not your order")

    order, commission = complete_payment(db, data.order_id)
    return {"order": order, "commission": commission}
