from time import perf_counter
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.dependencies.auth import require_admin, require_auth
from app.models.user import User
from app.schemas.order import OrderCreate, OrderQuoteResponse, OrderResponse
from app.services.order_service import get_order, list_orders, place_order, quote_order
from app.utils.money import to_float

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders & Pricing"])


@router.post("/", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    data: OrderCreate,
    user: User = Depends(require_auth),
    db: Session = Depends(get_db),
):
    """
    Place an order:

    1. Subtotal from line items
    2. Coupon discount (clamped to subtotal)
    3. Category-weighted commission on the discounted lines
    4. Order + pending commission persisted together
    """
    start = perf_counter()
    order = place_order(db, data, buyer=user)
    duration_ms = (perf_counter() - start) * 1000.0

    if duration_ms > 30.0:
        logger.warning(
            "order %s took %.2f ms to price and persist (%d items)",
            order.id, duration_ms, len(data.items),
        )
    return order


@router.post("/quote", response_model=OrderQuoteResponse, dependencies=[Depends(require_auth)])
def quote(data: OrderCreate, db: Session = Depends(get_db)):
    """Price a cart without placing the order; the coupon is not consumed."""
    result = quote_order(db, data)
    return {
        "subtotal": to_float(result.subtotal),
        "discount": to_float(result.discount),
        "total": to_float(result.total),
        "commission_amount": to_float(result.commission_amount),
        "coupon_code": result.coupon.code if result.coupon else None,
        "items": [
            {
                "product_id": i.product_id,
                "quantity": i.quantity,
                "unit_price": to_float(i.unit_price),
                "line_total": to_float(i.line_total),
                "commission_rate": float(i.commission_rate),
                "commission_amount": to_float(i.commission_amount),
            }
            for i in result.items
        ],
    }


@router.get("/", response_model=List[OrderResponse], dependencies=[Depends(require_admin)])
def list_all(db: Session = Depends(get_db)):
    return list_orders(db)


@router.get("/mine", response_model=List[OrderResponse])
def my_orders(user: User = Depends(require_auth), db: Session = Depends(get_db)):
    return list_orders(db, buyer_id=user.id)


@router.get("/{order_id}", response_model=OrderResponse)
def get(order_id: str, user: User = Depends(require_auth), db: Session = Depends(get_db)):
    order = get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    if user.role != "admin" and order.buyer_id != user.id:
        raise HTTPException(status_code=403, detail="Not your order")
    return order
