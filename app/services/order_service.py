import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import MarketplaceError
from app.enums.statuses import CommissionStatus, OrderStatus, PaymentStatus
from app.models.category import Category
from app.models.commission import Commission
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.models.user import User
from app.schemas.order import OrderCreate
from app.services.coupon_service import (
    consume_coupon_use,
    get_coupon_by_code,
    to_coupon_terms,
)
from app.services.pricing_service.calculate_price import (
    Catalog,
    LineItem,
    PricingResult,
    price_order,
)
from app.utils.ids import generate_id
from app.utils.money import D, to_float

logger = logging.getLogger(__name__)


# ---------- CATALOG SNAPSHOT ----------

def load_catalog(
    db: Session,
    product_ids: List[str],
    coupon_code: Optional[str] = None,
) -> Tuple[Catalog, Dict[str, Product]]:
    """
    Snapshot the rows pricing needs for one cart.
    Returns the catalog plus the product rows by id.
    """
    products: Dict[str, Product] = {}
    if product_ids:
        rows = db.query(Product).filter(Product.id.in_(set(product_ids))).all()
        products = {p.id: p for p in rows}

    category_ids = {p.category_id for p in products.values() if p.category_id}
    categories = {}
    if category_ids:
        rows = db.query(Category).filter(Category.id.in_(category_ids)).all()
        categories = {c.id: D(c.commission_rate) for c in rows if c.commission_rate is not None}

    coupons = {}
    if coupon_code:
        coupon = get_coupon_by_code(db, coupon_code)
        if coupon:
            coupons[coupon.code] = to_coupon_terms(coupon)

    catalog = Catalog(
        default_rate=D(settings.DEFAULT_COMMISSION_RATE),
        products={pid: p.category_id for pid, p in products.items()},
        categories=categories,
        coupons=coupons,
    )
    return catalog, products


def _resolve_line_items(data: OrderCreate, products: Dict[str, Product]) -> List[LineItem]:
    lines: List[LineItem] = []
    for item in data.items:
        product = products.get(item.product_id)

        if settings.TRUST_CLIENT_PRICES and item.unit_price is not None:
            unit_price = item.unit_price
        elif product is not None:
            unit_price = product.price
        elif settings.TRUST_CLIENT_PRICES:
            raise HTTPException(
                status_code=400,
                detail=f"unit_price required for unknown product {item.product_id}",
            )
        else:
            raise HTTPException(status_code=400, detail=f"Product {item.product_id} not found")

        lines.append(LineItem(product_id=item.product_id, quantity=item.quantity, unit_price=D(unit_price)))
    return lines


def _single_vendor(lines: List[LineItem], products: Dict[str, Product]) -> Optional[str]:
    vendor_ids = {
        products[line.product_id].vendor_id if line.product_id in products else None
        for line in lines
    }
    if len(vendor_ids) == 1:
        return vendor_ids.pop()
    return None


# ---------- QUOTE ----------

def quote_order(db: Session, data: OrderCreate) -> PricingResult:
    """Price a cart without persisting anything or consuming the coupon."""
    catalog, products = load_catalog(
        db, [i.product_id for i in data.items], data.coupon_code
    )
    lines = _resolve_line_items(data, products)
    return price_order(lines, data.coupon_code, catalog)


# ---------- PLACE ORDER ----------

def place_order(db: Session, data: OrderCreate, buyer: Optional[User] = None) -> Order:
    catalog, products = load_catalog(
        db, [i.product_id for i in data.items], data.coupon_code
    )
    lines = _resolve_line_items(data, products)

    try:
        result = price_order(lines, data.coupon_code, catalog)
    except MarketplaceError as e:
        logger.info("order rejected: %s (%s)", e.code, e.message)
        raise

    order = Order(
        id=generate_id("ORD"),
        buyer_id=buyer.id if buyer else None,
        coupon_code=result.coupon.code if result.coupon else None,
        subtotal=to_float(result.subtotal),
        discount=to_float(result.discount),
        total=to_float(result.total),
        commission_amount=to_float(result.commission_amount),
        status=OrderStatus.created.value,
        payment_status=PaymentStatus.unpaid.value,
        created_at=datetime.utcnow(),
    )
    for priced in result.items:
        order.items.append(
            OrderItem(
                product_id=priced.product_id,
                quantity=priced.quantity,
                unit_price=to_float(priced.unit_price),
                line_total=to_float(priced.line_total),
                commission_rate=float(priced.commission_rate),
                commission_amount=to_float(priced.commission_amount),
            )
        )

    commission = Commission(
        id=generate_id("COM"),
        order_id=order.id,
        vendor_id=_single_vendor(lines, products),
        amount=order.commission_amount,
        status=CommissionStatus.pending.value,
    )

    # coupon use, order and commission commit together
    try:
        if result.coupon is not None:
            consume_coupon_use(db, result.coupon.code)
        db.add(order)
        db.add(commission)
        db.commit()
    except MarketplaceError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.exception("failed to persist order")
        raise HTTPException(status_code=500, detail="Failed to place order; please try again") from e

    db.refresh(order)
    logger.info(
        "order %s placed: subtotal=%.2f discount=%.2f total=%.2f commission=%.2f",
        order.id, order.subtotal, order.discount, order.total, order.commission_amount,
    )
    return order


# ---------- READ ----------

def get_order(db: Session, order_id: str) -> Optional[Order]:
    return db.query(Order).filter(Order.id == order_id).first()


def list_orders(db: Session, buyer_id: Optional[str] = None) -> List[Order]:
    query = db.query(Order)
    if buyer_id:
        query = query.filter(Order.buyer_id == buyer_id)
    return query.order_by(Order.created_at.desc()).all()
