from typing import Dict, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.schemas.analytics import (
    CategoryMetrics,
    CategoryOrderEntry,
    CategoryOrdersResponse,
)
from app.utils.money import to_float


def _orders_for_category(db: Session, category_id: str) -> List[Order]:
    """Orders with at least one line whose product is currently in the category."""
    product_ids = select(Product.id).where(Product.category_id == category_id)
    order_ids = (
        select(OrderItem.order_id)
        .where(OrderItem.product_id.in_(product_ids))
        .distinct()
    )
    return (
        db.query(Order)
        .filter(Order.id.in_(order_ids))
        .order_by(Order.created_at.desc())
        .all()
    )


# ---------- CATEGORY ANALYTICS ----------

def get_category_analytics(db: Session) -> Dict[str, CategoryMetrics]:
    analytics: Dict[str, CategoryMetrics] = {}

    for cat in db.query(Category).order_by(Category.name).all():
        product_count = (
            db.query(Product).filter(Product.category_id == cat.id).count()
        )
        orders = _orders_for_category(db, cat.id)

        total_revenue = sum(o.subtotal or 0 for o in orders)
        total_commission = sum(o.commission_amount or 0 for o in orders)
        if orders:
            avg_order_value = total_revenue / len(orders)
            avg_commission = total_commission / len(orders)
        else:
            avg_order_value = 0.0
            avg_commission = 0.0

        analytics[cat.id] = CategoryMetrics(
            category_id=cat.id,
            category_name=cat.name,
            products=product_count,
            orders=len(orders),
            total_revenue=to_float(total_revenue),
            total_commission=to_float(total_commission),
            avg_order_value=to_float(avg_order_value),
            avg_commission=to_float(avg_commission),
            commission_rate=f"{round(cat.commission_rate * 100, 2)}%",
        )

    return analytics


# ---------- ORDERS BY CATEGORY ----------

def get_category_orders(db: Session, category_id: str) -> CategoryOrdersResponse:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    orders = _orders_for_category(db, category_id)
    details = [
        CategoryOrderEntry(
            order_id=o.id,
            buyer_id=o.buyer_id,
            subtotal=o.subtotal,
            commission=o.commission_amount,
            discount=o.discount,
            total=o.total,
            created_at=o.created_at,
            item_count=len(o.items),
        )
        for o in orders
    ]
    return CategoryOrdersResponse(
        category=category.name,
        orders=details,
        order_count=len(details),
    )
