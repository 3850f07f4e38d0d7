from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi import HTTPException

from app.core.config import settings
from app.core.errors import CouponExhausted, CouponExpired, InvalidCoupon
from app.models.commission import Commission
from app.models.coupon import Coupon
from app.models.order import Order
from app.models.product import Product
from app.models.vendor import Vendor
from app.schemas.order import OrderCreate, OrderItemCreate
from app.services import order_service
from app.services.coupon_service import consume_coupon_use, get_coupon_by_code
from app.services.order_service import place_order, quote_order


def _cart(*lines, coupon_code=None) -> OrderCreate:
    return OrderCreate(
        items=[OrderItemCreate(product_id=pid, quantity=qty) for pid, qty in lines],
        coupon_code=coupon_code,
    )


def _add_coupon(db, code, discount_type="percentage", amount=10, **kwargs) -> Coupon:
    coupon = Coupon(id=f"CPN_{code}", code=code, discount_type=discount_type, amount=amount, used_count=0, **kwargs)
    db.add(coupon)
    db.commit()
    return coupon


@pytest.mark.order(1)
def test_place_order_persists_order_items_and_pending_commission(db, seeded, buyer):
    order = place_order(db, _cart(("PRD_LAPTOP", 1), ("PRD_SCARF", 1)), buyer=buyer)

    assert order.id.startswith("ORD_")
    assert order.buyer_id == buyer.id
    assert order.subtotal == 519.98
    assert order.discount == 0.0
    assert order.total == 519.98
    assert order.commission_amount == 52.40
    assert order.status == "created"
    assert order.payment_status == "unpaid"
    assert {i.product_id: i.unit_price for i in order.items} == {"PRD_LAPTOP": 499.99, "PRD_SCARF": 19.99}

    commission = db.query(Commission).filter(Commission.order_id == order.id).one()
    assert commission.status == "pending"
    assert commission.amount == 52.40
    assert commission.vendor_id == seeded["vendor"].id


@pytest.mark.order(2)
def test_coupon_is_consumed_with_the_order(db, seeded, buyer):
    _add_coupon(db, "SAVE10", usage_limit=1)

    order = place_order(db, _cart(("PRD_LAPTOP", 1), coupon_code="SAVE10"), buyer=buyer)
    assert order.coupon_code == "SAVE10"
    assert order.discount == 50.00
    assert order.total == 449.99
    assert get_coupon_by_code(db, "SAVE10").used_count == 1

    with pytest.raises(CouponExhausted):
        place_order(db, _cart(("PRD_LAPTOP", 1), coupon_code="SAVE10"), buyer=buyer)

    assert db.query(Order).count() == 1
    assert db.query(Commission).count() == 1


def test_client_prices_are_ignored_by_default(db, seeded, buyer):
    data = OrderCreate(items=[OrderItemCreate(product_id="PRD_LAPTOP", quantity=2, unit_price=1.0)])
    order = place_order(db, data, buyer=buyer)

    assert order.items[0].unit_price == 499.99
    assert order.subtotal == 999.98


def test_unknown_product_is_rejected_by_default(db, seeded, buyer):
    with pytest.raises(HTTPException) as exc:
        place_order(db, _cart(("PRD_MISSING", 1)), buyer=buyer)

    assert exc.value.status_code == 400
    assert db.query(Order).count() == 0


def test_trusted_client_prices(db, seeded, buyer, monkeypatch):
    monkeypatch.setattr(settings, "TRUST_CLIENT_PRICES", True)
    data = OrderCreate(items=[
        OrderItemCreate(product_id="PRD_LAPTOP", quantity=1, unit_price=400.0),
        OrderItemCreate(product_id="PRD_ELSEWHERE", quantity=1, unit_price=100.0),
    ])
    order = place_order(db, data, buyer=buyer)

    assert order.subtotal == 500.0
    # both lines at 10%: electronics and the default rate
    assert order.commission_amount == 50.0
    # a product outside the catalog has no known vendor
    assert db.query(Commission).one().vendor_id is None


def test_mixed_vendor_order_leaves_commission_vendor_unset(db, seeded, buyer):
    other = Vendor(id="VND_OTHER", business_name="Other", status="active")
    db.add(other)
    db.add(Product(id="PRD_MUG", vendor_id=other.id, title="Mug", price=8.50, category_id="fashion"))
    db.commit()

    order = place_order(db, _cart(("PRD_LAPTOP", 1), ("PRD_MUG", 2)), buyer=buyer)

    assert order.commission.vendor_id is None


def test_lost_coupon_race_rolls_everything_back(db, seeded, buyer, monkeypatch):
    _add_coupon(db, "RACE", usage_limit=5)

    def exhausted(db, code):
        raise CouponExhausted(f"Coupon {code} has no uses left")

    monkeypatch.setattr(order_service, "consume_coupon_use", exhausted)

    with pytest.raises(CouponExhausted):
        place_order(db, _cart(("PRD_SCARF", 1), coupon_code="RACE"), buyer=buyer)

    assert db.query(Order).count() == 0
    assert db.query(Commission).count() == 0
    assert get_coupon_by_code(db, "RACE").used_count == 0


def test_conditional_update_refuses_exhausted_coupon(db):
    db.add(Coupon(id="CPN_DONE", code="DONE", discount_type="fixed", amount=5, usage_limit=2, used_count=2))
    db.commit()

    with pytest.raises(CouponExhausted):
        consume_coupon_use(db, "DONE")
    db.rollback()

    assert get_coupon_by_code(db, "DONE").used_count == 2


def test_unlimited_coupon_keeps_counting(db, seeded, buyer):
    _add_coupon(db, "FOREVER", discount_type="fixed", amount=1)

    for _ in range(3):
        place_order(db, _cart(("PRD_SCARF", 1), coupon_code="FOREVER"), buyer=buyer)

    assert get_coupon_by_code(db, "FOREVER").used_count == 3


def test_rejected_coupons_persist_nothing(db, seeded, buyer):
    _add_coupon(db, "GONE", end_at=datetime.utcnow() - timedelta(days=1))

    with pytest.raises(CouponExpired):
        place_order(db, _cart(("PRD_SCARF", 1), coupon_code="GONE"), buyer=buyer)
    with pytest.raises(InvalidCoupon):
        place_order(db, _cart(("PRD_SCARF", 1), coupon_code="UNKNOWN"), buyer=buyer)

    assert db.query(Order).count() == 0


def test_quote_does_not_persist_or_consume(db, seeded):
    _add_coupon(db, "PEEK", usage_limit=1)

    result = quote_order(db, _cart(("PRD_LAPTOP", 1), ("PRD_SCARF", 1), coupon_code="PEEK"))

    assert result.subtotal == Decimal("519.98")
    assert result.discount == Decimal("52.00")
    assert db.query(Order).count() == 0
    assert get_coupon_by_code(db, "PEEK").used_count == 0
