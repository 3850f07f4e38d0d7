from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from app.core.errors import (
    CouponExhausted,
    CouponExpired,
    CouponNotYetActive,
    InvalidCoupon,
)
from app.utils.datetimes import as_naive_utc
from app.utils.money import D, ZERO, allocate_cents, round_money


# ===================== CATALOG SNAPSHOT =====================


@dataclass(frozen=True)
class LineItem:
    product_id: str
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class CouponTerms:
    code: str
    discount_type: str  # percentage / fixed
    amount: Decimal
    usage_limit: Optional[int] = None
    used_count: int = 0
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None


@dataclass
class Catalog:
    """
    Read-only view of what pricing needs:
      products:   product_id -> category_id (None when unset)
      categories: category_id -> commission rate
      coupons:    code -> CouponTerms
    """

    default_rate: Decimal
    products: Dict[str, Optional[str]] = field(default_factory=dict)
    categories: Dict[str, Decimal] = field(default_factory=dict)
    coupons: Dict[str, CouponTerms] = field(default_factory=dict)

    def commission_rate_for(self, product_id: str) -> Decimal:
        category_id = self.products.get(product_id)
        if category_id is not None and category_id in self.categories:
            return self.categories[category_id]
        return self.default_rate


@dataclass
class PricedItem:
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    commission_rate: Decimal
    commission_amount: Decimal


@dataclass
class PricingResult:
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    commission_amount: Decimal
    coupon: Optional[CouponTerms] = None
    items: List[PricedItem] = field(default_factory=list)


# ===================== COUPON CHECKS =====================


def check_coupon(coupon: CouponTerms, now: Optional[datetime] = None) -> None:
    """
    Raise if the coupon cannot be applied at `now`.

    Expiry is checked before the start bound so an expired coupon is always
    reported as expired.
    """
    now = as_naive_utc(now) or datetime.utcnow()
    start_at = as_naive_utc(coupon.start_at)
    end_at = as_naive_utc(coupon.end_at)

    if end_at is not None and end_at < now:
        raise CouponExpired(f"Coupon {coupon.code} expired at {end_at.isoformat()}")

    if start_at is not None and start_at > now:
        raise CouponNotYetActive(f"Coupon {coupon.code} is valid from {start_at.isoformat()}")

    if coupon.usage_limit is not None and coupon.used_count >= coupon.usage_limit:
        raise CouponExhausted(f"Coupon {coupon.code} has been used {coupon.used_count} times")


def _coupon_discount(coupon: CouponTerms, subtotal: Decimal) -> Decimal:
    if coupon.discount_type == "percentage":
        discount = subtotal * D(coupon.amount) / Decimal(100)
    else:
        discount = D(coupon.amount)

    discount = round_money(discount)
    # never negative, never more than the cart
    return min(max(discount, ZERO), subtotal)


# ===================== PRICING ENGINE =====================


def price_order(
    items: Sequence[LineItem],
    coupon_code: Optional[str],
    catalog: Catalog,
    now: Optional[datetime] = None,
) -> PricingResult:
    """
    Price a cart against a catalog snapshot.

    - subtotal is the sum of unit_price * quantity as given on the line items
    - a coupon discount is rounded half-up to cents and clamped to the subtotal
    - each line earns commission at its category rate (default rate when the
      product or its category cannot be resolved) on its net value, after its
      proportional share of the discount
    - the order commission is rounded once; its cents are then split over the
      lines so the per-line amounts add up to it exactly

    Pure: nothing is persisted and the coupon is not consumed here.
    """

    coupon: Optional[CouponTerms] = None
    if coupon_code:
        coupon = catalog.coupons.get(coupon_code)
        if coupon is None:
            raise InvalidCoupon(f"Coupon {coupon_code} not found")
        check_coupon(coupon, now=now)

    # ---- 1) Subtotal ----
    line_totals = [D(item.unit_price) * item.quantity for item in items]
    subtotal = sum(line_totals, ZERO)

    # ---- 2) Discount ----
    discount = _coupon_discount(coupon, round_money(subtotal)) if coupon else ZERO
    discount = min(discount, subtotal)

    # ---- 3) Total ----
    total = round_money(subtotal - discount)

    # ---- 4) Weighted commission ----
    rates = [D(catalog.commission_rate_for(item.product_id)) for item in items]
    raw_commissions = []
    for line_total, rate in zip(line_totals, rates):
        if subtotal > 0:
            item_discount = (discount / subtotal) * line_total
        else:
            item_discount = ZERO
        raw_commissions.append((line_total - item_discount) * rate)

    # round once for the order, then split the cents over the lines
    commission = round_money(sum(raw_commissions, ZERO))
    item_commissions = allocate_cents(commission, raw_commissions)

    priced = [
        PricedItem(
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=round_money(item.unit_price),
            line_total=round_money(line_total),
            commission_rate=rate,
            commission_amount=item_commission,
        )
        for item, line_total, rate, item_commission in zip(items, line_totals, rates, item_commissions)
    ]

    return PricingResult(
        subtotal=round_money(subtotal),
        discount=round_money(discount),
        total=total,
        commission_amount=commission,
        coupon=coupon,
        items=priced,
    )
