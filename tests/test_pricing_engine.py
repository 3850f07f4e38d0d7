from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.core.errors import CouponExhausted, CouponExpired, CouponNotYetActive, InvalidCoupon
from app.services.pricing_service.calculate_price import (
    Catalog,
    CouponTerms,
    LineItem,
    check_coupon,
    price_order,
)

NOW = datetime(2025, 6, 1, 12, 0, 0)


def _catalog(*coupons: CouponTerms) -> Catalog:
    return Catalog(
        default_rate=Decimal("0.10"),
        products={"laptop": "electronics", "scarf": "fashion", "mystery": None},
        categories={"electronics": Decimal("0.10"), "fashion": Decimal("0.12")},
        coupons={c.code: c for c in coupons},
    )


@pytest.mark.order(1)
def test_percentage_coupon_on_single_item():
    catalog = _catalog(CouponTerms("SAVE10", "percentage", Decimal("10")))
    result = price_order([LineItem("laptop", 1, Decimal("499.99"))], "SAVE10", catalog, now=NOW)

    assert result.subtotal == Decimal("499.99")
    assert result.discount == Decimal("50.00")
    assert result.total == Decimal("449.99")
    assert result.commission_amount == Decimal("45.00")
    assert result.coupon.code == "SAVE10"


@pytest.mark.order(2)
def test_commission_weighted_by_category():
    items = [
        LineItem("laptop", 1, Decimal("499.99")),
        LineItem("scarf", 1, Decimal("19.99")),
    ]
    result = price_order(items, None, _catalog(), now=NOW)

    assert result.subtotal == Decimal("519.98")
    assert result.discount == Decimal("0")
    assert result.total == Decimal("519.98")
    assert result.commission_amount == Decimal("52.40")
    assert [i.commission_rate for i in result.items] == [Decimal("0.10"), Decimal("0.12")]


def test_unknown_product_and_missing_category_use_default_rate():
    items = [
        LineItem("not-in-catalog", 2, Decimal("10.00")),
        LineItem("mystery", 1, Decimal("5.00")),
    ]
    result = price_order(items, None, _catalog(), now=NOW)

    assert all(i.commission_rate == Decimal("0.10") for i in result.items)
    assert result.commission_amount == Decimal("2.50")


def test_fixed_coupon_larger_than_subtotal_clamps_to_zero():
    catalog = _catalog(CouponTerms("BIG", "fixed", Decimal("1000")))
    items = [LineItem("laptop", 1, Decimal("499.99")), LineItem("scarf", 1, Decimal("19.99"))]
    result = price_order(items, "BIG", catalog, now=NOW)

    assert result.discount == result.subtotal == Decimal("519.98")
    assert result.total == Decimal("0.00")
    assert result.commission_amount == Decimal("0.00")


def test_empty_cart_prices_to_zero():
    result = price_order([], None, _catalog(), now=NOW)

    assert result.subtotal == 0
    assert result.discount == 0
    assert result.total == 0
    assert result.commission_amount == 0
    assert result.items == []


def test_discount_rounds_half_up_to_cents():
    catalog = _catalog(CouponTerms("TEN", "percentage", Decimal("10")))
    result = price_order([LineItem("scarf", 1, Decimal("0.05"))], "TEN", catalog, now=NOW)

    assert result.discount == Decimal("0.01")
    assert result.total == Decimal("0.04")


def test_discount_bounds_and_item_commissions_add_up():
    catalog = _catalog(CouponTerms("ODD15", "percentage", Decimal("15")))
    items = [
        LineItem("laptop", 3, Decimal("33.33")),
        LineItem("scarf", 2, Decimal("12.49")),
        LineItem("mystery", 1, Decimal("7.77")),
    ]
    result = price_order(items, "ODD15", catalog, now=NOW)

    assert Decimal("0") <= result.discount <= result.subtotal
    assert result.total == result.subtotal - result.discount
    item_sum = sum(i.commission_amount for i in result.items)
    assert abs(item_sum - result.commission_amount) <= Decimal("0.01")


def test_many_small_lines_keep_commission_consistent():
    items = [LineItem(f"sticker-{n}", 1, Decimal("0.05")) for n in range(4)]
    result = price_order(items, None, _catalog(), now=NOW)

    assert result.commission_amount == Decimal("0.02")
    assert [i.commission_amount for i in result.items] == [
        Decimal("0.01"), Decimal("0.01"), Decimal("0.00"), Decimal("0.00"),
    ]
    assert sum(i.commission_amount for i in result.items) == result.commission_amount


def test_item_commissions_sum_exactly_with_mixed_rates():
    catalog = _catalog(CouponTerms("THIRD", "percentage", Decimal("33")))
    items = [LineItem("laptop" if n % 2 else "scarf", n + 1, Decimal("0.37")) for n in range(25)]
    result = price_order(items, "THIRD", catalog, now=NOW)

    assert sum(i.commission_amount for i in result.items) == result.commission_amount
    assert all(i.commission_amount >= 0 for i in result.items)


def test_unknown_coupon_code_is_rejected():
    with pytest.raises(InvalidCoupon):
        price_order([LineItem("laptop", 1, Decimal("499.99"))], "NOPE", _catalog(), now=NOW)


def test_coupon_codes_are_case_sensitive():
    catalog = _catalog(CouponTerms("SAVE10", "percentage", Decimal("10")))
    with pytest.raises(InvalidCoupon):
        price_order([LineItem("laptop", 1, Decimal("10"))], "save10", catalog, now=NOW)


def test_expired_coupon_wins_over_other_failures():
    coupon = CouponTerms(
        "OLD",
        "fixed",
        Decimal("5"),
        usage_limit=1,
        used_count=1,
        start_at=NOW + timedelta(days=1),
        end_at=NOW - timedelta(days=1),
    )
    with pytest.raises(CouponExpired):
        check_coupon(coupon, now=NOW)


def test_coupon_not_yet_active():
    coupon = CouponTerms("SOON", "fixed", Decimal("5"), start_at=NOW + timedelta(hours=1))
    with pytest.raises(CouponNotYetActive):
        price_order([LineItem("laptop", 1, Decimal("100"))], "SOON", _catalog(coupon), now=NOW)


def test_exhausted_coupon():
    coupon = CouponTerms("ONCE", "percentage", Decimal("10"), usage_limit=1, used_count=1)
    with pytest.raises(CouponExhausted):
        price_order([LineItem("laptop", 1, Decimal("100"))], "ONCE", _catalog(coupon), now=NOW)


def test_coupon_inside_window_applies():
    coupon = CouponTerms(
        "WINDOW",
        "fixed",
        Decimal("5"),
        start_at=NOW - timedelta(days=1),
        end_at=NOW + timedelta(days=1),
    )
    result = price_order([LineItem("scarf", 1, Decimal("19.99"))], "WINDOW", _catalog(coupon), now=NOW)
    assert result.total == Decimal("14.99")


def test_allocate_cents_uses_largest_remainder():
    from app.utils.money import allocate_cents

    shares = [Decimal("0.333"), Decimal("0.333"), Decimal("0.334")]
    assert allocate_cents(Decimal("1.00"), shares) == [Decimal("0.33"), Decimal("0.33"), Decimal("0.34")]
    assert allocate_cents(Decimal("0"), []) == []


def test_offset_aware_coupon_window_is_compared_in_utc():
    plus_five = timezone(timedelta(hours=5))
    # 16:30 at +05:00 is 11:30 UTC, half an hour before NOW
    coupon = CouponTerms("TZ", "fixed", Decimal("1"), end_at=datetime(2025, 6, 1, 16, 30, tzinfo=plus_five))
    with pytest.raises(CouponExpired):
        check_coupon(coupon, now=NOW)
