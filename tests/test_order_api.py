from datetime import datetime, timedelta, timezone

import pytest

from conftest import auth_headers
from app.services.user_service import create_user

CART = {"items": [{"product_id": "PRD_LAPTOP", "quantity": 1}, {"product_id": "PRD_SCARF", "quantity": 1}]}


def _create_coupon(client, admin, **payload):
    payload.setdefault("discount_type", "percentage")
    payload.setdefault("amount", 10)
    return client.post("/coupons/", json=payload, headers=auth_headers(admin))


@pytest.mark.order(1)
def test_order_payment_and_payout_flow(client, admin, buyer, seeded):
    assert _create_coupon(client, admin, code="SAVE10", usage_limit=1).status_code == 201
    assert _create_coupon(client, admin, code="SAVE10").status_code == 400
    assert client.get("/coupons/").json()[0]["used_count"] == 0

    headers = auth_headers(buyer)
    cart = {"items": [{"product_id": "PRD_LAPTOP", "quantity": 1}], "coupon_code": "SAVE10"}

    r = client.post("/orders/", json=cart, headers=headers)
    assert r.status_code == 201
    order = r.json()
    assert order["discount"] == 50.0
    assert order["total"] == 449.99
    assert order["commission_amount"] == 45.0
    assert order["coupon_code"] == "SAVE10"
    assert order["items"][0]["commission_rate"] == 0.1

    r = client.post("/orders/", json=cart, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "coupon_usage_exhausted"

    r = client.post("/payments/simulate", json={"order_id": order["id"]}, headers=headers)
    assert r.status_code == 200
    assert r.json()["order"]["payment_status"] == "paid"
    commission = r.json()["commission"]
    assert commission["status"] == "payable"
    assert commission["vendor_id"] == seeded["vendor"].id

    admin_headers = auth_headers(admin)
    payable = client.get("/commissions", params={"status": "payable"}, headers=admin_headers).json()
    assert [c["id"] for c in payable] == [commission["id"]]

    r = client.post(f"/commissions/{commission['id']}/pay", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["commission"]["status"] == "paid"
    assert r.json()["payout"]["amount"] == 45.0

    r = client.post(f"/commissions/{commission['id']}/pay", headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["error"] == "invalid_commission_transition"

    payouts = client.get("/payouts", params={"vendor_id": seeded["vendor"].id}, headers=admin_headers).json()
    assert len(payouts) == 1
    assert client.get("/payouts", headers=headers).status_code == 403


@pytest.mark.order(2)
def test_paying_unpaid_order_commission_is_rejected(client, admin, buyer, seeded):
    order = client.post("/orders/", json=CART, headers=auth_headers(buyer)).json()
    assert order["commission_amount"] == 52.4

    pending = client.get("/commissions", params={"status": "pending"}, headers=auth_headers(admin)).json()
    r = client.post(f"/commissions/{pending[0]['id']}/pay", headers=auth_headers(admin))
    assert r.status_code == 409


def test_order_visibility(client, db, admin, buyer, seeded):
    other = create_user(db, "other@example.com", "pw")
    order = client.post("/orders/", json=CART, headers=auth_headers(buyer)).json()

    assert client.get(f"/orders/{order['id']}", headers=auth_headers(buyer)).status_code == 200
    assert client.get(f"/orders/{order['id']}", headers=auth_headers(other)).status_code == 403
    assert client.get(f"/orders/{order['id']}", headers=auth_headers(admin)).status_code == 200
    assert client.get("/orders/ORD_NOPE", headers=auth_headers(admin)).status_code == 404

    assert len(client.get("/orders/mine", headers=auth_headers(buyer)).json()) == 1
    assert client.get("/orders/mine", headers=auth_headers(other)).json() == []
    assert client.get("/orders/", headers=auth_headers(buyer)).status_code == 403
    assert len(client.get("/orders/", headers=auth_headers(admin)).json()) == 1

    r = client.post("/payments/simulate", json={"order_id": order["id"]}, headers=auth_headers(other))
    assert r.status_code == 403
    r = client.post("/payments/simulate", json={"order_id": "ORD_NOPE"}, headers=auth_headers(buyer))
    assert r.status_code == 404


def test_order_validation_and_coupon_errors(client, admin, buyer, seeded):
    headers = auth_headers(buyer)
    past = (datetime.utcnow() - timedelta(days=1)).isoformat()
    future = (datetime.utcnow() + timedelta(days=1)).isoformat()
    _create_coupon(client, admin, code="OLD", end_at=past)
    _create_coupon(client, admin, code="LATER", start_at=future)

    assert client.post("/orders/", json=CART).status_code == 401

    r = client.post("/orders/", json={**CART, "coupon_code": "OLD"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "coupon_expired"
    assert r.json()["detail"]

    r = client.post("/orders/", json={**CART, "coupon_code": "LATER"}, headers=headers)
    assert r.json()["error"] == "coupon_not_started"

    r = client.post("/orders/", json={**CART, "coupon_code": "NOPE"}, headers=headers)
    assert r.json()["error"] == "invalid_coupon"

    r = client.post("/orders/", json={"items": [{"product_id": "PRD_LAPTOP", "quantity": 0}]}, headers=headers)
    assert r.status_code == 422

    r = client.post("/orders/", json={"items": [{"product_id": "PRD_NOPE", "quantity": 1}]}, headers=headers)
    assert r.status_code == 400

    r = _create_coupon(client, admin, code="BACKWARDS", start_at=future, end_at=past)
    assert r.status_code == 422


def test_empty_order_and_oversized_fixed_coupon(client, admin, buyer, seeded):
    headers = auth_headers(buyer)
    _create_coupon(client, admin, code="HUGE", discount_type="fixed", amount=1000)

    r = client.post("/orders/", json={"items": []}, headers=headers)
    assert r.status_code == 201
    assert r.json()["total"] == 0
    assert r.json()["commission_amount"] == 0

    r = client.post("/orders/", json={**CART, "coupon_code": "HUGE"}, headers=headers)
    assert r.json()["discount"] == 519.98
    assert r.json()["total"] == 0
    assert r.json()["commission_amount"] == 0


def test_quote(client, admin, buyer, seeded):
    _create_coupon(client, admin, code="PEEK", usage_limit=1)

    r = client.post("/orders/quote", json={**CART, "coupon_code": "PEEK"}, headers=auth_headers(buyer))
    assert r.status_code == 200
    quote = r.json()
    assert quote["subtotal"] == 519.98
    assert quote["discount"] == 52.0
    assert quote["total"] == 467.98
    assert len(quote["items"]) == 2

    assert client.get("/coupons/").json()[0]["used_count"] == 0
    assert client.get("/orders/", headers=auth_headers(admin)).json() == []


def test_coupon_window_with_utc_offset(client, admin, buyer, seeded):
    plus_five = timezone(timedelta(hours=5))
    an_hour_ago = (datetime.now(timezone.utc) - timedelta(hours=1)).astimezone(plus_five)
    assert _create_coupon(client, admin, code="TZ", end_at=an_hour_ago.isoformat()).status_code == 201

    stored = client.get("/coupons/").json()[0]["end_at"]
    assert datetime.fromisoformat(stored) == an_hour_ago.astimezone(timezone.utc).replace(tzinfo=None)

    r = client.post("/orders/", json={**CART, "coupon_code": "TZ"}, headers=auth_headers(buyer))
    assert r.status_code == 400
    assert r.json()["error"] == "coupon_expired"


def test_coupon_schema_normalises_offsets():
    from app.schemas.coupon import CouponCreate

    coupon = CouponCreate(
        code="X",
        discount_type="fixed",
        amount=1,
        start_at="2025-01-01T10:00:00+05:00",
        end_at="2025-01-01T06:00:00Z",
    )
    assert coupon.start_at == datetime(2025, 1, 1, 5, 0)
    assert coupon.end_at == datetime(2025, 1, 1, 6, 0)
    assert coupon.start_at.tzinfo is None
