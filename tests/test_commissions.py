import pytest
from fastapi import HTTPException

from app.core.errors import InvalidCommissionTransition
from app.models.commission import Payout
from app.schemas.order import OrderCreate, OrderItemCreate
from app.services.commission_service import (
    ensure_transition,
    list_commissions,
    list_payouts,
    pay_commission,
)
from app.services.order_service import place_order
from app.services.payment_service import complete_payment


@pytest.fixture()
def placed(db, seeded, buyer):
    data = OrderCreate(items=[
        OrderItemCreate(product_id="PRD_LAPTOP", quantity=1),
        OrderItemCreate(product_id="PRD_SCARF", quantity=1),
    ])
    return place_order(db, data, buyer=buyer)


@pytest.mark.order(1)
def test_payment_makes_commission_payable(db, placed):
    order, commission = complete_payment(db, placed.id)

    assert order.status == "paid"
    assert order.payment_status == "paid"
    assert order.paid_at is not None
    assert commission.status == "payable"
    assert commission.payable_at is not None


@pytest.mark.order(2)
def test_repeated_payment_signal_is_a_no_op(db, placed):
    _, first = complete_payment(db, placed.id)
    payable_at = first.payable_at
    paid_at = placed.paid_at

    order, commission = complete_payment(db, placed.id)

    assert commission.status == "payable"
    assert commission.payable_at == payable_at
    assert order.paid_at == paid_at


@pytest.mark.order(3)
def test_pay_creates_single_payout(db, placed, seeded):
    _, commission = complete_payment(db, placed.id)

    commission, payout = pay_commission(db, commission.id)

    assert commission.status == "paid"
    assert commission.paid_at is not None
    assert payout.id.startswith("PAY_")
    assert payout.amount == commission.amount == 52.40
    assert payout.vendor_id == seeded["vendor"].id
    assert payout.status == "processed"

    with pytest.raises(InvalidCommissionTransition):
        pay_commission(db, commission.id)
    assert db.query(Payout).count() == 1


def test_pending_commission_cannot_be_paid(db, placed):
    with pytest.raises(InvalidCommissionTransition):
        pay_commission(db, placed.commission.id)

    assert placed.commission.status == "pending"
    assert list_payouts(db) == []


def test_paid_commission_never_returns_to_payable(db, placed):
    _, commission = complete_payment(db, placed.id)
    pay_commission(db, commission.id)

    _, commission = complete_payment(db, placed.id)
    assert commission.status == "paid"

    with pytest.raises(InvalidCommissionTransition):
        ensure_transition(commission, "payable")
    with pytest.raises(InvalidCommissionTransition):
        ensure_transition(commission, "pending")


def test_list_commissions_by_status(db, placed):
    assert [c.id for c in list_commissions(db, status="pending")] == [placed.commission.id]
    assert list_commissions(db, status="payable") == []

    complete_payment(db, placed.id)

    assert list_commissions(db, status="pending") == []
    assert len(list_commissions(db, status="payable")) == 1


def test_unknown_ids(db):
    with pytest.raises(HTTPException) as exc:
        complete_payment(db, "ORD_MISSING")
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        pay_commission(db, "COM_MISSING")
    assert exc.value.status_code == 404
