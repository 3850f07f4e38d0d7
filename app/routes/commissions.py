from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.dependencies.auth import require_admin
from app.enums.statuses import CommissionStatus
from app.schemas.commission import CommissionPayResponse, CommissionResponse, PayoutResponse
from app.services.commission_service import list_commissions, list_payouts, pay_commission

router = APIRouter(tags=["Commissions & Payouts"], dependencies=[Depends(require_admin)])


@router.get("/commissions", response_model=List[CommissionResponse])
def list_commissions_route(
    status: Optional[CommissionStatus] = None,
    db: Session = Depends(get_db),
):
    return list_commissions(db, status=status.value if status else None)


@router.post("/commissions/{commission_id}/pay", response_model=CommissionPayResponse)
def pay_commission_route(commission_id: str, db: Session = Depends(get_db)):
    commission, payout = pay_commission(db, commission_id)
    return {"commission": commission, "payout": payout}


@router.get("/payouts", response_model=List[PayoutResponse])
def list_payouts_route(
    vendor_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return list_payouts(db, vendor_id=vendor_id)
