from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.dependencies.auth import require_admin
from app.schemas.discount_rule import (
    DiscountRuleCreate,
    DiscountRuleResponse,
    DiscountRuleUpdate,
)
from app.services.discount_rule_service import (
    active_rules_for_category,
    create_discount_rule,
    delete_discount_rule,
    list_discount_rules,
    update_discount_rule,
)

router = APIRouter(prefix="/discount-rules", tags=["Discount Rules"])


@router.get("/", response_model=List[DiscountRuleResponse], dependencies=[Depends(require_admin)])
def list_rules(db: Session = Depends(get_db)):
    return list_discount_rules(db)


@router.post(
    "/",
    response_model=DiscountRuleResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_rule(rule: DiscountRuleCreate, db: Session = Depends(get_db)):
    return create_discount_rule(db, rule)


@router.get("/category/{category_id}", response_model=List[DiscountRuleResponse])
def active_rules(category_id: str, db: Session = Depends(get_db)):
    return active_rules_for_category(db, category_id)


@router.put("/{rule_id}", response_model=DiscountRuleResponse, dependencies=[Depends(require_admin)])
def update_rule(rule_id: str, rule: DiscountRuleUpdate, db: Session = Depends(get_db)):
    updated = update_discount_rule(db, rule_id, rule)
    if not updated:
        raise HTTPException(status_code=404, detail="Rule not found")
    return updated


@router.delete("/{rule_id}", dependencies=[Depends(require_admin)])
def delete_rule(rule_id: str, db: Session = Depends(get_db)):
    if not delete_discount_rule(db, rule_id):
        raise HTTPException(status_code=404, detail="Rule not found")
    return {"ok": True}
