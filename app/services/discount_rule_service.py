from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.discount_rule import DiscountRule
from app.schemas.discount_rule import (
    DiscountRuleCreate,
    DiscountRuleResponse,
    DiscountRuleUpdate,
)
from app.utils.datetimes import as_naive_utc
from app.utils.ids import generate_id


def _with_category_name(db: Session, rule: DiscountRule) -> DiscountRuleResponse:
    category = db.query(Category).filter(Category.id == rule.category_id).first()
    return DiscountRuleResponse.model_validate(rule).model_copy(
        update={"category_name": category.name if category else None}
    )


def create_discount_rule(db: Session, data: DiscountRuleCreate) -> DiscountRuleResponse:
    values = data.model_dump()
    if values.get("start_at") is None:
        values["start_at"] = datetime.utcnow()

    rule = DiscountRule(id=generate_id("RULE"), **values)
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return _with_category_name(db, rule)


def list_discount_rules(db: Session) -> List[DiscountRuleResponse]:
    rules = db.query(DiscountRule).order_by(DiscountRule.created_at.desc()).all()
    return [_with_category_name(db, r) for r in rules]


def get_discount_rule(db: Session, rule_id: str) -> Optional[DiscountRule]:
    return db.query(DiscountRule).filter(DiscountRule.id == rule_id).first()


def update_discount_rule(db: Session, rule_id: str, data: DiscountRuleUpdate) -> Optional[DiscountRuleResponse]:
    rule = get_discount_rule(db, rule_id)
    if not rule:
        return None

    for key, value in data.model_dump(exclude_unset=True).items():
        # max_discount may be cleared explicitly
        if value is not None or key == "max_discount":
            setattr(rule, key, value)

    db.commit()
    db.refresh(rule)
    return _with_category_name(db, rule)


def delete_discount_rule(db: Session, rule_id: str) -> bool:
    rule = get_discount_rule(db, rule_id)
    if not rule:
        return False
    db.delete(rule)
    db.commit()
    return True


def active_rules_for_category(db: Session, category_id: str, now: Optional[datetime] = None) -> List[DiscountRule]:
    now = as_naive_utc(now) or datetime.utcnow()
    return (
        db.query(DiscountRule)
        .filter(
            DiscountRule.category_id == category_id,
            DiscountRule.active.is_(True),
            or_(DiscountRule.start_at.is_(None), DiscountRule.start_at <= now),
            or_(DiscountRule.end_at.is_(None), DiscountRule.end_at >= now),
        )
        .all()
    )
