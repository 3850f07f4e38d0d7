from datetime import datetime
from sqlalchemy import Column, String, Float, Boolean, DateTime

from app.database.connection import Base


class DiscountRule(Base):
    __tablename__ = "discount_rules"

    id = Column(String, primary_key=True, index=True)  # e.g. RULE_1A2B3C4D5E
    name = Column(String, nullable=False, default="Discount Rule")
    category_id = Column(String, nullable=False, index=True)
    discount_percent = Column(Float, nullable=False)
    max_discount = Column(Float, nullable=True)
    active = Column(Boolean, default=True)
    start_at = Column(DateTime, default=datetime.utcnow)
    end_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
