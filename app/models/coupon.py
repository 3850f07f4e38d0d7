from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime

from app.database.connection import Base


class Coupon(Base):
    __tablename__ = "coupons"

    id = Column(String, primary_key=True, index=True)  # e.g. CPN_1A2B3C4D5E
    code = Column(String, unique=True, index=True, nullable=False)  # case-sensitive
    discount_type = Column(String, nullable=False)  # percentage / fixed
    amount = Column(Float, nullable=False)
    usage_limit = Column(Integer, nullable=True)
    used_count = Column(Integer, nullable=False, default=0)
    start_at = Column(DateTime, nullable=True)
    end_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
