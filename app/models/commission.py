from datetime import datetime
from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database.connection import Base


class Commission(Base):
    __tablename__ = "commissions"

    id = Column(String, primary_key=True, index=True)  # e.g. COM_1A2B3C4D5E
    order_id = Column(String, ForeignKey("orders.id"), unique=True, nullable=False, index=True)
    vendor_id = Column(String, nullable=True, index=True)
    amount = Column(Float, nullable=False)
    status = Column(String, default="pending", nullable=False, index=True)  # pending -> payable -> paid
    payable_at = Column(DateTime, nullable=True)
    paid_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    order = relationship("Order", back_populates="commission")
    payout = relationship("Payout", back_populates="commission", uselist=False)


class Payout(Base):
    __tablename__ = "payouts"

    id = Column(String, primary_key=True, index=True)  # e.g. PAY_1A2B3C4D5E
    commission_id = Column(String, ForeignKey("commissions.id"), unique=True, nullable=False)
    vendor_id = Column(String, nullable=True, index=True)
    amount = Column(Float, nullable=False)
    status = Column(String, default="processed", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    commission = relationship("Commission", back_populates="payout")
