from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database.connection import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, index=True)  # e.g. ORD_1A2B3C4D5E
    buyer_id = Column(String, ForeignKey("users.id"), nullable=True, index=True)
    coupon_code = Column(String, nullable=True)

    # money snapshot, fixed at creation
    subtotal = Column(Float, nullable=False)
    discount = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False)
    commission_amount = Column(Float, nullable=False, default=0.0)

    # only the payment flow touches these
    status = Column(String, default="created", index=True)
    payment_status = Column(String, default="unpaid")
    paid_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    commission = relationship("Commission", back_populates="order", uselist=False)


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String, nullable=False, index=True)  # not a FK; products may be deleted
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)  # captured at order time
    line_total = Column(Float, nullable=False)
    commission_rate = Column(Float, nullable=False)
    commission_amount = Column(Float, nullable=False)

    order = relationship("Order", back_populates="items")
