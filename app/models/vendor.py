from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from app.database.connection import Base


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(String, primary_key=True, index=True)  # e.g. VND_1A2B3C4D5E
    user_id = Column(String, ForeignKey("users.id"), nullable=True, index=True)
    business_name = Column(String, nullable=False)
    website = Column(String, nullable=True)
    status = Column(String, default="pending", index=True)  # pending / active
    payout_info = Column(JSON, nullable=True)
    storefront_path = Column(String, nullable=True)
    approved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # developer API key; only the sha256 digest is kept
    api_key_hash = Column(String, nullable=True, index=True)
    api_key_label = Column(String, nullable=True)
    api_key_created_at = Column(DateTime, nullable=True)
    api_key_created_by = Column(String, nullable=True)
    api_key_revoked_at = Column(DateTime, nullable=True)
    api_key_last_used = Column(DateTime, nullable=True)

    products = relationship("Product", back_populates="vendor")
