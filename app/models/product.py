from sqlalchemy import Column, String, Float, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database.connection import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, index=True)
    vendor_id = Column(String, ForeignKey("vendors.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, default="")
    price = Column(Float, nullable=False, default=0.0)

    # plain columns; unset when the category / niche is deleted
    category_id = Column(String, nullable=True, index=True)
    niche_id = Column(String, nullable=True, index=True)

    metadata_ = Column("metadata", JSON, nullable=True)
    images = Column(JSON, default=list)
    status = Column(String, default="active")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    vendor = relationship("Vendor", back_populates="products")
