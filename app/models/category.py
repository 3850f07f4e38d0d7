from datetime import datetime
from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database.connection import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True, index=True)  # e.g. "electronics"
    name = Column(String, nullable=False)
    description = Column(String, default="")
    icon = Column(String, default="")
    commission_rate = Column(Float, nullable=False, default=0.1)  # fraction 0..1
    created_at = Column(DateTime, default=datetime.utcnow)

    niches = relationship(
        "Niche",
        back_populates="category",
        cascade="all, delete-orphan",
    )


class Niche(Base):
    __tablename__ = "niches"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, default="")
    category_id = Column(String, ForeignKey("categories.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    category = relationship("Category", back_populates="niches")
