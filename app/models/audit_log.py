from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON

from app.database.connection import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String, primary_key=True, index=True)
    type = Column(String, nullable=False, index=True)  # e.g. apiKey.generate
    vendor_id = Column(String, nullable=True, index=True)
    actor_id = Column(String, nullable=True)
    details = Column(JSON, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
