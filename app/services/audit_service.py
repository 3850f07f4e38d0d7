from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog
from app.utils.ids import generate_id


def record_audit(
    db: Session,
    type: str,
    vendor_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    **details,
) -> AuditLog:
    """Adds an audit entry to the session; committed with the caller's change."""
    entry = AuditLog(
        id=generate_id("AUD"),
        type=type,
        vendor_id=vendor_id,
        actor_id=actor_id,
        details=details or {},
    )
    db.add(entry)
    return entry


def list_audit_logs(
    db: Session,
    vendor_id: Optional[str] = None,
    limit: int = 100,
) -> List[AuditLog]:
    query = db.query(AuditLog)
    if vendor_id:
        query = query.filter(AuditLog.vendor_id == vendor_id)
    return query.order_by(AuditLog.created_at.desc()).limit(limit).all()
