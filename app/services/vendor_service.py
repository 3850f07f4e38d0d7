import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.security import generate_api_key, hash_api_key
from app.enums.statuses import VendorStatus
from app.enums.user_roles import UserRole
from app.models.product import Product
from app.models.user import User
from app.models.vendor import Vendor
from app.schemas.vendor import VendorApplyRequest, VendorConnectRequest
from app.services.audit_service import record_audit
from app.utils.ids import generate_id

logger = logging.getLogger(__name__)


def _storefront_path(vendor_id: str) -> str:
    return f"/store/{vendor_id}"


# ---------- READ ----------

def list_vendors(db: Session) -> List[Vendor]:
    return db.query(Vendor).order_by(Vendor.created_at.desc()).all()


def get_vendor(db: Session, vendor_id: str) -> Optional[Vendor]:
    return db.query(Vendor).filter(Vendor.id == vendor_id).first()


def get_vendor_for_user(db: Session, user_id: str) -> Optional[Vendor]:
    return db.query(Vendor).filter(Vendor.user_id == user_id).first()


def get_vendor_with_products(db: Session, vendor_id: str) -> Optional[dict]:
    vendor = get_vendor(db, vendor_id)
    if not vendor:
        return None
    products = db.query(Product).filter(Product.vendor_id == vendor_id).all()
    return {"vendor": vendor, "products": products}


# ---------- ONBOARDING ----------

def apply_as_vendor(db: Session, user: User, data: VendorApplyRequest) -> Vendor:
    if get_vendor_for_user(db, user.id):
        raise HTTPException(status_code=409, detail="Vendor application already exists")

    vendor_id = generate_id("VND")
    vendor = Vendor(
        id=vendor_id,
        user_id=user.id,
        business_name=data.business_name or user.email,
        status=VendorStatus.pending.value,
        payout_info=data.payout_info,
        storefront_path=_storefront_path(vendor_id),
    )
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    logger.info("vendor %s applied (user %s)", vendor.id, user.id)
    return vendor


def approve_vendor(db: Session, vendor_id: str) -> Optional[Vendor]:
    vendor = get_vendor(db, vendor_id)
    if not vendor:
        return None
    vendor.status = VendorStatus.active.value
    vendor.approved_at = datetime.utcnow()
    db.commit()
    db.refresh(vendor)
    logger.info("vendor %s approved", vendor.id)
    return vendor


def connect_vendor(db: Session, data: VendorConnectRequest, user: Optional[User] = None) -> Vendor:
    """External provider onboarding; anonymous callers get an owner-less vendor."""
    vendor_id = generate_id("VND")
    vendor = Vendor(
        id=vendor_id,
        user_id=user.id if user else None,
        business_name=data.business_name or data.website or "External Provider",
        website=data.website,
        status=VendorStatus.active.value if data.auto_activate else VendorStatus.pending.value,
        payout_info=data.payout_info,
        storefront_path=_storefront_path(vendor_id),
    )
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    return vendor


def embed_info(vendor: Vendor) -> dict:
    path = vendor.storefront_path or _storefront_path(vendor.id)
    return {
        "storefront_url": path,
        "embed_snippet": f'<iframe src="{path}" width="800" height="600"></iframe>',
    }


# ---------- API KEYS ----------

def can_manage_vendor(user: Optional[User], vendor: Vendor) -> bool:
    if not user:
        return False
    return user.role == UserRole.admin.value or (
        user.role == UserRole.vendor.value and vendor.user_id == user.id
    )


def generate_vendor_api_key(db: Session, vendor: Vendor, user: User, label: Optional[str] = None) -> dict:
    """Issues a new key, replacing any previous one. The plaintext is only returned here."""
    key = generate_api_key()
    now = datetime.utcnow()

    vendor.api_key_hash = hash_api_key(key)
    vendor.api_key_label = label or vendor.api_key_label or "default"
    vendor.api_key_created_at = now
    vendor.api_key_created_by = user.id
    vendor.api_key_revoked_at = None

    record_audit(db, "apiKey.generate", vendor_id=vendor.id, actor_id=user.id, label=vendor.api_key_label)
    db.commit()
    db.refresh(vendor)
    logger.info("api key generated for vendor %s by %s", vendor.id, user.id)
    return {"api_key": key, "label": vendor.api_key_label}


def revoke_vendor_api_key(db: Session, vendor: Vendor, user: User) -> Vendor:
    vendor.api_key_hash = None
    vendor.api_key_revoked_at = datetime.utcnow()
    record_audit(db, "apiKey.revoke", vendor_id=vendor.id, actor_id=user.id)
    db.commit()
    db.refresh(vendor)
    logger.info("api key revoked for vendor %s by %s", vendor.id, user.id)
    return vendor


def update_api_key_label(db: Session, vendor: Vendor, user: User, label: Optional[str]) -> Vendor:
    old = vendor.api_key_label
    vendor.api_key_label = label or vendor.api_key_label or "default"
    record_audit(
        db,
        "apiKey.label.update",
        vendor_id=vendor.id,
        actor_id=user.id,
        old_label=old,
        new_label=vendor.api_key_label,
    )
    db.commit()
    db.refresh(vendor)
    return vendor


def get_vendor_by_api_key(db: Session, key: str) -> Optional[Vendor]:
    if not key:
        return None
    return db.query(Vendor).filter(Vendor.api_key_hash == hash_api_key(key)).first()


def touch_api_key(db: Session, vendor: Vendor, action: str, **details) -> None:
    """Marks the key as used and audits the call; committed with the caller's change."""
    vendor.api_key_last_used = datetime.utcnow()
    record_audit(db, "apiKey.used", vendor_id=vendor.id, action=action, **details)


def api_key_overview(db: Session) -> List[dict]:
    entries = []
    for v in list_vendors(db):
        meta = None
        if v.api_key_created_at or v.api_key_revoked_at:
            meta = {
                "label": v.api_key_label,
                "created_at": v.api_key_created_at,
                "created_by": v.api_key_created_by,
                "revoked_at": v.api_key_revoked_at,
                "last_used": v.api_key_last_used,
                "active": v.api_key_hash is not None,
            }
        entries.append({
            "id": v.id,
            "business_name": v.business_name or v.website,
            "api_key_meta": meta,
        })
    return entries
