from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.dependencies.auth import get_optional_user, require_admin, require_auth
from app.models.user import User
from app.models.vendor import Vendor
from app.schemas.vendor import (
    ApiKeyGenerateRequest,
    ApiKeyLabelRequest,
    ApiKeyResponse,
    EmbedResponse,
    VendorApiKeyEntry,
    VendorApplyRequest,
    VendorConnectRequest,
    VendorConnectResponse,
    VendorDetailResponse,
    VendorResponse,
)
from app.services.vendor_service import (
    api_key_overview,
    apply_as_vendor,
    approve_vendor,
    can_manage_vendor,
    connect_vendor,
    embed_info,
    generate_vendor_api_key,
    get_vendor,
    get_vendor_with_products,
    list_vendors,
    revoke_vendor_api_key,
    update_api_key_label,
)

router = APIRouter(prefix="/vendors", tags=["Vendors"])


def _managed_vendor(db: Session, vendor_id: str, user: User) -> Vendor:
    vendor = get_vendor(db, vendor_id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    if not can_manage_vendor(user, vendor):
        raise HTTPException(status_code=403, detail="Not allowed to manage this vendor")
    return vendor


# ---------- LIST / APPLY / CONNECT ----------

@router.get("/", response_model=List[VendorResponse])
def list_all(db: Session = Depends(get_db)):
    return list_vendors(db)


@router.post("/apply", response_model=VendorResponse, status_code=status.HTTP_201_CREATED)
def apply(
    data: VendorApplyRequest,
    user: User = Depends(require_auth),
    db: Session = Depends(get_db),
):
    return apply_as_vendor(db, user, data)


@router.post("/connect", response_model=VendorConnectResponse, status_code=status.HTTP_201_CREATED)
def connect(
    data: VendorConnectRequest,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    vendor = connect_vendor(db, data, user)
    return {
        "vendor": vendor,
        "storefront_url": vendor.storefront_path,
        "embed_url": f"/vendors/{vendor.id}/embed",
    }


@router.get("/api-keys", response_model=List[VendorApiKeyEntry], dependencies=[Depends(require_admin)])
def api_keys(db: Session = Depends(get_db)):
    return api_key_overview(db)


# ---------- SINGLE VENDOR ----------

@router.get("/{vendor_id}", response_model=VendorDetailResponse)
def get(vendor_id: str, db: Session = Depends(get_db)):
    detail = get_vendor_with_products(db, vendor_id)
    if not detail:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return detail


@router.post("/{vendor_id}/approve", response_model=VendorResponse, dependencies=[Depends(require_admin)])
def approve(vendor_id: str, db: Session = Depends(get_db)):
    vendor = approve_vendor(db, vendor_id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return vendor


@router.get("/{vendor_id}/embed", response_model=EmbedResponse)
def embed(vendor_id: str, db: Session = Depends(get_db)):
    vendor = get_vendor(db, vendor_id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return embed_info(vendor)


# ---------- API KEYS ----------

@router.post("/{vendor_id}/api-key", response_model=ApiKeyResponse)
def generate_key(
    vendor_id: str,
    data: Optional[ApiKeyGenerateRequest] = None,
    user: User = Depends(require_auth),
    db: Session = Depends(get_db),
):
    vendor = _managed_vendor(db, vendor_id, user)
    return generate_vendor_api_key(db, vendor, user, label=data.label if data else None)


@router.post("/{vendor_id}/api-key/revoke")
def revoke_key(
    vendor_id: str,
    user: User = Depends(require_auth),
    db: Session = Depends(get_db),
):
    vendor = _managed_vendor(db, vendor_id, user)
    revoke_vendor_api_key(db, vendor, user)
    return {"ok": True}


@router.put("/{vendor_id}/api-key/label")
def relabel_key(
    vendor_id: str,
    data: ApiKeyLabelRequest,
    user: User = Depends(require_auth),
    db: Session = Depends(get_db),
):
    vendor = _managed_vendor(db, vendor_id, user)
    vendor = update_api_key_label(db, vendor, user, data.label)
    return {"ok": True, "label": vendor.api_key_label}
