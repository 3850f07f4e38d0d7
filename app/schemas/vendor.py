from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from app.schemas.product import ProductResponse


class VendorApplyRequest(BaseModel):
    business_name: Optional[str] = None
    payout_info: Optional[Dict[str, Any]] = None


class VendorConnectRequest(BaseModel):
    business_name: Optional[str] = None
    website: Optional[str] = None
    payout_info: Optional[Dict[str, Any]] = None
    auto_activate: bool = False


class VendorResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    business_name: str
    website: Optional[str] = None
    status: str
    payout_info: Optional[Dict[str, Any]] = None
    storefront_path: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class VendorDetailResponse(BaseModel):
    vendor: VendorResponse
    products: List[ProductResponse]


class VendorConnectResponse(BaseModel):
    vendor: VendorResponse
    storefront_url: str
    embed_url: str


class EmbedResponse(BaseModel):
    storefront_url: str
    embed_snippet: str


# ---------- API keys ----------

class ApiKeyGenerateRequest(BaseModel):
    label: Optional[str] = None


class ApiKeyLabelRequest(BaseModel):
    label: Optional[str] = None


class ApiKeyResponse(BaseModel):
    api_key: str
    label: str


class ApiKeyMeta(BaseModel):
    label: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    revoked_at: Optional[datetime] = None
    last_used: Optional[datetime] = None
    active: bool = False


class VendorApiKeyEntry(BaseModel):
    id: str
    business_name: Optional[str] = None
    api_key_meta: Optional[ApiKeyMeta] = None


class AuditLogResponse(BaseModel):
    id: str
    type: str
    vendor_id: Optional[str] = None
    actor_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime

    class Config:
        from_attributes = True
