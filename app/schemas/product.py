from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, List, Optional

class ProductBase(BaseModel):
    title: str = "Untitled"
    description: str = ""
    price: float = Field(default=0.0, ge=0)
    category_id: Optional[str] = None
    niche_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    images: List[str] = []
    status: str = "active"

class ProductCreate(ProductBase):
    pass

class ProductUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    category_id: Optional[str] = None
    niche_id: Optional[str] = None
    status: Optional[str] = None

class ProductResponse(ProductBase):
    id: str
    vendor_id: str
    metadata: Optional[Dict[str, Any]] = Field(default=None, validation_alias="metadata_")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True

class BulkProductCreateRequest(BaseModel):
    products: List[ProductCreate]

class BulkProductCreateResponse(BaseModel):
    added_count: int
    products: List[ProductResponse]
