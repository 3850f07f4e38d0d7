from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ---------- Niches ----------

class NicheBase(BaseModel):
    name: str = "Unnamed"
    description: str = ""


class NicheCreate(NicheBase):
    id: Optional[str] = None


class NicheUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None


class NicheResponse(NicheBase):
    id: str
    category_id: str

    class Config:
        from_attributes = True


# ---------- Categories ----------

class CategoryBase(BaseModel):
    name: str = "Unnamed"
    description: str = ""
    icon: str = ""


class CategoryCreate(CategoryBase):
    id: Optional[str] = None
    commission_rate: Optional[float] = Field(default=None, ge=0, le=1)


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    commission_rate: Optional[float] = Field(default=None, ge=0, le=1)


class CategoryResponse(CategoryBase):
    id: str
    commission_rate: float
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Bulk import ----------

class BulkNicheItem(NicheBase):
    id: str


class BulkCategoryItem(CategoryBase):
    id: str
    commission_rate: Optional[float] = Field(default=None, ge=0, le=1)
    niches: List[BulkNicheItem] = []


class BulkCategoryImportRequest(BaseModel):
    categories: List[BulkCategoryItem]


class BulkImportCounts(BaseModel):
    categories: int = 0
    niches: int = 0


class BulkCategoryImportResponse(BaseModel):
    ok: bool = True
    imported: BulkImportCounts
