from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database.connection import get_db
from app.dependencies.auth import require_admin
from app.schemas.category import (
    BulkCategoryImportRequest,
    BulkCategoryImportResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    NicheCreate,
    NicheResponse,
    NicheUpdate,
)
from app.services.category_service import (
    bulk_import_categories,
    create_category,
    create_niche,
    delete_category,
    delete_niche,
    get_category,
    get_niche,
    list_categories,
    list_niches,
    update_category,
    update_niche,
)

router = APIRouter(tags=["Categories & Niches"])


# ---------- CATEGORIES ----------

@router.get("/categories", response_model=List[CategoryResponse])
def list_categories_route(db: Session = Depends(get_db)):
    return list_categories(db)


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category_route(data: CategoryCreate, db: Session = Depends(get_db)):
    return create_category(db, data)


@router.post(
    "/categories/bulk-import",
    response_model=BulkCategoryImportResponse,
    dependencies=[Depends(require_admin)],
)
def bulk_import_route(request: BulkCategoryImportRequest, db: Session = Depends(get_db)):
    return bulk_import_categories(db, request)


@router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category_route(category_id: str, db: Session = Depends(get_db)):
    category = get_category(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.put("/categories/{category_id}", response_model=CategoryResponse, dependencies=[Depends(require_admin)])
def update_category_route(category_id: str, data: CategoryUpdate, db: Session = Depends(get_db)):
    category = update_category(db, category_id, data)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/categories/{category_id}", dependencies=[Depends(require_admin)])
def delete_category_route(category_id: str, db: Session = Depends(get_db)):
    if not delete_category(db, category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"ok": True}


# ---------- NICHES ----------

@router.get("/categories/{category_id}/niches", response_model=List[NicheResponse])
def list_category_niches_route(category_id: str, db: Session = Depends(get_db)):
    return list_niches(db, category_id=category_id)


@router.post(
    "/categories/{category_id}/niches",
    response_model=NicheResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_niche_route(category_id: str, data: NicheCreate, db: Session = Depends(get_db)):
    niche = create_niche(db, category_id, data)
    if not niche:
        raise HTTPException(status_code=404, detail="Category not found")
    return niche


@router.get("/niches", response_model=List[NicheResponse])
def list_niches_route(db: Session = Depends(get_db)):
    return list_niches(db)


@router.get("/niches/{niche_id}", response_model=NicheResponse)
def get_niche_route(niche_id: str, db: Session = Depends(get_db)):
    niche = get_niche(db, niche_id)
    if not niche:
        raise HTTPException(status_code=404, detail="Niche not found")
    return niche


@router.put("/niches/{niche_id}", response_model=NicheResponse, dependencies=[Depends(require_admin)])
def update_niche_route(niche_id: str, data: NicheUpdate, db: Session = Depends(get_db)):
    niche = update_niche(db, niche_id, data)
    if not niche:
        raise HTTPException(status_code=404, detail="Niche not found")
    return niche


@router.delete("/niches/{niche_id}", dependencies=[Depends(require_admin)])
def delete_niche_route(niche_id: str, db: Session = Depends(get_db)):
    if not delete_niche(db, niche_id):
        raise HTTPException(status_code=404, detail="Niche not found")
    return {"ok": True}
