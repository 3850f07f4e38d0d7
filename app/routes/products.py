from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from app.database.connection import get_db
from app.schemas.product import (
    BulkProductCreateRequest,
    BulkProductCreateResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from app.services.product_service import (
    bulk_create_products, create_product, delete_product,
    get_product, list_products, update_product,
)
from app.services.vendor_service import get_vendor_for_user, touch_api_key
from app.dependencies.auth import ActingVendor, get_acting_vendor, require_vendor_user
from app.models.product import Product
from app.models.user import User


router = APIRouter(prefix="/products", tags=["Products"])


def _owned_product(db: Session, product_id: str, user: User) -> Product:
    product = get_product(db, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    vendor = get_vendor_for_user(db, user.id)
    if not vendor or product.vendor_id != vendor.id:
        raise HTTPException(403, "Product belongs to another vendor")
    return product

# CREATE
@router.post("/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create(
    data: ProductCreate,
    acting: ActingVendor = Depends(get_acting_vendor),
    db: Session = Depends(get_db),
):
    if acting.via_api_key:
        touch_api_key(db, acting.vendor, "product.create")
    return create_product(db, acting.vendor, data)

# BULK CREATE
@router.post("/bulk", response_model=BulkProductCreateResponse, status_code=status.HTTP_201_CREATED)
def bulk_create(
    request: BulkProductCreateRequest,
    acting: ActingVendor = Depends(get_acting_vendor),
    db: Session = Depends(get_db),
):
    if acting.via_api_key:
        touch_api_key(db, acting.vendor, "product.bulk", count=len(request.products))
    products = bulk_create_products(db, acting.vendor, request)
    return {"added_count": len(products), "products": products}

# LIST
@router.get("/", response_model=List[ProductResponse])
def list_all(
    category: Optional[str] = None,
    niche: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return list_products(db, category_id=category, niche_id=niche)

# GET BY ID
@router.get("/{product_id}", response_model=ProductResponse)
def get(product_id: str, db: Session = Depends(get_db)):
    product = get_product(db, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product

# UPDATE
@router.put("/{product_id}", response_model=ProductResponse)
def update(
    product_id: str,
    data: ProductUpdate,
    user: User = Depends(require_vendor_user),
    db: Session = Depends(get_db),
):
    product = _owned_product(db, product_id, user)
    return update_product(db, product, data)

# DELETE
@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(
    product_id: str,
    user: User = Depends(require_vendor_user),
    db: Session = Depends(get_db),
):
    product = _owned_product(db, product_id, user)
    delete_product(db, product)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
