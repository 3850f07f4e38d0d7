from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.product import Product
from app.models.vendor import Vendor
from app.schemas.product import BulkProductCreateRequest, ProductCreate, ProductUpdate
from app.utils.ids import generate_id


def _build_product(vendor: Vendor, data: ProductCreate) -> Product:
    return Product(
        id=generate_id("PRD"),
        vendor_id=vendor.id,
        title=data.title,
        description=data.description,
        price=data.price,
        category_id=data.category_id,
        niche_id=data.niche_id,
        metadata_=data.metadata,
        images=list(data.images),
        status=data.status,
    )


# --------------------------
# CREATE PRODUCT
# --------------------------
def create_product(db: Session, vendor: Vendor, data: ProductCreate) -> Product:
    product = _build_product(vendor, data)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


# --------------------------
# BULK CREATE
# --------------------------
def bulk_create_products(db: Session, vendor: Vendor, request: BulkProductCreateRequest) -> List[Product]:
    products = [_build_product(vendor, item) for item in request.products]
    db.add_all(products)
    db.commit()
    for product in products:
        db.refresh(product)
    return products


# --------------------------
# GET PRODUCT
# --------------------------
def get_product(db: Session, product_id: str) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


# --------------------------
# LIST PRODUCTS
# --------------------------
def list_products(
    db: Session,
    category_id: Optional[str] = None,
    niche_id: Optional[str] = None,
) -> List[Product]:
    query = db.query(Product)
    if category_id:
        query = query.filter(Product.category_id == category_id)
    if niche_id:
        query = query.filter(Product.niche_id == niche_id)
    return query.order_by(Product.created_at.desc()).all()


# --------------------------
# UPDATE PRODUCT
# --------------------------
def update_product(db: Session, product: Product, data: ProductUpdate) -> Product:
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(product, key, value)

    db.commit()
    db.refresh(product)
    return product


# --------------------------
# DELETE PRODUCT
# --------------------------
def delete_product(db: Session, product: Product) -> None:
    db.delete(product)
    db.commit()
