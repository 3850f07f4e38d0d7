import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.category import Category, Niche
from app.models.product import Product
from app.schemas.category import (
    BulkCategoryImportRequest,
    CategoryCreate,
    CategoryUpdate,
    NicheCreate,
    NicheUpdate,
)
from app.utils.ids import generate_id

logger = logging.getLogger(__name__)


# --------------------------
# CATEGORIES
# --------------------------
def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: str) -> Optional[Category]:
    return db.query(Category).filter(Category.id == category_id).first()


def create_category(db: Session, data: CategoryCreate) -> Category:
    category_id = data.id or generate_id("cat")
    if get_category(db, category_id):
        raise HTTPException(status_code=409, detail="Category already exists")

    rate = data.commission_rate
    if rate is None:
        rate = settings.DEFAULT_COMMISSION_RATE

    category = Category(
        id=category_id,
        name=data.name,
        description=data.description,
        icon=data.icon,
        commission_rate=rate,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(db: Session, category_id: str, data: CategoryUpdate) -> Optional[Category]:
    category = get_category(db, category_id)
    if not category:
        return None

    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(category, key, value)

    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: str) -> bool:
    """Deletes the category and its niches; products keep existing, uncategorised."""
    category = get_category(db, category_id)
    if not category:
        return False

    niche_ids = [n.id for n in category.niches]
    if niche_ids:
        db.query(Product).filter(Product.niche_id.in_(niche_ids)).update(
            {Product.niche_id: None}, synchronize_session=False
        )
    db.query(Product).filter(Product.category_id == category_id).update(
        {Product.category_id: None}, synchronize_session=False
    )
    db.delete(category)
    db.commit()
    logger.info("category %s deleted with %d niches", category_id, len(niche_ids))
    return True


def bulk_import_categories(db: Session, request: BulkCategoryImportRequest) -> dict:
    """Adds categories and niches whose ids are not taken yet; existing ones are left alone."""
    imported = {"categories": 0, "niches": 0}

    for cat in request.categories:
        if not get_category(db, cat.id):
            rate = cat.commission_rate
            db.add(
                Category(
                    id=cat.id,
                    name=cat.name,
                    description=cat.description,
                    icon=cat.icon,
                    commission_rate=rate if rate is not None else settings.DEFAULT_COMMISSION_RATE,
                )
            )
            db.flush()
            imported["categories"] += 1

        for niche in cat.niches:
            if get_niche(db, niche.id):
                continue
            db.add(
                Niche(
                    id=niche.id,
                    name=niche.name,
                    description=niche.description,
                    category_id=cat.id,
                )
            )
            db.flush()
            imported["niches"] += 1

    db.commit()
    logger.info("bulk import: %(categories)d categories, %(niches)d niches", imported)
    return {"ok": True, "imported": imported}


# --------------------------
# NICHES
# --------------------------
def list_niches(db: Session, category_id: Optional[str] = None) -> List[Niche]:
    query = db.query(Niche)
    if category_id:
        query = query.filter(Niche.category_id == category_id)
    return query.order_by(Niche.name).all()


def get_niche(db: Session, niche_id: str) -> Optional[Niche]:
    return db.query(Niche).filter(Niche.id == niche_id).first()


def create_niche(db: Session, category_id: str, data: NicheCreate) -> Optional[Niche]:
    if not get_category(db, category_id):
        return None

    niche_id = data.id or generate_id("n")
    if get_niche(db, niche_id):
        raise HTTPException(status_code=409, detail="Niche already exists")

    niche = Niche(
        id=niche_id,
        name=data.name,
        description=data.description,
        category_id=category_id,
    )
    db.add(niche)
    db.commit()
    db.refresh(niche)
    return niche


def update_niche(db: Session, niche_id: str, data: NicheUpdate) -> Optional[Niche]:
    niche = get_niche(db, niche_id)
    if not niche:
        return None

    changes = data.model_dump(exclude_unset=True)
    if changes.get("category_id") and not get_category(db, changes["category_id"]):
        raise HTTPException(status_code=400, detail="Category not found")

    for key, value in changes.items():
        if value is not None:
            setattr(niche, key, value)

    db.commit()
    db.refresh(niche)
    return niche


def delete_niche(db: Session, niche_id: str) -> bool:
    niche = get_niche(db, niche_id)
    if not niche:
        return False

    db.query(Product).filter(Product.niche_id == niche_id).update(
        {Product.niche_id: None}, synchronize_session=False
    )
    db.delete(niche)
    db.commit()
    return True
