import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.database.connection import Base, get_db
from app.main import app
from app.models import (  # noqa: F401
    audit_log,
    category,
    commission,
    coupon,
    discount_rule,
    order,
    product,
    user,
    vendor,
)
from app.models.category import Category
from app.models.product import Product
from app.models.user import User
from app.models.vendor import Vendor
from app.services.user_service import create_user

TEST_DB_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db():
    # services commit and roll back themselves, so every test gets a fresh schema
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin(db):
    return create_user(db, "admin@example.com", "admin-pass", role="admin")


@pytest.fixture()
def buyer(db):
    return create_user(db, "buyer@example.com", "buyer-pass", role="buyer")


@pytest.fixture()
def seeded(db):
    """
    Two categories and one active vendor with a product in each:
      laptop 499.99 in electronics @ 0.10
      scarf   19.99 in fashion     @ 0.12
    """
    owner = create_user(db, "vendor@example.com", "vendor-pass", role="vendor")
    shop = Vendor(id="VND_SHOP", user_id=owner.id, business_name="Shop", status="active")
    db.add_all([
        Category(id="electronics", name="Electronics", commission_rate=0.10),
        Category(id="fashion", name="Fashion", commission_rate=0.12),
        shop,
    ])
    db.add_all([
        Product(id="PRD_LAPTOP", vendor_id=shop.id, title="Laptop", price=499.99, category_id="electronics"),
        Product(id="PRD_SCARF", vendor_id=shop.id, title="Scarf", price=19.99, category_id="fashion"),
    ])
    db.commit()
    return {"owner": owner, "vendor": shop}
