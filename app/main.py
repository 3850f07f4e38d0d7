import logging
from fastapi import FastAPI
from datetime import datetime

from app.core.config import settings
from app.core.errors import MarketplaceError, marketplace_error_handler
from app.core.logging import setup_logging
from app.database.connection import SessionLocal, init_db
from app.middleware.metrics import MetricsMiddleware, new_metrics
from app.routes import system
from app.routes.analytics import router as analytics_router
from app.routes.auth import router as auth_router
from app.routes.categories import router as categories_router
from app.routes.commissions import router as commissions_router
from app.routes.coupons import router as coupons_router
from app.routes.discount_rules import router as discount_rules_router
from app.routes.orders import router as orders_router
from app.routes.payments import router as payments_router
from app.routes.products import router as product_router
from app.routes.vendors import router as vendors_router
from app.services.user_service import ensure_admin_user

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Marketplace API")

app.add_middleware(MetricsMiddleware, slow_ms=settings.SLOW_REQUEST_MS)
app.add_exception_handler(MarketplaceError, marketplace_error_handler)


app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(discount_rules_router)
app.include_router(vendors_router)
app.include_router(product_router)
app.include_router(coupons_router)
app.include_router(orders_router)
app.include_router(payments_router)
app.include_router(commissions_router)
app.include_router(analytics_router)
app.include_router(system.router)


def bootstrap_admin():
    if not (settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        return
    db = SessionLocal()
    try:
        admin = ensure_admin_user(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        logger.info("admin account %s ready", admin.email)
    finally:
        db.close()


@app.on_event("startup")
async def startup_event():
    init_db()
    bootstrap_admin()
    app.state.start_time = datetime.utcnow()
    app.state.metrics = new_metrics()
    logger.info("marketplace api started")
