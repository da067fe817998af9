"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from app.config import get_settings
from app.core.exceptions import AppError, app_error_handler, global_exception_handler
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.infrastructure.database import Base, engine

# Import all models so SQLAlchemy knows about them
from app.domain.models.product import Product  # noqa: F401
from app.domain.models.client import Client  # noqa: F401
from app.domain.models.order import ArchivedOrder, Order, OrderItem  # noqa: F401

# Import routers
from app.interfaces.api.products import router as products_router
from app.interfaces.api.cart import router as cart_router
from app.interfaces.api.orders import router as orders_router
from app.interfaces.api.clients import router as clients_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Vitrine API...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — migrations are managed outside this service)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    yield

    logger.info("Vitrine API stopped")


app = FastAPI(
    title="Vitrine — Pedidos, Catálogo e CRM",
    description="API Backend — catálogo público, carrinho com regras de preço por modalidade e pedidos",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(products_router)
app.include_router(cart_router)
app.include_router(orders_router)
app.include_router(clients_router)


@app.get("/")
def root():
    return {
        "name": "Vitrine API",
        "version": "1.0.0",
        "status": "running",
        "catalogo_ativo": settings.CATALOGO_ATIVO,
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
