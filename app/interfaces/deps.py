"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.application.services.pricing_service import rules_from_settings
from app.config import get_settings
from app.core.exceptions import ServiceUnavailableException
from app.domain.models.client import Client
from app.domain.models.order import Order
from app.domain.models.product import Product
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.pricing import PricingRules
from app.infrastructure.database import get_db
from app.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from app.infrastructure.repositories.order_repository import SQLAlchemyOrderRepository
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db, Product)


def get_client_repository(db: Session = Depends(get_db)) -> ClientRepository:
    """Get client repository instance."""
    return SQLAlchemyClientRepository(db, Client)


def get_order_repository(db: Session = Depends(get_db)) -> OrderRepository:
    """Get order repository instance."""
    return SQLAlchemyOrderRepository(db, Order)


def get_pricing_rules() -> PricingRules:
    """Eligibility thresholds from settings."""
    return rules_from_settings(get_settings())


def require_catalogo_ativo() -> None:
    """Block storefront writes while the catalog is switched off."""
    if not get_settings().CATALOGO_ATIVO:
        raise ServiceUnavailableException("Catálogo temporariamente indisponível")
