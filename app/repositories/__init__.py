from app.repositories.base import ProductRepositoryProtocol
from app.repositories.product_repo import ProductRepository
from app.repositories.cached_product_repo import (
    CachedProductRepository,
    PRODUCTS_CACHE_KEY,
    PRODUCTS_CACHE_TTL,
)

__all__ = [
    "ProductRepositoryProtocol",
    "ProductRepository",
    "CachedProductRepository",
    "PRODUCTS_CACHE_KEY",
    "PRODUCTS_CACHE_TTL",
]
