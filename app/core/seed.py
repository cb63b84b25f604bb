"""
Seed dữ liệu mẫu cho môi trường development.

Chỉ chạy lúc khởi động ứng dụng, không nằm trên đường xử lý request.
"""

from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.product import Product
from app.logging.setup import get_logger

logger = get_logger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Prod 1", "price": Decimal("1.2")},
    {"id": 2, "name": "Prod 2", "price": Decimal("2.2")},
    {"id": 3, "name": "Prod 3", "price": Decimal("3.3")},
]


async def seed_products(session: AsyncSession) -> int:
    """
    Thêm các sản phẩm mẫu nếu bảng products đang trống.

    Args:
        session: AsyncSession

    Returns:
        Số sản phẩm đã thêm (0 nếu bảng đã có dữ liệu)
    """
    existing = await session.scalar(select(func.count()).select_from(Product))
    if existing:
        logger.info(f"Products table already has {existing} rows, skipping seed")
        return 0

    session.add_all([Product(**data) for data in SEED_PRODUCTS])
    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info(f"Seeded {len(SEED_PRODUCTS)} products")
    return len(SEED_PRODUCTS)
