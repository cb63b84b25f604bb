from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.product import Product
from app.schemas.product import ProductRead
from app.logging.setup import get_logger

logger = get_logger(__name__)


class ProductRepository:
    """Repository đọc sản phẩm trực tiếp từ database, không cache."""

    def __init__(self, db: AsyncSession):
        """Khởi tạo repository với AsyncSession."""
        self.db = db

    async def get_all(self) -> List[ProductRead]:
        """Lấy toàn bộ sản phẩm.

        Lỗi của database (SQLAlchemyError, ...) được ném nguyên vẹn cho caller.

        Returns:
            Danh sách ProductRead, sắp xếp theo id.
        """
        result = await self.db.execute(select(Product).order_by(Product.id))
        rows = result.scalars().all()
        logger.debug(f"Loaded {len(rows)} products from database")

        # Trả về snapshot, không để ORM object bị track thoát ra ngoài
        return [ProductRead.model_validate(row) for row in rows]
