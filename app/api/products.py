from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_product_repository
from app.repositories import ProductRepositoryProtocol
from app.schemas.product import ProductRead

router = APIRouter(tags=["products"])


@router.get("/", response_model=List[ProductRead])
async def list_products(
    product_repository: ProductRepositoryProtocol = Depends(get_product_repository),
):
    """Toàn bộ danh mục sản phẩm."""
    return await product_repository.get_all()
