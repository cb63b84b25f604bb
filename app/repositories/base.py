from typing import List, Protocol, runtime_checkable

from app.schemas.product import ProductRead


@runtime_checkable
class ProductRepositoryProtocol(Protocol):
    """Read capability shared by the store repository and its cached wrapper."""

    async def get_all(self) -> List[ProductRead]:
        ...
