from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer


class ProductRead(BaseModel):
    """Snapshot của một sản phẩm trả về cho client."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    price: Decimal = Field(..., description="Giá sản phẩm")

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


ProductList = TypeAdapter(List[ProductRead])
