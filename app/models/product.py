from sqlalchemy import Column, Integer, Numeric, String
from app.core.db import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r}>"
