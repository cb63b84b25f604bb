from app.schemas.product import ProductRead, ProductList

__all__ = ["ProductRead", "ProductList"]
