"""
Core module - Chứa các thành phần cốt lõi của ứng dụng

Module này bao gồm:
- Config: Cấu hình ứng dụng
- DB: Engine, session factory và declarative base
- Exceptions: Các exception tùy chỉnh
"""

from app.core.config import get_settings, Settings
from app.core.exceptions import (
    APIException,
    ServerException,
    CacheException,
    CacheSerializationError,
)

__all__ = [
    "get_settings",
    "Settings",
    "APIException",
    "ServerException",
    "CacheException",
    "CacheSerializationError",
]
