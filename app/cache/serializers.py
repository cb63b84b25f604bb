import json
import dataclasses
import uuid
from datetime import datetime, date, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from app.core.exceptions import CacheSerializationError
from app.logging.setup import get_logger

logger = get_logger(__name__)


def serialize_data(data: Any) -> str:
    """
    Serialize dữ liệu thành JSON để lưu vào cache.

    Args:
        data: Dữ liệu cần serialize

    Returns:
        JSON string

    Raises:
        CacheSerializationError: Nếu dữ liệu không serialize được
    """
    try:
        return json.dumps(data, cls=EnhancedJSONEncoder)
    except (TypeError, ValueError, OverflowError) as e:
        logger.error(f"Lỗi khi serialize dữ liệu: {str(e)}")
        raise CacheSerializationError(f"Cannot serialize {type(data).__name__}") from e


def deserialize_data(data: Optional[Union[str, bytes]]) -> Any:
    """
    Deserialize dữ liệu JSON từ cache.

    Args:
        data: Dữ liệu đã serialize

    Returns:
        Dữ liệu gốc, hoặc None nếu data là None

    Raises:
        CacheSerializationError: Nếu payload không phải JSON hợp lệ
    """
    if data is None:
        return None

    # JSONDecodeError, UnicodeDecodeError và số nguyên quá dài đều là ValueError;
    # JSON lồng quá sâu gây RecursionError
    try:
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8")
        return json.loads(data)
    except (ValueError, RecursionError) as e:
        raise CacheSerializationError(f"Corrupt cache payload: {e}") from e


class EnhancedJSONEncoder(json.JSONEncoder):
    """JSON Encoder hỗ trợ thêm các kiểu dữ liệu của Python."""

    def default(self, obj):
        if isinstance(obj, (datetime, date, time)):
            return obj.isoformat()

        # Decimal ghi ra dạng number, giống giá tiền trả về qua API
        elif isinstance(obj, Decimal):
            return float(obj)

        elif isinstance(obj, uuid.UUID):
            return str(obj)

        elif isinstance(obj, Enum):
            return obj.value

        elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)

        # Pydantic models
        elif hasattr(obj, "model_dump") and callable(getattr(obj, "model_dump")):
            return obj.model_dump()

        elif isinstance(obj, (set, frozenset)):
            return list(obj)

        return super().default(obj)
