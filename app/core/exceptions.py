from typing import Dict, Optional, Any
from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Model for standardized error responses."""

    detail: str
    code: Optional[str] = None
    error_id: Optional[str] = None
    type: Optional[str] = None
    timestamp: Optional[str] = None


class APIException(HTTPException):
    """
    Base exception class cho API errors.
    Mở rộng từ HTTPException để thêm error code và thông tin chi tiết.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Khởi tạo exception.

        Args:
            status_code: HTTP status code
            detail: Error detail message
            code: Error code
            params: Additional parameters
            headers: HTTP headers
        """
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.params = params

    def to_response(self) -> Dict[str, Any]:
        """Convert to response dict."""
        response = {"detail": self.detail}

        if self.code:
            response["code"] = self.code

        if self.params:
            response["params"] = self.params

        return response


class ServerException(APIException):
    """500 Internal Server Error exception."""

    def __init__(
        self,
        detail: str = "Internal server error",
        code: Optional[str] = "server_error",
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code=code,
            params=params,
            headers=headers,
        )


class CacheException(Exception):
    """Cache related exception."""

    pass


class CacheSerializationError(CacheException):
    """Payload trong cache không thể serialize/deserialize."""

    pass
