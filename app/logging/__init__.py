"""
Module logging - Cung cấp hệ thống ghi log cho ứng dụng.

Module này bao gồm:
- Formatters: Định dạng log messages (JSON, màu sắc)
- Setup: Thiết lập logging cho ứng dụng
"""

from app.logging.setup import get_logger, setup_logging
from app.logging.formatters import JSONFormatter, ColorizedFormatter

__all__ = [
    "get_logger",
    "setup_logging",
    "JSONFormatter",
    "ColorizedFormatter",
]
