import logging
import sys
from typing import Any, Dict, Optional, Union
from app.core.config import Settings, get_settings
from app.logging.formatters import JSONFormatter, ColorizedFormatter

__all__ = ["get_logger", "setup_logging"]

# Handler do setup_logging gắn vào root logger, để gọi lại không bị nhân đôi
_HANDLER_NAME = "products-console"


def get_logger(
    name: str, extra: Optional[Dict[str, Any]] = None
) -> Union[logging.Logger, logging.LoggerAdapter]:
    """
    Lấy logger theo tên module.

    Handlers are configured once on the root logger by ``setup_logging``;
    module loggers only propagate to it.

    Args:
        name: Tên logger
        extra: Thông tin bổ sung cho tất cả log message

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if extra:
        return logging.LoggerAdapter(logger, extra)

    return logger


def _build_formatter(settings: Settings) -> logging.Formatter:
    if settings.LOG_FORMAT.lower() == "json" or settings.is_production:
        return JSONFormatter()
    return ColorizedFormatter()


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Thiết lập logging cho ứng dụng.

    Args:
        settings: Application settings (mặc định lấy từ get_settings())
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Xóa handler cũ do chính hàm này tạo ra
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(_build_formatter(settings))
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    logging.getLogger("uvicorn.access").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)
    # SQL echo được điều khiển bởi DB_ECHO, không phải LOG_LEVEL
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )
