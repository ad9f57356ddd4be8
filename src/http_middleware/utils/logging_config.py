"""日志配置模块"""

import logging
from typing import Optional

from http_middleware.config.settings import ClientConfig

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Optional[str] = None, fmt: Optional[str] = None
) -> logging.Logger:
    """配置日志系统

    Args:
        level: 日志级别（DEBUG, INFO, WARNING, ERROR, CRITICAL），
            默认取 ClientConfig.log_level
        fmt: 日志格式（可选）

    Returns:
        根日志记录器
    """
    if level is None:
        level = ClientConfig().log_level
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 清除现有的处理器
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        fmt=fmt or DEFAULT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    return root_logger
