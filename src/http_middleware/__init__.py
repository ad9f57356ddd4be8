"""http_middleware - 支持中间件的 HTTP 客户端

在 requests.Session 外包装一条按注册顺序调用的拦截器链。
"""

from http_middleware.config.settings import ClientConfig
from http_middleware.core.exceptions import (
    ClientError,
    HttpStatusError,
    InvalidBodyError,
    RequestTimeoutError,
    ResponseDataError,
    UrlFormatError,
)
from http_middleware.core.interfaces import MiddlewareContract, Transport
from http_middleware.core.models import (
    BodyKind,
    HttpMethod,
    InterceptedResponse,
    RequestBody,
    RequestData,
    ResponseData,
)
from http_middleware.services.http_service import InterceptingClient
from http_middleware.services.middlewares import HeadersMiddleware, LoggingMiddleware
from http_middleware.utils.logging_config import setup_logging

__all__ = [
    "BodyKind",
    "ClientConfig",
    "ClientError",
    "HeadersMiddleware",
    "HttpMethod",
    "HttpStatusError",
    "InterceptedResponse",
    "InterceptingClient",
    "InvalidBodyError",
    "LoggingMiddleware",
    "MiddlewareContract",
    "RequestBody",
    "RequestData",
    "RequestTimeoutError",
    "ResponseData",
    "ResponseDataError",
    "Transport",
    "UrlFormatError",
    "setup_logging",
]
