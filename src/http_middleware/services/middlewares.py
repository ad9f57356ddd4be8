"""常用中间件"""

import logging

from http_middleware.core.models import RequestData, ResponseData


class LoggingMiddleware:
    """记录每次请求和响应"""

    def __init__(self, level: int = logging.INFO, log_body: bool = False):
        """初始化日志中间件

        Args:
            level: 日志级别
            log_body: 是否记录请求体和响应体
        """
        self.level = level
        self.log_body = log_body

    def intercept_request(self, data: RequestData) -> None:
        logging.log(self.level, f"--> {data.method.value} {data.url}")
        body = data.request_body().value
        if self.log_body and body is not None:
            logging.log(self.level, f"Request body: {body!r}")

    def intercept_response(self, data: ResponseData) -> None:
        logging.log(
            self.level,
            f"<-- {data.status_code} {data.method.value} {data.url} "
            f"({len(data.body_bytes)} bytes)",
        )
        if self.log_body:
            logging.log(self.level, f"Response body: {data.body}")


class HeadersMiddleware:
    """为每个请求补充固定请求头（不覆盖已有的同名请求头）"""

    def __init__(self, headers: dict[str, str]):
        self.headers = dict(headers)

    def intercept_request(self, data: RequestData) -> None:
        existing = {name.lower() for name in data.headers}
        for name, value in self.headers.items():
            if name.lower() not in existing:
                data.headers[name] = value

    def intercept_response(self, data: ResponseData) -> None:
        pass
