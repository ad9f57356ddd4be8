"""自定义异常类"""


class ClientError(Exception):
    """客户端基础异常"""

    def __init__(self, message: str, url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(message)


class InvalidBodyError(ClientError, TypeError):
    """请求体类型不受支持"""

    def __init__(self, body: object, url: str | None = None):
        self.body = body
        super().__init__(f'Invalid request body "{body!r}".', url)


class UrlFormatError(ClientError, ValueError):
    """URL 格式错误"""


class RequestTimeoutError(ClientError, TimeoutError):
    """请求超时"""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        timeout: float | None = None,
    ):
        self.timeout = timeout
        super().__init__(message, url)


class HttpStatusError(ClientError):
    """HTTP 状态码错误（>= 400）"""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        reason_phrase: str | None = None,
    ):
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        super().__init__(message, url)


class ResponseDataError(ClientError):
    """传输层响应缺少必要字段"""

    def __init__(self, field_name: str, url: str | None = None):
        self.field_name = field_name
        super().__init__(f"Response is missing required field: {field_name}", url)
