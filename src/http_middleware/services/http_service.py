"""拦截式 HTTP 服务

在传输层客户端（requests.Session）外包装一条中间件链：
请求发出前和响应返回后，按注册顺序依次调用每个中间件。
"""

import logging
import threading
from datetime import timedelta
from typing import Any, Iterable, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict
from urllib3.util import Url

from http_middleware.config.settings import ClientConfig
from http_middleware.core.exceptions import (
    HttpStatusError,
    RequestTimeoutError,
    UrlFormatError,
)
from http_middleware.core.interfaces import MiddlewareContract, Transport
from http_middleware.core.models import (
    HttpMethod,
    InterceptedResponse,
    RequestBody,
    RequestData,
    ResponseData,
)
from http_middleware.utils.encoding import encode_body, normalize_encoding, parse_url

UrlLike = Union[str, Url]
HeadersLike = Optional[dict[str, str]]


def _to_seconds(timeout: Union[int, float, timedelta, None]) -> Optional[float]:
    """将超时时长统一为秒"""
    if timeout is None:
        return None
    if isinstance(timeout, timedelta):
        timeout = timeout.total_seconds()
    if timeout <= 0:
        raise ValueError(f"Request timeout must be positive: {timeout}")
    return float(timeout)


def _create_session(config: ClientConfig) -> requests.Session:
    """创建 HTTP 会话"""
    session = requests.Session()
    session.verify = config.verify_ssl
    if config.user_agent:
        session.headers["User-Agent"] = config.user_agent
    return session


class InterceptingClient:
    """支持中间件的 HTTP 客户端

    Example:
        client = InterceptingClient.build(middlewares=[LoggingMiddleware()])
        client.get("https://example.com")
        client.post("https://example.com", body={"name": "value"})
        client.close()

    通过 send() 发送的请求直接交给传输层，不经过中间件。
    """

    def __init__(
        self,
        session: Transport,
        middlewares: tuple[MiddlewareContract, ...] = (),
        request_timeout: Optional[float] = None,
    ):
        """初始化客户端（通常通过 build() 创建）

        Args:
            session: 传输层客户端
            middlewares: 中间件（按调用顺序）
            request_timeout: 请求超时（秒）
        """
        self.session = session
        self.middlewares = middlewares
        self.request_timeout = request_timeout

    @classmethod
    def build(
        cls,
        middlewares: Optional[Iterable[Optional[MiddlewareContract]]] = None,
        request_timeout: Union[int, float, timedelta, None] = None,
        config: Optional[ClientConfig] = None,
        session: Optional[Transport] = None,
    ) -> "InterceptingClient":
        """创建客户端

        Args:
            middlewares: 中间件列表，None 项会被丢弃
            request_timeout: 请求超时（秒或 timedelta），默认取配置值
            config: 客户端配置
            session: 传输层客户端（默认创建新的 requests.Session）

        Returns:
            客户端实例
        """
        config = config or ClientConfig()
        candidates = list(middlewares or [])
        registered = tuple(m for m in candidates if m is not None)
        if len(registered) != len(candidates):
            logging.debug(
                f"Dropped {len(candidates) - len(registered)} empty middleware entries"
            )

        if request_timeout is None:
            request_timeout = config.request_timeout

        client = cls(
            session=session or _create_session(config),
            middlewares=registered,
            request_timeout=_to_seconds(request_timeout),
        )
        logging.info(
            f"HTTP client built with {len(registered)} middleware(s), "
            f"timeout={client.request_timeout}"
        )
        return client

    def head(self, url: UrlLike, headers: HeadersLike = None) -> InterceptedResponse:
        return self._send_unstreamed(HttpMethod.HEAD, url, headers)

    def get(self, url: UrlLike, headers: HeadersLike = None) -> InterceptedResponse:
        return self._send_unstreamed(HttpMethod.GET, url, headers)

    def post(
        self,
        url: UrlLike,
        headers: HeadersLike = None,
        body: Any = None,
        encoding: Optional[str] = None,
    ) -> InterceptedResponse:
        return self._send_unstreamed(HttpMethod.POST, url, headers, body, encoding)

    def put(
        self,
        url: UrlLike,
        headers: HeadersLike = None,
        body: Any = None,
        encoding: Optional[str] = None,
    ) -> InterceptedResponse:
        return self._send_unstreamed(HttpMethod.PUT, url, headers, body, encoding)

    def patch(
        self,
        url: UrlLike,
        headers: HeadersLike = None,
        body: Any = None,
        encoding: Optional[str] = None,
    ) -> InterceptedResponse:
        return self._send_unstreamed(HttpMethod.PATCH, url, headers, body, encoding)

    def delete(
        self,
        url: UrlLike,
        headers: HeadersLike = None,
        body: Any = None,
        encoding: Optional[str] = None,
    ) -> InterceptedResponse:
        return self._send_unstreamed(HttpMethod.DELETE, url, headers, body, encoding)

    def read(self, url: UrlLike, headers: HeadersLike = None) -> str:
        """发送 GET 请求并返回响应文本

        Raises:
            HttpStatusError: 状态码 >= 400
        """
        response = self.get(url, headers=headers)
        self._check_response_success(url, response)
        return response.text

    def read_bytes(self, url: UrlLike, headers: HeadersLike = None) -> bytes:
        """发送 GET 请求并返回响应字节

        Raises:
            HttpStatusError: 状态码 >= 400
        """
        response = self.get(url, headers=headers)
        self._check_response_success(url, response)
        return response.content

    def send(
        self,
        request: Union[requests.Request, requests.PreparedRequest],
        **kwargs: Any,
    ) -> requests.Response:
        """直接交给传输层发送，不经过中间件"""
        if isinstance(request, requests.Request):
            request = self.session.prepare_request(request)
        return self.session.send(request, **kwargs)

    def close(self) -> None:
        """关闭传输层连接"""
        self.session.close()
        logging.info("HTTP client closed")

    def __enter__(self) -> "InterceptingClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _send_unstreamed(
        self,
        method: HttpMethod,
        url: UrlLike,
        headers: HeadersLike = None,
        body: Any = None,
        encoding: Optional[str] = None,
    ) -> InterceptedResponse:
        parsed_url = parse_url(url)
        data = RequestData(
            method=method,
            url=parsed_url.url,
            headers=dict(headers or {}),
            body=RequestBody.from_value(body),
            encoding=normalize_encoding(encoding),
        )

        for middleware in self.middlewares:
            self._invoke(middleware, middleware.intercept_request, data)

        prepared = self._prepare(data)
        logging.debug(f"--> {prepared.method} {prepared.url}")
        response = self._dispatch(prepared)

        response_data = ResponseData.from_response(response)
        logging.debug(
            f"<-- {response_data.status_code} {prepared.method} {prepared.url}"
        )

        for middleware in self.middlewares:
            self._invoke(middleware, middleware.intercept_response, response_data)

        return response_data.to_response()

    @staticmethod
    def _invoke(middleware: MiddlewareContract, hook, data) -> None:
        """调用中间件钩子，异常记录后继续抛出"""
        try:
            hook(data)
        except Exception as e:
            logging.error(f"Middleware {type(middleware).__name__} failed: {e}")
            raise

    def _prepare(self, data: RequestData) -> requests.PreparedRequest:
        """根据请求快照生成传输层请求"""
        headers = CaseInsensitiveDict(data.headers)
        content = encode_body(data.request_body(), headers, data.encoding)
        request = requests.Request(
            data.method.value, data.url, headers=headers, data=content
        )
        try:
            return self.session.prepare_request(request)
        except (requests.exceptions.MissingSchema, requests.exceptions.InvalidURL) as e:
            raise UrlFormatError(str(e), data.url) from e

    def _transmit(self, prepared: requests.PreparedRequest) -> requests.Response:
        """发送请求并读取完整响应体"""
        response = self.session.send(
            prepared, stream=True, timeout=self.request_timeout
        )
        # 读取响应体，释放连接
        response.content
        return response

    def _transmit_bounded(
        self, prepared: requests.PreparedRequest
    ) -> Optional[requests.Response]:
        """在独立线程中发送，最多等待 request_timeout 秒

        每次请求使用自己的线程，计时从发送开始，互不影响。

        Returns:
            响应；超时返回 None
        """
        outcome: dict[str, Any] = {}
        done = threading.Event()

        def run() -> None:
            try:
                outcome["response"] = self._transmit(prepared)
            except BaseException as e:
                outcome["error"] = e
            finally:
                done.set()

        worker = threading.Thread(
            target=run, name=f"http-dispatch {prepared.method}", daemon=True
        )
        worker.start()
        if not done.wait(self.request_timeout):
            return None
        if "error" in outcome:
            raise outcome["error"]
        return outcome["response"]

    def _dispatch(self, prepared: requests.PreparedRequest) -> requests.Response:
        """发送请求；配置了超时时限制等待时间"""
        error: Optional[Exception] = None
        try:
            if self.request_timeout is None:
                return self._transmit(prepared)
            response = self._transmit_bounded(prepared)
            if response is not None:
                return response
        except requests.Timeout as e:
            error = e

        message = f"Request to {prepared.url} timed out"
        if self.request_timeout is not None:
            message = f"{message} after {self.request_timeout}s"
        logging.warning(message)
        raise RequestTimeoutError(message, prepared.url, self.request_timeout) from error

    def _check_response_success(
        self, url: UrlLike, response: requests.Response
    ) -> None:
        if response.status_code < 400:
            return
        message = f"Request to {url} failed with status {response.status_code}"
        if response.reason:
            message = f"{message}: {response.reason}"
        raise HttpStatusError(
            f"{message}.", str(url), response.status_code, response.reason
        )
