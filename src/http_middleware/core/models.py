"""核心数据模型

请求/响应快照，供中间件读取（请求快照可被中间件修改）。
"""

import base64
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

import requests
from requests.structures import CaseInsensitiveDict

from http_middleware.core.exceptions import InvalidBodyError, ResponseDataError


class HttpMethod(Enum):
    """HTTP 方法枚举"""

    HEAD = "HEAD"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def from_string(cls, method: str) -> "HttpMethod":
        """从字符串解析 HTTP 方法（不区分大小写）"""
        try:
            return cls(method.upper())
        except (ValueError, AttributeError):
            raise ValueError(f"Unsupported HTTP method: {method!r}") from None


class BodyKind(Enum):
    """请求体类型"""

    NONE = "none"
    TEXT = "text"
    BYTES = "bytes"
    FIELDS = "fields"


@dataclass(frozen=True)
class RequestBody:
    """请求体（带类型标签）"""

    kind: BodyKind = BodyKind.NONE
    value: Any = None

    @classmethod
    def from_value(cls, value: Any) -> "RequestBody":
        """按运行时类型识别请求体

        支持 None、str、字节序列（bytes/bytearray/memoryview/整数列表）
        以及 str -> str 的表单字段映射。

        Raises:
            InvalidBodyError: 不支持的请求体
        """
        if value is None:
            return cls()
        if isinstance(value, str):
            return cls(BodyKind.TEXT, value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(BodyKind.BYTES, bytes(value))
        if isinstance(value, list):
            try:
                return cls(BodyKind.BYTES, bytes(value))
            except (TypeError, ValueError) as e:
                raise InvalidBodyError(value) from e
        if isinstance(value, Mapping):
            if not all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
                raise InvalidBodyError(value)
            return cls(BodyKind.FIELDS, dict(value))

        raise InvalidBodyError(value)

    def to_dict(self) -> dict:
        """转换为字典（用于序列化）"""
        value = self.value
        if self.kind is BodyKind.BYTES:
            value = base64.b64encode(value).decode("ascii")
        return {"kind": self.kind.value, "value": value}


@dataclass
class RequestData:
    """发出请求的快照

    中间件可以原地修改；传输层请求在请求拦截完成后据此生成。
    body 可替换为 RequestBody 或 str、bytes、表单字典等原始值。
    """

    method: HttpMethod
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: RequestBody = field(default_factory=RequestBody)
    encoding: Optional[str] = None

    def request_body(self) -> RequestBody:
        """返回带类型标签的请求体（兼容被中间件替换为原始值的情况）"""
        if isinstance(self.body, RequestBody):
            return self.body
        return RequestBody.from_value(self.body)

    def to_dict(self) -> dict:
        """转换为字典（用于序列化）"""
        return {
            "method": self.method.value,
            "url": self.url,
            "headers": dict(self.headers),
            "body": self.request_body().to_dict(),
            "encoding": self.encoding,
        }


class InterceptedResponse(requests.Response):
    """经过中间件处理后返回给调用方的响应

    保留原响应的重定向与长连接标志。
    """

    __attrs__ = [*requests.Response.__attrs__, "persistent_connection", "_is_redirect"]

    def __init__(self):
        super().__init__()
        self.persistent_connection = True
        self._is_redirect = False

    @property
    def is_redirect(self) -> bool:
        return self._is_redirect


def is_persistent_connection(response: requests.Response) -> bool:
    """根据 Connection 头和 HTTP 版本判断是否为长连接"""
    connection = response.headers.get("Connection", "").lower()
    if "close" in connection:
        return False
    if "keep-alive" in connection:
        return True

    # urllib3 的版本号: 10 = HTTP/1.0, 11 = HTTP/1.1
    version = getattr(response.raw, "version", None)
    return version is None or version >= 11


@dataclass(frozen=True)
class ResponseData:
    """收到响应的快照"""

    status_code: int
    body: str
    body_bytes: bytes
    headers: Mapping[str, str]
    is_redirect: bool
    persistent_connection: bool
    method: HttpMethod
    url: str
    reason_phrase: Optional[str] = None
    encoding: Optional[str] = None

    def __post_init__(self):
        if self.status_code < 0:
            raise ValueError(f"Invalid status code: {self.status_code}")
        # 响应拦截期间不可修改
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def from_response(cls, response: requests.Response) -> "ResponseData":
        """从已读取完响应体的传输层响应创建快照

        Raises:
            ResponseDataError: 响应缺少必要字段
        """
        request = response.request
        if request is None or not request.method:
            raise ResponseDataError("request", response.url)
        url = request.url or response.url
        if not url:
            raise ResponseDataError("url")
        if response.status_code is None:
            raise ResponseDataError("status_code", url)

        return cls(
            status_code=response.status_code,
            body=response.text,
            body_bytes=response.content,
            headers=dict(response.headers),
            is_redirect=response.is_redirect,
            persistent_connection=is_persistent_connection(response),
            method=HttpMethod.from_string(request.method),
            url=url,
            reason_phrase=response.reason,
            encoding=response.encoding,
        )

    def to_response(self) -> InterceptedResponse:
        """重建返回给调用方的响应"""
        response = InterceptedResponse()
        response.status_code = self.status_code
        response.reason = self.reason_phrase
        response.headers = CaseInsensitiveDict(self.headers)
        response._content = self.body_bytes
        response.encoding = self.encoding
        response.url = self.url
        response.persistent_connection = self.persistent_connection
        response._is_redirect = self.is_redirect
        response.request = requests.Request(self.method.value, self.url).prepare()
        return response

    def to_dict(self) -> dict:
        """转换为字典（用于序列化）"""
        return {
            "status_code": self.status_code,
            "reason_phrase": self.reason_phrase,
            "body": self.body,
            "body_bytes": base64.b64encode(self.body_bytes).decode("ascii"),
            "headers": dict(self.headers),
            "is_redirect": self.is_redirect,
            "persistent_connection": self.persistent_connection,
            "method": self.method.value,
            "url": self.url,
            "encoding": self.encoding,
        }
