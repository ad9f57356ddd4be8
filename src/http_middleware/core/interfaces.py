"""核心接口定义

使用 Protocol 定义接口，支持鸭子类型和依赖注入。
"""

from typing import Any, Protocol, runtime_checkable

import requests

from http_middleware.core.models import RequestData, ResponseData


@runtime_checkable
class MiddlewareContract(Protocol):
    """中间件接口

    两个方法均按注册顺序同步调用，返回值被忽略。
    """

    def intercept_request(self, data: RequestData) -> None:
        """请求发出前调用"""
        ...

    def intercept_response(self, data: ResponseData) -> None:
        """成功收到响应后调用"""
        ...


@runtime_checkable
class Transport(Protocol):
    """传输层接口（requests.Session 满足此接口）"""

    def prepare_request(self, request: requests.Request) -> requests.PreparedRequest:
        """合并默认设置并生成可发送的请求"""
        ...

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        """发送请求并返回响应"""
        ...

    def close(self) -> None:
        """释放连接"""
        ...
