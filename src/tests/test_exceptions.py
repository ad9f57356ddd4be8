"""异常类单元测试"""

from http_middleware.core.exceptions import (
    ClientError,
    HttpStatusError,
    InvalidBodyError,
    RequestTimeoutError,
    ResponseDataError,
    UrlFormatError,
)


class TestClientError:
    """ClientError 测试类"""

    def test_basic_message(self):
        """测试基本消息"""
        error = ClientError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.url is None

    def test_with_url(self):
        """测试带 URL"""
        error = ClientError("Test error", url="http://example.com")
        assert error.url == "http://example.com"


class TestInvalidBodyError:
    """InvalidBodyError 测试类"""

    def test_names_body(self):
        """测试消息包含请求体"""
        error = InvalidBodyError(42)
        assert error.body == 42
        assert str(error) == 'Invalid request body "42".'

    def test_inheritance(self):
        """测试继承关系"""
        error = InvalidBodyError(object())
        assert isinstance(error, ClientError)
        assert isinstance(error, TypeError)


class TestUrlFormatError:
    """UrlFormatError 测试类"""

    def test_inheritance(self):
        """测试继承关系"""
        error = UrlFormatError("bad url", url="http://[::1")
        assert isinstance(error, ValueError)
        assert error.url == "http://[::1"


class TestRequestTimeoutError:
    """RequestTimeoutError 测试类"""

    def test_with_timeout(self):
        """测试带超时时长"""
        error = RequestTimeoutError("timed out", url="http://example.com", timeout=1.5)
        assert error.timeout == 1.5
        assert isinstance(error, TimeoutError)


class TestHttpStatusError:
    """HttpStatusError 测试类"""

    def test_with_status(self):
        """测试带状态码和原因短语"""
        error = HttpStatusError(
            "failed", url="http://example.com", status_code=404, reason_phrase="Not Found"
        )
        assert error.status_code == 404
        assert error.reason_phrase == "Not Found"
        assert isinstance(error, ClientError)


class TestResponseDataError:
    """ResponseDataError 测试类"""

    def test_field_name(self):
        """测试缺失字段"""
        error = ResponseDataError("status_code", url="http://example.com")
        assert error.field_name == "status_code"
        assert "status_code" in str(error)
