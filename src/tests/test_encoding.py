"""编码工具单元测试"""

from urllib.parse import parse_qsl

import pytest
from requests.structures import CaseInsensitiveDict
from urllib3.util import parse_url as urllib3_parse_url

from http_middleware.core.exceptions import UrlFormatError
from http_middleware.core.models import RequestBody
from http_middleware.utils.encoding import encode_body, normalize_encoding, parse_url


class TestParseUrl:
    """parse_url 测试类"""

    def test_parse_string(self):
        """测试解析字符串"""
        url = parse_url("https://example.com/path?q=1")
        assert url.scheme == "https"
        assert url.host == "example.com"
        assert url.path == "/path"
        assert url.query == "q=1"

    def test_parsed_url_passthrough(self):
        """测试已解析的 Url 原样返回"""
        parsed = urllib3_parse_url("http://example.com/a")
        assert parse_url(parsed) is parsed

    def test_invalid_port(self):
        """测试非法端口"""
        with pytest.raises(UrlFormatError):
            parse_url("http://example.com:99999/")

    def test_relative_url(self):
        """测试缺少 scheme 的地址"""
        with pytest.raises(UrlFormatError, match="absolute"):
            parse_url("example.com/path")

    def test_non_string(self):
        """测试非字符串参数"""
        with pytest.raises(UrlFormatError):
            parse_url(42)

    def test_is_value_error(self):
        """测试 UrlFormatError 同时是 ValueError"""
        with pytest.raises(ValueError):
            parse_url("/only/path")


class TestNormalizeEncoding:
    """normalize_encoding 测试类"""

    def test_none(self):
        assert normalize_encoding(None) is None

    def test_alias(self):
        """测试编码别名规范化"""
        assert normalize_encoding("UTF8") == "utf-8"

    def test_unknown(self):
        """测试未知编码"""
        with pytest.raises(ValueError, match="no-such-codec"):
            normalize_encoding("no-such-codec")


class TestEncodeBody:
    """encode_body 测试类"""

    def test_none(self):
        """测试空请求体"""
        headers = CaseInsensitiveDict()
        assert encode_body(RequestBody.from_value(None), headers) is None
        assert "Content-Type" not in headers

    def test_text_default_encoding(self):
        """测试字符串请求体默认使用 utf-8"""
        headers = CaseInsensitiveDict()
        content = encode_body(RequestBody.from_value("héllo"), headers)
        assert content == "héllo".encode("utf-8")
        assert headers["content-type"] == "text/plain; charset=utf-8"

    def test_text_custom_encoding(self):
        """测试字符串请求体使用指定编码"""
        headers = CaseInsensitiveDict()
        content = encode_body(RequestBody.from_value("héllo"), headers, "latin-1")
        assert content == "héllo".encode("latin-1")
        assert headers["Content-Type"] == "text/plain; charset=latin-1"

    def test_text_keeps_content_type(self):
        """测试不覆盖已有的 Content-Type"""
        headers = CaseInsensitiveDict({"content-type": "application/json"})
        encode_body(RequestBody.from_value('{"a": 1}'), headers)
        assert headers["Content-Type"] == "application/json"

    def test_bytes(self):
        """测试字节请求体原样发送"""
        headers = CaseInsensitiveDict()
        content = encode_body(RequestBody.from_value(b"\x00\xff"), headers)
        assert content == b"\x00\xff"
        assert "Content-Type" not in headers

    def test_fields(self):
        """测试表单字段编码"""
        headers = CaseInsensitiveDict()
        fields = {"name": "张三", "q": "a b&c"}
        content = encode_body(RequestBody.from_value(fields), headers)
        assert dict(parse_qsl(content.decode("utf-8"))) == fields
        assert headers["Content-Type"].startswith("application/x-www-form-urlencoded")
