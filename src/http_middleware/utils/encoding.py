"""请求编码工具

URL 解析、文本编码名称规范化，以及按请求体类型生成传输层请求体。
"""

import codecs
from typing import Optional, Union
from urllib.parse import urlencode

from requests.structures import CaseInsensitiveDict
from urllib3.exceptions import LocationParseError
from urllib3.util import Url
from urllib3.util import parse_url as _parse_url

from http_middleware.core.exceptions import UrlFormatError
from http_middleware.core.models import BodyKind, RequestBody

DEFAULT_ENCODING = "utf-8"


def parse_url(url: Union[str, Url]) -> Url:
    """解析 URL，只接受带 scheme 和 host 的绝对地址

    Args:
        url: 已解析的 Url 或 URL 字符串

    Returns:
        Url 实例

    Raises:
        UrlFormatError: URL 格式错误
    """
    if isinstance(url, Url):
        parsed = url
    elif isinstance(url, str):
        try:
            parsed = _parse_url(url)
        except LocationParseError as e:
            raise UrlFormatError(f"Invalid URL: {url}", url) from e
    else:
        raise UrlFormatError(f"Invalid URL: {url!r}")

    if not parsed.scheme or not parsed.host:
        raise UrlFormatError(f"URL must be absolute: {url}", str(url))
    return parsed


def normalize_encoding(encoding: Optional[str]) -> Optional[str]:
    """规范化编码名称，未知编码抛出 ValueError"""
    if encoding is None:
        return None
    try:
        return codecs.lookup(encoding).name
    except LookupError as e:
        raise ValueError(f"Unknown encoding: {encoding}") from e


def encode_body(
    body: RequestBody,
    headers: CaseInsensitiveDict,
    encoding: Optional[str] = None,
) -> Optional[bytes]:
    """按请求体类型编码，必要时补充 Content-Type

    Args:
        body: 请求体
        headers: 传输层请求头（会被原地修改）
        encoding: 文本编码（默认 utf-8）

    Returns:
        编码后的字节，无请求体时返回 None
    """
    charset = encoding or DEFAULT_ENCODING

    if body.kind is BodyKind.NONE:
        return None
    if body.kind is BodyKind.TEXT:
        headers.setdefault("Content-Type", f"text/plain; charset={charset}")
        return body.value.encode(charset)
    if body.kind is BodyKind.BYTES:
        return bytes(body.value)
    if body.kind is BodyKind.FIELDS:
        headers.setdefault(
            "Content-Type", f"application/x-www-form-urlencoded; charset={charset}"
        )
        return urlencode(body.value, encoding=charset).encode(charset)

    raise ValueError(f"Unhandled body kind: {body.kind}")
