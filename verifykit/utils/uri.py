"""
URI 格式檢查
判斷字串是否為格式正確的 URI reference（絕對或相對，RFC 3986 / RFC 3987）。
"""

import re
from urllib.parse import urlsplit

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
# RFC 3986 允許的 ASCII 字元（unreserved + reserved + '%'）；> 0x7F 的字元依 RFC 3987 視為合法
_ALLOWED_ASCII = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*$")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _ascii_part(value: str) -> str:
    return "".join(ch for ch in value if ord(ch) < 0x80)


def is_well_formed_uri(value: str) -> bool:
    """
    是否為格式正確的 URI reference。

    >>> is_well_formed_uri("http://x.com")
    True
    >>> is_well_formed_uri("../images/logo.png")
    True
    >>> is_well_formed_uri("not a url ://")
    False
    """
    if value is None:
        return False

    if not _ALLOWED_ASCII.match(_ascii_part(value)):
        return False

    if _BAD_ESCAPE.search(value):
        return False

    if value.count("#") > 1:
        return False

    # 第一個 "/?#" 之前出現 ":" 代表有 scheme，scheme 本身必須合法
    head = re.split(r"[/?#]", value, maxsplit=1)[0]
    if ":" in head:
        scheme = head.split(":", 1)[0]
        if not _SCHEME.match(scheme):
            return False

    try:
        parts = urlsplit(value)
        # port 非數字 / 超出範圍時拋出 ValueError
        parts.port
    except ValueError:
        return False

    # "[" "]" 只能出現在 IPv6 host
    rest = value.replace(parts.netloc, "", 1) if parts.netloc else value
    if "[" in rest or "]" in rest:
        return False

    if parts.scheme and not (parts.netloc or parts.path or parts.query or parts.fragment):
        return False

    return True
