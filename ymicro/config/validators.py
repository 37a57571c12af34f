"""配置取值校验函数

每个工厂函数返回一个校验函数，取值不合法时抛出 ValueError。
"""

import ipaddress
import re
from typing import Callable

# RFC 1123 主机名
_HOSTNAME_PATTERN = re.compile(
    r"^(?=.{1,253}$)([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def one_of(*allowed: str, message: str = None) -> Callable[[str], None]:
    """取值必须是给定集合之一"""
    def validate(value: str) -> None:
        if value not in allowed:
            raise ValueError(message or f"value must be one of {', '.join(allowed)}")
    return validate


def is_int(message: str = None) -> Callable[[str], None]:
    """取值必须是整数"""
    def validate(value: str) -> None:
        try:
            int(value)
        except (TypeError, ValueError):
            raise ValueError(message or "must be a valid integer") from None
    return validate


def is_port(message: str = None) -> Callable[[str], None]:
    """取值必须是合法端口号（1-65535）"""
    def validate(value: str) -> None:
        try:
            port = int(value)
        except (TypeError, ValueError):
            raise ValueError(message or "must be a valid port number") from None
        if not 1 <= port <= 65535:
            raise ValueError(message or "must be a valid port number")
    return validate


def is_host(message: str = None) -> Callable[[str], None]:
    """取值必须是合法主机名或 IP 地址"""
    def validate(value: str) -> None:
        try:
            ipaddress.ip_address(value)
            return
        except ValueError:
            pass
        if not _HOSTNAME_PATTERN.match(value or ""):
            raise ValueError(message or "must be a valid IP address or hostname")
    return validate
