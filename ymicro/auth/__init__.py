"""认证模块

- RawJWTClaims / CustomClaims: JWT 原始声明与整理后的声明
- decode_claims: 使用 python-jose 解析（可选验签）令牌
- retrieve_auth_claims: 取出中间件解析出的当前请求声明
"""

from .claims import (
    RegisteredClaims,
    CustomClaims,
    RawJWTClaims,
    decode_claims,
    mock_custom_claims,
)
from .extract import AUTH_CLAIMS_STATE_KEY, retrieve_auth_claims

__all__ = [
    "RegisteredClaims",
    "CustomClaims",
    "RawJWTClaims",
    "decode_claims",
    "mock_custom_claims",
    "AUTH_CLAIMS_STATE_KEY",
    "retrieve_auth_claims",
]
