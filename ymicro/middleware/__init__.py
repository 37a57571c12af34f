"""中间件模块

全部为纯 ASGI 中间件：
- RequestIDMiddleware: 请求ID（X-Request-ID 响应头）
- RequestLoggingMiddleware: 请求日志
- JWTClaimsMiddleware: 解析 JWT 声明
- DatabaseContextMiddleware: 创建携带连接池句柄的请求上下文
"""

from .request_id import RequestIDMiddleware, get_request_id
from .request_logging import RequestLoggingMiddleware
from .jwt_claims import JWTClaimsMiddleware, InvalidAuthorizationHeader
from .database_context import DatabaseContextMiddleware

__all__ = [
    "RequestIDMiddleware",
    "get_request_id",
    "RequestLoggingMiddleware",
    "JWTClaimsMiddleware",
    "InvalidAuthorizationHeader",
    "DatabaseContextMiddleware",
]
