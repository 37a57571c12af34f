"""JWT 声明中间件

解析 Authorization: Bearer 令牌，把 CustomClaims 放到 scope["state"]["user"]，
处理函数通过 retrieve_auth_claims 取出。未携带令牌的请求直接放行。
"""

from typing import Iterable, Optional, Sequence

from jose import JWTError
from pydantic import ValidationError
from starlette.requests import Request

from ymicro.auth import AUTH_CLAIMS_STATE_KEY, decode_claims
from ymicro.log import get_logger
from ymicro.response import Resp

logger = get_logger("ymicro.middleware.jwt_claims")


class InvalidAuthorizationHeader(ValueError):
    """Authorization 头不是 Bearer 令牌"""
    pass


class JWTClaimsMiddleware:
    """JWT 声明中间件（纯 ASGI 实现）

    Args:
        app: ASGI 应用
        verification_key: 验签密钥，None 表示只解析不验签
        algorithms: 允许的签名算法
        skip_paths: 不解析令牌的路径前缀

    使用示例:
        app.add_middleware(
            JWTClaimsMiddleware,
            verification_key=key,
            algorithms=["RS256"],
        )
    """

    DEFAULT_SKIP_PATHS = ("/docs", "/redoc", "/openapi.json")

    def __init__(
        self,
        app,
        verification_key: Optional[str] = None,
        algorithms: Sequence[str] = ("HS256",),
        skip_paths: Optional[Iterable[str]] = None,
    ):
        self.app = app
        self.verification_key = verification_key
        self.algorithms = list(algorithms)
        self.skip_paths = tuple(skip_paths) if skip_paths is not None else self.DEFAULT_SKIP_PATHS

    def _should_skip(self, path: str) -> bool:
        return any(path.startswith(skip_path) for skip_path in self.skip_paths)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or self._should_skip(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        authorization = Request(scope).headers.get("authorization")
        if not authorization:
            await self.app(scope, receive, send)
            return

        try:
            token = _bearer_token(authorization)
            claims = decode_claims(token, self.verification_key, self.algorithms)
        except (InvalidAuthorizationHeader, JWTError, ValidationError) as e:
            logger.warning(f"JWT 解析失败: {scope.get('method')} {scope.get('path')}: {e}")
            response = Resp.Unauthorized(e).respond()
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})[AUTH_CLAIMS_STATE_KEY] = claims
        await self.app(scope, receive, send)


def _bearer_token(authorization: str) -> str:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidAuthorizationHeader("Authorization 头必须是 Bearer 令牌")
    return token.strip()
