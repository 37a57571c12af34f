from typing import Optional

from fastapi import Request

from .claims import CustomClaims

# JWT 中间件把声明放在 scope["state"] 的这个键下
AUTH_CLAIMS_STATE_KEY = "user"


def retrieve_auth_claims(request: Request) -> Optional[CustomClaims]:
    """取出当前请求的 JWT 声明，请求未携带令牌时返回 None

    可直接作为 FastAPI 依赖使用:
        def handler(claims: Optional[CustomClaims] = Depends(retrieve_auth_claims)):
            ...
    """
    return getattr(request.state, AUTH_CLAIMS_STATE_KEY, None)
