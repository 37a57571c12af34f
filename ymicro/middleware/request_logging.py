"""请求日志记录中间件"""

import logging
import time
from typing import Optional, Set

from ymicro.auth import AUTH_CLAIMS_STATE_KEY
from ymicro.log import get_logger

_default_logger = get_logger("ymicro.middleware.request_logging")


class RequestLoggingMiddleware:
    """纯 ASGI 请求日志记录中间件

    请求结束后记录一条 info 日志：方法、路径、状态码、耗时、客户端地址、
    User-Agent，请求带有 JWT 声明时附带用户名。

    使用示例:
        app.add_middleware(RequestLoggingMiddleware, skip_paths={"/health"})
    """

    def __init__(self, app, skip_paths: Optional[Set[str]] = None, logger: logging.Logger = None):
        self.app = app
        self.skip_paths = skip_paths or set()
        self.logger = logger or _default_logger

    def _should_skip(self, path: str) -> bool:
        return any(path.startswith(skip_path) for skip_path in self.skip_paths)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or self._should_skip(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            latency_ms = (time.perf_counter() - start_time) * 1000
            self.logger.info(self._format(scope, status_code, latency_ms))

    @staticmethod
    def _format(scope, status_code: int, latency_ms: float) -> str:
        headers = {name.decode("latin-1"): value.decode("latin-1") for name, value in scope.get("headers", [])}
        client = scope.get("client")
        remote_ip = client[0] if client else "-"
        state = scope.get("state", {})

        parts = [
            f"{scope.get('method')} {scope.get('path')}",
            f"status={status_code}",
            f"latency={latency_ms:.2f}ms",
            f"remote_ip={remote_ip}",
            f"host={headers.get('host', '-')}",
            f"user_agent={headers.get('user-agent', '-')}",
            f"request_id={state.get('request_id', '-')}",
        ]
        claims = state.get(AUTH_CLAIMS_STATE_KEY)
        if claims is not None:
            parts.append(f"requester={claims.preferred_username}")
        return "request info: " + " ".join(parts)
