"""请求ID中间件

注意：使用纯 ASGI 中间件而非 BaseHTTPMiddleware，
因为 BaseHTTPMiddleware 会在 call_next 时创建新的任务上下文，
导致 ContextVar 的修改无法传播回父上下文。
"""

import uuid
from contextvars import ContextVar

REQUEST_ID_HEADER = b"x-request-id"

_request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware:
    """请求ID中间件（纯 ASGI 实现）

    为每个请求生成唯一ID，写入 X-Request-ID 响应头，用于日志追踪。
    请求已携带 X-Request-ID 时沿用调用方的ID。

    使用示例:
        from fastapi import FastAPI
        from ymicro.middleware import RequestIDMiddleware

        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _incoming_request_id(scope) or uuid.uuid4().hex
        token = _request_id_var.set(request_id)
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode()))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            _request_id_var.reset(token)


def _incoming_request_id(scope) -> str:
    for name, value in scope.get("headers", []):
        if name.lower() == REQUEST_ID_HEADER:
            return value.decode("latin-1")
    return ""


def get_request_id() -> str:
    """当前请求的ID，请求之外返回空字符串"""
    return _request_id_var.get()
