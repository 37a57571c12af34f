"""数据库上下文中间件

为每个请求创建请求上下文并挂载共享的连接池句柄，
处理函数通过 get_request_context 依赖取得该上下文。
"""

from ymicro.database import PooledConnection, attach_connection
from ymicro.request import REQUEST_CONTEXT_STATE_KEY, RequestContext


class DatabaseContextMiddleware:
    """数据库上下文中间件（纯 ASGI 实现）

    使用示例:
        app.add_middleware(DatabaseContextMiddleware, connection=connection)

        @app.get("/items")
        def list_items(ctx: RequestContext = Depends(get_request_context)):
            handle = retrieve_from_context(ctx)
            ...
    """

    def __init__(self, app, connection: PooledConnection):
        self.app = app
        self.connection = connection

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        ctx = state.get(REQUEST_CONTEXT_STATE_KEY) or RequestContext.background()
        state[REQUEST_CONTEXT_STATE_KEY] = attach_connection(ctx, self.connection)
        await self.app(scope, receive, send)
