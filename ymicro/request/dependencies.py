"""FastAPI 依赖：获取请求上下文"""

from fastapi import Request

from .context import RequestContext

# 中间件把请求上下文放在 scope["state"] 的这个键下
REQUEST_CONTEXT_STATE_KEY = "request_context"


def get_request_context(request: Request) -> RequestContext:
    """从请求中取出请求上下文

    中间件未安装时返回空的根上下文；此时解析数据库句柄会立即失败，
    从而暴露装配问题。

    使用示例:
        @router.get("/items")
        def list_items(ctx: RequestContext = Depends(get_request_context)):
            ...
    """
    ctx = getattr(request.state, REQUEST_CONTEXT_STATE_KEY, None)
    if ctx is None:
        return RequestContext.background()
    return ctx
