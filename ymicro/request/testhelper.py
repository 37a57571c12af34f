"""测试辅助：模拟请求上下文

被标记为模拟的上下文会让事务函数跳过真实的事务处理，
从而可以在没有数据库的情况下测试控制器。

使用示例:
    from ymicro.request.testhelper import new_mock_context

    app.dependency_overrides[get_request_context] = lambda: new_mock_context()
"""

from typing import Optional

from .context import ContextKey, RequestContext

_MOCK_REQUEST_KEY = ContextKey("request.mock")


def mark_mock_context(ctx: RequestContext) -> RequestContext:
    """派生一个标记为模拟请求的上下文"""
    return ctx.with_value(_MOCK_REQUEST_KEY, True)


def is_mock_context(ctx: RequestContext) -> bool:
    """判断上下文是否来自模拟请求"""
    return ctx.value(_MOCK_REQUEST_KEY) is not None


def new_mock_context(parent: Optional[RequestContext] = None) -> RequestContext:
    """创建模拟请求上下文，默认以空的根上下文为父"""
    return mark_mock_context(parent if parent is not None else RequestContext.background())
