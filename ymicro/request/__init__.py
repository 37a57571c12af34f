"""请求上下文模块

- RequestContext: 不可变的链式键值上下文，沿调用链显式传递
- get_request_context: FastAPI 依赖，取出中间件创建的请求上下文
- testhelper: 模拟请求上下文（事务处理在其中被跳过）
"""

from .context import ContextKey, RequestContext
from .dependencies import REQUEST_CONTEXT_STATE_KEY, get_request_context
from .testhelper import is_mock_context, mark_mock_context, new_mock_context

__all__ = [
    "ContextKey",
    "RequestContext",
    "REQUEST_CONTEXT_STATE_KEY",
    "get_request_context",
    "is_mock_context",
    "mark_mock_context",
    "new_mock_context",
]
