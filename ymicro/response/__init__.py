"""响应模块

- ApiError / ApiErrorHelper: 统一错误响应体 {description, detail}
- Resp: 预置错误响应快捷类
- non_null_list: 保证列表字段序列化为 []
- register_exception_handlers: 全局异常处理器

使用示例:
    from ymicro.response import Resp

    return Resp.Conflict(error).respond()
"""

from .dtos import ApiError, ApiErrorHelper
from .canned_responses import (
    ErrorResponse,
    Resp,
    BadRequest,
    Unauthorized,
    Forbidden,
    NotFound,
    Conflict,
    InternalServerError,
    non_null_list,
)
from .handlers import (
    RequestValidationFailed,
    register_exception_handlers,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler,
)

__all__ = [
    "ApiError",
    "ApiErrorHelper",
    "ErrorResponse",
    "Resp",
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "Conflict",
    "InternalServerError",
    "non_null_list",
    "RequestValidationFailed",
    "register_exception_handlers",
    "validation_exception_handler",
    "http_exception_handler",
    "general_exception_handler",
]
