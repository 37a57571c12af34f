"""全局异常处理器

把请求校验失败、HTTP 异常和未处理异常统一转换为 ApiError 响应体。
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ymicro.log import get_logger

from .canned_responses import Resp
from .dtos import ApiErrorHelper

logger = get_logger("ymicro.response.handlers")


class RequestValidationFailed(ValueError):
    """请求体或参数未通过校验"""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__("; ".join(errors))


def _format_validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        # 去掉 body/query 等位置前缀
        loc_parts = [str(loc) for loc in error["loc"] if loc not in ("body", "query", "path", "header", "cookie")]
        field = ".".join(loc_parts) if loc_parts else "body"
        errors.append(f"{field}: {error['msg']}")
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求校验失败 → 400"""
    errors = _format_validation_errors(exc)
    logger.warning(
        f"请求参数校验失败: {request.method} {request.url.path} {errors}",
    )
    return Resp.BadRequest(RequestValidationFailed(errors)).respond()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTP 异常（路由不存在、方法不允许等）"""
    if exc.status_code >= 500:
        logger.error(f"HTTP 异常: {exc.status_code} - {exc.detail}")
    else:
        logger.warning(f"HTTP 异常: {exc.status_code} - {exc.detail}")

    try:
        description = HTTPStatus(exc.status_code).phrase
    except ValueError:
        description = str(exc.status_code)

    response = ApiErrorHelper(
        status=exc.status_code,
        description=description,
        error=Exception(str(exc.detail)),
    ).respond()
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """未处理异常 → 500，完整堆栈只写入日志"""
    logger.exception(f"未处理的异常: {request.method} {request.url.path}: {exc!r}")
    return Resp.InternalServerError(exc).respond()


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器

    使用示例:
        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
