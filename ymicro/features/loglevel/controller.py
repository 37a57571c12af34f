"""日志级别控制器

路由:
    GET  /api/v1/config/log-level   查询当前日志级别
    POST /api/v1/config/log-level   调整日志级别
"""

from typing import Optional

from fastapi import APIRouter, FastAPI, Response, status

from ymicro.log import get_logger
from ymicro.response import ApiError, Resp

from .dtos import ChangeLogLevelRequest, LogLevelResponse
from .logic import Core, CoreLogic

logger = get_logger("ymicro.features.loglevel")


class LogLevelController:
    def __init__(self, core: Optional[Core] = None):
        self.core = core or CoreLogic()

    def attach_routes(self, app: FastAPI) -> None:
        router = APIRouter(prefix="/api/v1/config", tags=["config"])
        router.add_api_route(
            "/log-level",
            self.get_log_level,
            methods=["GET"],
            response_model=LogLevelResponse,
            summary="查询日志级别",
        )
        router.add_api_route(
            "/log-level",
            self.adjust_log_level,
            methods=["POST"],
            status_code=status.HTTP_200_OK,
            response_class=Response,
            summary="调整日志级别",
            responses={400: {"model": ApiError, "description": "日志级别无效"}},
        )
        app.include_router(router)

    def get_log_level(self) -> LogLevelResponse:
        return LogLevelResponse(level=self.core.get_log_level())

    def adjust_log_level(self, body: ChangeLogLevelRequest):
        try:
            self.core.set_log_level(body.new_level)
        except ValueError as e:
            logger.error(f"日志级别已通过校验，但调整失败: {e}")
            return Resp.InternalServerError(e).respond()
        return Response(status_code=status.HTTP_200_OK)
