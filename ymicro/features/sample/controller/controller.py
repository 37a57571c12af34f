"""问候示例控制器

路由:
    POST /api/v1/sample/greetings/greet   根据名字生成问候
    POST /api/v1/sample/greetings         添加问候语（事务内执行）
"""

from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Response, status

from ymicro.database import NoConnectionAttachedError, with_transaction
from ymicro.log import get_logger
from ymicro.request import RequestContext, get_request_context
from ymicro.response import ApiError, Resp

from ..logic import Core, CoreLogic, GreetingAlreadyExistsError, GreetingReader, GreetingWriter
from .dtos import NewGreetingRequest, SampleGreetingRequest, SampleGreetingResponse

logger = get_logger("ymicro.features.sample.controller")


class SampleController:
    """问候示例控制器

    使用示例:
        controller = SampleController(DatabaseGreetingReader(), DatabaseGreetingWriter())
        controller.attach_routes(app)
    """

    def __init__(
        self,
        greeting_reader: Optional[GreetingReader],
        greeting_writer: Optional[GreetingWriter],
        core: Optional[Core] = None,
    ):
        self.greeting_reader = greeting_reader
        self.greeting_writer = greeting_writer
        self.core = core or CoreLogic()

    @classmethod
    def with_core(cls, core: Core) -> "SampleController":
        """使用替换的业务逻辑构建控制器（测试用）"""
        return cls(None, None, core)

    def attach_routes(self, app: FastAPI) -> None:
        router = APIRouter(prefix="/api/v1/sample", tags=["greeting"])
        router.add_api_route(
            "/greetings/greet",
            self.produce_greeting,
            methods=["POST"],
            response_model=SampleGreetingResponse,
            summary="问候",
            responses={
                400: {"model": ApiError, "description": "请求体格式错误"},
                500: {"model": ApiError, "description": "获取问候语失败"},
            },
        )
        router.add_api_route(
            "/greetings",
            self.add_greeting,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            response_class=Response,
            summary="添加问候语",
            responses={
                400: {"model": ApiError, "description": "请求体格式错误"},
                409: {"model": ApiError, "description": "问候语已存在"},
            },
        )
        app.include_router(router)

    def produce_greeting(
        self,
        body: SampleGreetingRequest,
        ctx: RequestContext = Depends(get_request_context),
    ):
        try:
            greeting_text = self.core.give_greeting(ctx, body.name, self.greeting_reader)
        except NoConnectionAttachedError:
            raise
        except Exception as e:
            logger.error(f"获取问候语失败: {e!r}")
            helper = Resp.InternalServerError(e)
            helper.description = "获取问候语时出错"
            return helper.respond()

        return SampleGreetingResponse(greeting=greeting_text)

    def add_greeting(
        self,
        body: NewGreetingRequest,
        ctx: RequestContext = Depends(get_request_context),
    ):
        def add(tx_ctx: RequestContext) -> None:
            self.core.add_greeting(tx_ctx, body.greeting, self.greeting_reader, self.greeting_writer)

        try:
            with_transaction(ctx, add)
        except GreetingAlreadyExistsError as e:
            logger.warning(f"问候语已存在: {body.greeting}")
            helper = Resp.Conflict(e)
            helper.description = "系统中已存在该问候语"
            return helper.respond()
        except NoConnectionAttachedError:
            raise
        except Exception as e:
            logger.error(f"添加问候语失败: {body.greeting}: {e!r}")
            return Resp.InternalServerError(e).respond()

        return Response(status_code=status.HTTP_201_CREATED)
