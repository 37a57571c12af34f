"""统一错误响应

所有接口的错误响应体都是 {"description": ..., "detail": ...}：
description 是给调用方看的说明，detail 是导致失败的异常消息。
"""

from dataclasses import dataclass
from typing import Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class ApiError(BaseModel):
    """标准错误响应体"""
    description: str = Field(description="可读的错误说明")
    detail: str = Field(default="", description="导致失败的错误信息")


@dataclass
class ApiErrorHelper:
    """错误响应构建器

    Attributes:
        status: HTTP 状态码
        description: 可读的错误说明
        error: 导致失败的异常，消息会作为 detail 返回
    """
    status: int
    description: str
    error: Optional[BaseException] = None

    def to_model(self) -> ApiError:
        detail = str(self.error) if self.error is not None else ""
        return ApiError(description=self.description, detail=detail)

    def respond(self) -> JSONResponse:
        """生成 JSON 错误响应"""
        return JSONResponse(status_code=self.status, content=self.to_model().model_dump())
