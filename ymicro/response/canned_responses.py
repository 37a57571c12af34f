"""预置错误响应与响应辅助函数"""

from typing import List, Optional, TypeVar

from fastapi import status

from .dtos import ApiErrorHelper

T = TypeVar("T")


class ErrorResponse:
    """预置错误响应"""

    @staticmethod
    def BadRequest(error: Optional[BaseException] = None) -> ApiErrorHelper:
        """400 Bad Request - 提交的数据无法解析"""
        return ApiErrorHelper(
            status=status.HTTP_400_BAD_REQUEST,
            description="无法解析提交的数据",
            error=error,
        )

    @staticmethod
    def Unauthorized(error: Optional[BaseException] = None) -> ApiErrorHelper:
        """401 Unauthorized - 凭据认证失败"""
        return ApiErrorHelper(
            status=status.HTTP_401_UNAUTHORIZED,
            description="无法使用提供的凭据完成认证",
            error=error,
        )

    @staticmethod
    def Forbidden(error: Optional[BaseException] = None) -> ApiErrorHelper:
        """403 Forbidden - 无权访问"""
        return ApiErrorHelper(
            status=status.HTTP_403_FORBIDDEN,
            description="没有访问此数据的权限",
            error=error,
        )

    @staticmethod
    def NotFound(error: Optional[BaseException] = None) -> ApiErrorHelper:
        """404 Not Found - 资源不存在"""
        return ApiErrorHelper(
            status=status.HTTP_404_NOT_FOUND,
            description="请求的数据不存在",
            error=error,
        )

    @staticmethod
    def Conflict(error: Optional[BaseException] = None) -> ApiErrorHelper:
        """409 Conflict - 已有数据阻止了操作"""
        return ApiErrorHelper(
            status=status.HTTP_409_CONFLICT,
            description="系统中已有的数据导致操作无法完成",
            error=error,
        )

    @staticmethod
    def InternalServerError(error: Optional[BaseException] = None) -> ApiErrorHelper:
        """500 Internal Server Error - 服务器内部错误"""
        return ApiErrorHelper(
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            description="处理请求时发生错误",
            error=error,
        )


BadRequest = ErrorResponse.BadRequest
Unauthorized = ErrorResponse.Unauthorized
Forbidden = ErrorResponse.Forbidden
NotFound = ErrorResponse.NotFound
Conflict = ErrorResponse.Conflict
InternalServerError = ErrorResponse.InternalServerError


class Resp:
    """响应快捷类

    使用示例:
        from ymicro.response import Resp

        try:
            ...
        except GreetingAlreadyExistsError as e:
            return Resp.Conflict(e).respond()
        except Exception as e:
            return Resp.InternalServerError(e).respond()
    """

    BadRequest = BadRequest
    Unauthorized = Unauthorized
    Forbidden = Forbidden
    NotFound = NotFound
    Conflict = Conflict
    InternalServerError = InternalServerError


def non_null_list(items: Optional[List[T]]) -> List[T]:
    """None 转为空列表，保证 JSON 中输出 [] 而不是 null"""
    if items is None:
        return []
    return items
