"""运行时日志级别调整功能"""

from .logic import Core, CoreLogic
from .dtos import ACCEPTED_LEVELS, ChangeLogLevelRequest, LogLevelResponse
from .controller import LogLevelController

__all__ = [
    "Core",
    "CoreLogic",
    "ACCEPTED_LEVELS",
    "ChangeLogLevelRequest",
    "LogLevelResponse",
    "LogLevelController",
]
