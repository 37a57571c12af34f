"""问候示例功能

演示一个完整的功能切片：业务逻辑（logic）、数据库与内存适配器（adapter）、
REST 控制器（controller）。
"""

from .logic import (
    Core,
    CoreLogic,
    GreetingAlreadyExistsError,
    GreetingReader,
    GreetingWriter,
    NoGreetingsAvailableError,
    SampleError,
)

__all__ = [
    "Core",
    "CoreLogic",
    "GreetingAlreadyExistsError",
    "GreetingReader",
    "GreetingWriter",
    "NoGreetingsAvailableError",
    "SampleError",
]
