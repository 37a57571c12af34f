"""问候示例功能的业务逻辑

端口:
    - GreetingReader / GreetingWriter: 被驱动端口，由数据库或内存适配器实现
    - Core: 驱动端口，控制器只依赖它，测试时可替换为 mock
"""

from abc import ABC, abstractmethod
from typing import List

from ymicro.log import get_logger
from ymicro.request import RequestContext

logger = get_logger("ymicro.features.sample")


class SampleError(Exception):
    """问候功能错误基类"""
    pass


class GreetingAlreadyExistsError(SampleError):
    """要添加的问候语已存在"""

    def __init__(self, greeting: str):
        self.greeting = greeting
        super().__init__(f"the passed greeting already exists: {greeting}")


class NoGreetingsAvailableError(SampleError):
    """没有任何可用的问候语"""

    def __init__(self):
        super().__init__("no greetings are available")


class GreetingReader(ABC):
    """读取问候语"""

    @abstractmethod
    def random_greeting(self, ctx: RequestContext) -> str:
        """随机取一个问候语

        Raises:
            NoGreetingsAvailableError: 没有可用的问候语
        """

    @abstractmethod
    def list(self, ctx: RequestContext) -> List[str]:
        """全部问候语"""


class GreetingWriter(ABC):
    """写入问候语"""

    @abstractmethod
    def add_greeting(self, ctx: RequestContext, new_greeting: str) -> None:
        pass


class Core(ABC):
    """问候功能对外提供的能力"""

    @abstractmethod
    def give_greeting(self, ctx: RequestContext, name: str, greeting_reader: GreetingReader) -> str:
        pass

    @abstractmethod
    def add_greeting(
        self,
        ctx: RequestContext,
        new_greeting: str,
        greeting_reader: GreetingReader,
        greeting_writer: GreetingWriter,
    ) -> None:
        pass


class CoreLogic(Core):
    """问候功能的业务逻辑实现"""

    def give_greeting(self, ctx: RequestContext, name: str, greeting_reader: GreetingReader) -> str:
        """生成 "<问候语>, <名字>!" """
        greeting = greeting_reader.random_greeting(ctx)
        logger.debug(f"取得问候语: {greeting}")
        return f"{greeting}, {name}!"

    def add_greeting(
        self,
        ctx: RequestContext,
        new_greeting: str,
        greeting_reader: GreetingReader,
        greeting_writer: GreetingWriter,
    ) -> None:
        """添加问候语

        Raises:
            GreetingAlreadyExistsError: 问候语已存在
        """
        if new_greeting in greeting_reader.list(ctx):
            raise GreetingAlreadyExistsError(new_greeting)
        greeting_writer.add_greeting(ctx, new_greeting)
