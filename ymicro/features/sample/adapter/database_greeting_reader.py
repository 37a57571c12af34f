import random
from typing import List

from sqlalchemy import select

from ymicro.database import retrieve_from_context
from ymicro.request import RequestContext

from ..logic import GreetingReader, NoGreetingsAvailableError
from .tables import greetings


class DatabaseGreetingReader(GreetingReader):
    """从数据库 greetings 表读取问候语

    使用上下文中的当前句柄，处于事务中时读取在事务内进行。
    """

    def list(self, ctx: RequestContext) -> List[str]:
        handle = retrieve_from_context(ctx)
        return handle.fetch_scalars(select(greetings.c.greetingText).order_by(greetings.c.id))

    def random_greeting(self, ctx: RequestContext) -> str:
        available = self.list(ctx)
        if not available:
            raise NoGreetingsAvailableError()
        return random.choice(available)
