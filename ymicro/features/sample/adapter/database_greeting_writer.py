from sqlalchemy import insert

from ymicro.database import retrieve_from_context
from ymicro.request import RequestContext

from ..logic import GreetingWriter
from .tables import greetings


class DatabaseGreetingWriter(GreetingWriter):
    """向数据库 greetings 表写入问候语"""

    def add_greeting(self, ctx: RequestContext, new_greeting: str) -> None:
        handle = retrieve_from_context(ctx)
        handle.execute(insert(greetings).values(greetingText=new_greeting))
