import random
from typing import List

from ymicro.request import RequestContext

from ..logic import GreetingReader

DEFAULT_GREETINGS = (
    "Hello",
    "Bonjour",
    "Hola",
    "Howdy",
    "Greetings",
    "Howdy-do",
)


class InMemGreetingReader(GreetingReader):
    """使用内存中固定问候语列表的读取器，不需要数据库"""

    def __init__(self, greetings=DEFAULT_GREETINGS):
        self._greetings = list(greetings)

    def list(self, ctx: RequestContext) -> List[str]:
        return list(self._greetings)

    def random_greeting(self, ctx: RequestContext) -> str:
        return random.choice(self._greetings)
