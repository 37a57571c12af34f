"""请求上下文

不可变的链式键值存储。每次派生都产生一个引用父上下文的新对象，
查找时就近优先（最内层的值覆盖外层）。上下文由调用方显式地沿调用链传递。

使用示例:
    from ymicro.request import RequestContext, ContextKey

    USER_KEY = ContextKey("user")

    ctx = RequestContext.background()
    child = ctx.with_value(USER_KEY, "tom")

    child.value(USER_KEY)   # "tom"
    ctx.value(USER_KEY)     # None，父上下文不受影响
"""

from typing import Any, Iterator, Optional


class ContextKey:
    """上下文键

    以对象身份区分，不同模块即使使用相同名称也不会互相覆盖。
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r})"


class RequestContext:
    """请求作用域的上下文

    属性只读，派生通过 with_value 完成。
    """

    __slots__ = ("_parent", "_key", "_value")

    def __init__(self, parent: Optional["RequestContext"] = None, key: ContextKey = None, value: Any = None):
        self._parent = parent
        self._key = key
        self._value = value

    @classmethod
    def background(cls) -> "RequestContext":
        """创建空的根上下文"""
        return cls()

    @property
    def parent(self) -> Optional["RequestContext"]:
        return self._parent

    def with_value(self, key: ContextKey, value: Any) -> "RequestContext":
        """派生携带 key=value 的子上下文"""
        if key is None:
            raise ValueError("上下文键不能为 None")
        return RequestContext(self, key, value)

    def value(self, key: ContextKey, default: Any = None) -> Any:
        """就近查找 key 对应的值，找不到返回 default"""
        for ctx in self._chain():
            if ctx._key is key:
                return ctx._value
        return default

    def has(self, key: ContextKey) -> bool:
        """上下文链上是否存在 key（值为 None 也算存在）"""
        return any(ctx._key is key for ctx in self._chain())

    def _chain(self) -> Iterator["RequestContext"]:
        ctx = self
        while ctx is not None:
            yield ctx
            ctx = ctx._parent

    def __repr__(self) -> str:
        keys = [ctx._key.name for ctx in self._chain() if ctx._key is not None]
        return f"RequestContext(keys={keys})"
