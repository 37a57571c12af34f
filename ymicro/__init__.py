"""ymicro - 微服务基础库与示例服务

核心能力：请求上下文中的数据库句柄与可重入事务。

快速开始:
    from ymicro.database import retrieve_from_context, with_transaction
    from ymicro.request import get_request_context

    def add(ctx, text):
        with_transaction(ctx, lambda tx_ctx: writer.add_greeting(tx_ctx, text))
"""

from .version import __version__, __author__, __description__

__all__ = [
    "__version__",
    "__author__",
    "__description__",
]
