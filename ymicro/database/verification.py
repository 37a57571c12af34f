"""启动时的数据库可达性检查"""

import time
from typing import Callable

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError

from ymicro.log import get_logger

from .exceptions import DatabaseConfigurationError, DatabaseUnreachableError
from .handles import PooledConnection

logger = get_logger("ymicro.database")

DEFAULT_TIMEOUT = 300.0
DEFAULT_RETRY_INTERVAL = 10.0


def _server_rejected(error: DBAPIError) -> bool:
    """数据库服务端是否已经应答并拒绝了连接

    MySQL 的客户端错误码在 2000-2999 之间（网络不通、主机无法解析等），
    其余错误码来自服务端（认证失败、库不存在等）。
    """
    args = getattr(error.orig, "args", ())
    if not args or not isinstance(args[0], int):
        return False
    code = args[0]
    return not 2000 <= code < 3000


def must_be_connected(
    connection: PooledConnection,
    timeout: float = DEFAULT_TIMEOUT,
    interval: float = DEFAULT_RETRY_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """阻塞直到数据库可达

    网络层面的失败按 interval 间隔重试；数据库已应答但拒绝连接时立即失败。

    Raises:
        DatabaseUnreachableError: 超过 timeout 仍无法连接
        DatabaseConfigurationError: 数据库可达但连接参数有误
    """
    deadline = clock() + timeout
    while True:
        try:
            connection.ping()
            logger.info("数据库连接正常")
            return
        except (OperationalError, InterfaceError) as e:
            if _server_rejected(e):
                logger.critical(f"已连接到数据库，但连接参数可能有误: {e}")
                raise DatabaseConfigurationError(f"数据库拒绝连接: {e}") from e
            if clock() >= deadline:
                logger.critical(f"数据库在 {timeout:g} 秒内无法连接")
                raise DatabaseUnreachableError(timeout) from e
            logger.warning(f"无法连接数据库，{interval:g} 秒后重试: {e}")
            sleep(interval)
        except DBAPIError as e:
            logger.critical(f"已连接到数据库，但连接参数可能有误: {e}")
            raise DatabaseConfigurationError(f"数据库拒绝连接: {e}") from e
