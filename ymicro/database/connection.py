"""数据库连接池

根据 DatabaseSettings 创建 SQLAlchemy 引擎，并包装为 PooledConnection。

使用示例:
    from ymicro.database import connect_from_registry, must_be_connected

    connection = connect_from_registry(registry)
    must_be_connected(connection)
"""

from sqlalchemy import create_engine
from sqlalchemy.exc import ArgumentError, NoSuchModuleError
from sqlalchemy.pool import StaticPool

from ymicro.config import DatabaseSettings, Registry
from ymicro.log import get_logger

from .exceptions import DatabaseConfigurationError
from .handles import PooledConnection

logger = get_logger("ymicro.database")

DEFAULT_MAX_OPEN_CONNECTIONS = 20
DEFAULT_MAX_IDLE_CONNECTIONS = 5


def _is_memory_sqlite(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def connect(settings: DatabaseSettings) -> PooledConnection:
    """创建连接池

    连接池大小:
        - pool_size: 最大空闲连接数（默认 5）
        - max_overflow: 最大连接总数减去空闲连接数（总数默认 20）
        - pool_recycle: 连接最长存活时间

    Raises:
        DatabaseConfigurationError: URL 无法解析或驱动未安装
    """
    try:
        url = settings.sqlalchemy_url()
    except ArgumentError as e:
        raise DatabaseConfigurationError(f"数据库连接 URL 无效: {e}") from e

    engine_kwargs = {
        "echo": settings.echo,
        "pool_pre_ping": settings.pool_pre_ping,
        "pool_recycle": settings.conn_max_lifetime,
    }

    if _is_memory_sqlite(url):
        # 内存数据库只存在于单个连接中
        engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        max_idle = settings.max_idle_connections
        if max_idle is None:
            max_idle = DEFAULT_MAX_IDLE_CONNECTIONS
        max_open = settings.max_open_connections
        if max_open is None:
            max_open = DEFAULT_MAX_OPEN_CONNECTIONS
        if max_open < max_idle:
            logger.warning(
                f"DB_MAX_IDLE_CONNECTIONS({max_idle}) 大于 DB_MAX_CONNECTIONS({max_open})，"
                f"最大连接数按 {max_idle} 计"
            )
        engine_kwargs["pool_size"] = max_idle
        engine_kwargs["max_overflow"] = max(max_open - max_idle, 0)

    try:
        engine = create_engine(url, **engine_kwargs)
    except (ArgumentError, NoSuchModuleError) as e:
        raise DatabaseConfigurationError(
            f"无法创建数据库连接池 ({settings.describe()}): {e}"
        ) from e

    logger.info(f"数据库连接池已创建: {settings.describe()}")
    return PooledConnection(engine)


def connect_from_registry(registry: Registry) -> PooledConnection:
    """从配置注册表读取数据库配置并创建连接池"""
    return connect(DatabaseSettings.from_registry(registry))
