"""服务入口

启动流程:
    1. 从环境变量与 .env 构建并校验配置注册表
    2. 初始化日志
    3. 创建数据库连接池并等待数据库可达
    4. 装配应用并开始监听
"""

import sys
from typing import List, Tuple

from fastapi import FastAPI

from ymicro.config import ConfigurationError, EnvFileSource, Registry, RegistryBuilder, init_registry
from ymicro.database import DatabaseError, PooledConnection, connect_from_registry, must_be_connected
from ymicro.features.loglevel import LogLevelController
from ymicro.features.sample.adapter import DatabaseGreetingReader, DatabaseGreetingWriter
from ymicro.features.sample.controller import SampleController
from ymicro.log import get_logger, init_logger_from_registry
from ymicro.router import Controller, create_app, listen

logger = get_logger("ymicro.main")


def prepare_subsystems(env_path: str = ".env") -> Tuple[Registry, PooledConnection]:
    """初始化配置、日志与数据库连接

    Raises:
        ConfigurationError: 配置缺失或无效
        DatabaseError: 数据库无法连接
    """
    registry = init_registry(RegistryBuilder(EnvFileSource(env_path)))
    init_logger_from_registry(registry)

    connection = connect_from_registry(registry)
    must_be_connected(connection)
    return registry, connection


def create_controllers() -> List[Controller]:
    return [
        SampleController(DatabaseGreetingReader(), DatabaseGreetingWriter()),
        LogLevelController(),
    ]


def bootstrap(registry: Registry, connection: PooledConnection) -> FastAPI:
    """装配应用：标准中间件 + 全部控制器"""
    return create_app(registry, connection, create_controllers(), title="ymicro sample service")


def main() -> None:
    try:
        registry, connection = prepare_subsystems()
    except ConfigurationError as e:
        logger.critical(f"配置注册表初始化失败: {e}")
        sys.exit(1)
    except DatabaseError as e:
        logger.critical(f"数据库连接失败: {e}")
        sys.exit(1)

    logger.info("示例微服务启动中...")
    app = bootstrap(registry, connection)
    try:
        listen(app, registry)
    finally:
        connection.dispose()


if __name__ == "__main__":
    main()
