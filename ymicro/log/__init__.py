"""日志模块

提供服务日志配置：
- 根日志器/命名日志器配置
- 服务端日志级别名称（debug/info/warn/error/panic/fatal）解析
- 根据配置注册表初始化日志

使用示例:
    from ymicro.log import get_logger, setup_root_logger

    setup_root_logger(level="debug")
    logger = get_logger()
    logger.info("服务启动")
"""

from .logger import (
    setup_logger,
    setup_root_logger,
    init_logger_from_registry,
    create_formatter,
    parse_log_level,
    level_name,
    current_level,
    current_level_name,
    adjust_level,
    MicrosecondFormatter,
    DEFAULT_LOG_FORMAT,
    LOG_LEVEL_NAMES,
    transaction_logger,
    logger,
    get_logger,
)

__all__ = [
    "setup_logger",
    "setup_root_logger",
    "init_logger_from_registry",
    "create_formatter",
    "parse_log_level",
    "level_name",
    "current_level",
    "current_level_name",
    "adjust_level",
    "MicrosecondFormatter",
    "DEFAULT_LOG_FORMAT",
    "LOG_LEVEL_NAMES",
    "transaction_logger",
    "logger",
    "get_logger",
]
