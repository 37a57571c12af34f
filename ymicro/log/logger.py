"""
日志工具模块
提供简化的日志配置功能
"""

import inspect
import logging
import os
import time
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ymicro.config.registry import Registry


# 服务端日志级别名称 -> logging 级别
# panic/fatal 沿用旧服务的命名，统一映射为 CRITICAL
LOG_LEVEL_NAMES = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "critical": logging.CRITICAL,
}


# 最近一次设置根日志器级别时使用的名称
_root_level_name: Optional[str] = None


def parse_log_level(level: str, default: int = logging.INFO) -> int:
    """解析日志级别字符串为整数

    Args:
        level: 日志级别字符串，如 "debug", "WARN", "fatal"
        default: 无法识别时使用的级别

    Returns:
        int: 日志级别整数值
    """
    if not level:
        return default
    return LOG_LEVEL_NAMES.get(level.strip().lower(), default)


def level_name(level: int) -> str:
    """将 logging 级别转换回服务端使用的级别名称

    多个名称对应同一级别时返回表中靠前的名称，如 CRITICAL 返回 fatal。
    """
    for name, value in LOG_LEVEL_NAMES.items():
        if value == level:
            return name
    return logging.getLevelName(level).lower()


class MicrosecondFormatter(logging.Formatter):
    """支持微秒精度的日志格式化器"""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        if datefmt:
            s = time.strftime(datefmt, ct)
        else:
            s = time.strftime("%Y-%m-%d %H:%M:%S", ct)
        # 添加微秒部分（6位数）
        return "%s.%06d" % (s, (record.created - int(record.created)) * 1000000)


# 默认日志格式
DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"


def create_formatter(
    log_format: str = None,
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    use_microseconds: bool = True
) -> logging.Formatter:
    """创建日志格式化器

    Args:
        log_format: 日志格式字符串
        datefmt: 时间格式
        use_microseconds: 是否使用微秒精度

    Returns:
        日志格式化器
    """
    fmt = log_format or DEFAULT_LOG_FORMAT
    if use_microseconds:
        return MicrosecondFormatter(fmt=fmt, datefmt=datefmt)
    return logging.Formatter(fmt, datefmt=datefmt)


def setup_logger(
    name: str = None,
    level: str = "INFO",
    log_file: str = None,
    log_format: str = None,
    console: bool = True,
    use_microseconds: bool = True,
    propagate: bool = True
) -> logging.Logger:
    """设置并返回配置好的日志记录器

    Args:
        name: 日志记录器名称，默认为root logger
        level: 日志级别，可选：debug, info, warn, error, panic, fatal
        log_file: 日志文件路径，如果不指定则不写入文件
        log_format: 日志格式，如果不指定则使用默认格式
        console: 是否输出到控制台
        use_microseconds: 是否使用微秒精度时间戳
        propagate: 是否传播到父日志器

    Returns:
        配置好的日志记录器

    使用示例:
        from ymicro.log import setup_logger

        logger = setup_logger("my_service", level="debug")
        logger = setup_logger("my_service", level="info", log_file="logs/service.log")
    """
    _logger = logging.getLogger(name) if name else logging.getLogger()
    _logger.setLevel(parse_log_level(level))
    _logger.propagate = propagate

    # 清除现有的处理器
    _logger.handlers.clear()

    formatter = create_formatter(log_format, use_microseconds=use_microseconds)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        _logger.addHandler(console_handler)

    if log_file:
        # 确保日志目录存在
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        _logger.addHandler(file_handler)

    return _logger


def setup_root_logger(
    level: str = "INFO",
    log_file: str = None,
    console: bool = True,
    use_microseconds: bool = True
) -> logging.Logger:
    """设置根日志记录器

    子日志器会自动继承根日志器的处理器配置。
    """
    return setup_logger(
        name=None,  # root logger
        level=level,
        log_file=log_file,
        console=console,
        use_microseconds=use_microseconds,
        propagate=False
    )


def init_logger_from_registry(registry: "Registry") -> logging.Logger:
    """根据配置注册表初始化根日志记录器

    读取 LOG_LEVEL（可选）与 IS_PRODUCTION（必填）两个选项：
    未配置 LOG_LEVEL 时，生产环境默认 info，其余环境默认 debug。

    Args:
        registry: 已校验的配置注册表

    Returns:
        根日志记录器
    """
    from ymicro.config.shared_options import IS_PRODUCTION, LOG_LEVEL

    is_production = registry.get_required(IS_PRODUCTION) == "true"
    level = registry.get(LOG_LEVEL)
    if level is None:
        level = "info" if is_production else "debug"

    global _root_level_name
    root = setup_root_logger(level=level)
    _root_level_name = level
    # 生产环境不需要 SQL 语句日志
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.WARNING if is_production else parse_log_level(level)
    )
    return root


def get_logger(name: str = None) -> logging.Logger:
    """获取日志记录器，支持自动推断模块名

    无参数调用时，自动从调用栈获取模块的 __name__ 作为日志器名称。
    有参数调用时，若为不含点号的简写，自动添加 'ymicro.' 前缀。

    使用示例:
        logger = get_logger()                      # -> 调用模块的 __name__
        logger = get_logger("database")            # -> "ymicro.database"
        logger = get_logger("sqlalchemy.engine")   # -> "sqlalchemy.engine"
    """
    if name is None:
        frame = inspect.currentframe()
        if frame is not None and frame.f_back is not None:
            name = frame.f_back.f_globals.get('__name__', 'ymicro')
        else:
            name = 'ymicro'
    elif not name.startswith('ymicro.') and name != 'ymicro' and '.' not in name:
        name = f"ymicro.{name}"

    return logging.getLogger(name)


def current_level(name: Optional[str] = None) -> int:
    """获取日志记录器当前的有效级别，默认根日志记录器"""
    _logger = logging.getLogger(name) if name else logging.getLogger()
    return _logger.getEffectiveLevel()


def adjust_level(level: str) -> int:
    """运行时调整根日志记录器的级别

    Raises:
        ValueError: 无法识别的级别名称
    """
    global _root_level_name
    key = (level or "").strip().lower()
    if key not in LOG_LEVEL_NAMES:
        raise ValueError(f"unknown log level \"{level}\"")
    new_level = LOG_LEVEL_NAMES[key]
    logging.getLogger().setLevel(new_level)
    _root_level_name = key
    logger.info(f"日志级别已调整为 {key}")
    return new_level


def current_level_name() -> str:
    """根日志记录器当前级别的名称

    panic 与 fatal 都对应 CRITICAL，返回最近一次设置时使用的名称。
    """
    level = current_level()
    if _root_level_name is not None and LOG_LEVEL_NAMES[_root_level_name] == level:
        return _root_level_name
    return level_name(level)


transaction_logger = get_logger("ymicro.database.transaction")

# 通用日志记录器
logger = logging.getLogger("ymicro")
