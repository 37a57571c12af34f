"""服务共用的配置选项

所有微服务都会用到的环境变量定义，以及服务配置注册表的初始化入口。
"""

from typing import Optional

from .option import Option
from .registry import Registry, RegistryBuilder
from .validators import is_host, is_int, is_port, one_of


IS_PRODUCTION = Option(
    "IS_PRODUCTION", required=True,
    validator=one_of("true", "false", message="value must be 'true' or 'false'"),
)
"""是否以生产模式运行，取值为 "true" 或 "false" """

LOG_LEVEL = Option(
    "LOG_LEVEL", required=False,
    validator=one_of(
        "debug", "info", "warn", "error", "panic", "fatal",
        message="value must be one of debug, info, warn, error, panic, or fatal",
    ),
)
"""服务启动时的日志级别"""

LISTEN_PORT = Option("LISTEN_PORT", required=False, validator=is_port())
"""服务监听端口"""

ALLOWED_CORS_ORIGINS = Option("ALLOWED_CORS_ORIGINS", required=False)
"""逗号分隔的 CORS 允许来源列表"""

DB_USER = Option("DB_USER", required=True)
DB_PASSWORD = Option("DB_PASSWORD", required=True)
DB_HOST = Option("DB_HOST", required=True, validator=is_host())
DB_PORT = Option("DB_PORT", required=False, validator=is_int())
DB_SCHEMA = Option("DB_SCHEMA", required=True)
DB_DRIVER = Option("DB_DRIVER", required=False)
"""SQLAlchemy 驱动名，默认 mysql+pymysql"""

DB_MAX_CONNECTIONS = Option("DB_MAX_CONNECTIONS", required=False, validator=is_int())
"""连接池允许的最大连接总数"""

DB_MAX_IDLE_CONNECTIONS = Option(
    "DB_MAX_IDLE_CONNECTIONS", required=False,
    validator=is_int("should be a valid integer"),
)
"""连接池保持的最大空闲连接数，应小于 DB_MAX_CONNECTIONS"""

JWT_VERIFICATION_KEY = Option("JWT_VERIFICATION_KEY", required=False)
"""JWT 验签密钥（HMAC 密钥或 PEM 公钥），未配置时不启用 JWT 中间件"""

JWT_ALGORITHMS = Option("JWT_ALGORITHMS", required=False)
"""逗号分隔的 JWT 算法列表，默认 HS256"""

DB_OPTIONS = [
    DB_USER,
    DB_PASSWORD,
    DB_HOST,
    DB_PORT,
    DB_SCHEMA,
    DB_DRIVER,
    DB_MAX_CONNECTIONS,
    DB_MAX_IDLE_CONNECTIONS,
]
"""数据库相关配置选项"""

SERVICE_OPTIONS = [
    IS_PRODUCTION,
    LOG_LEVEL,
    ALLOWED_CORS_ORIGINS,
    LISTEN_PORT,
    JWT_VERIFICATION_KEY,
    JWT_ALGORITHMS,
]


def build_registry(builder: RegistryBuilder) -> Registry:
    """向构建器注册服务全部选项并校验构建

    Raises:
        IncorrectConfigurationError: 必填变量缺失或变量未通过校验
    """
    builder.add_options(SERVICE_OPTIONS)
    builder.add_options(DB_OPTIONS)
    return builder.verify_and_build()


def init_registry(builder: Optional[RegistryBuilder] = None) -> Registry:
    """初始化服务配置注册表，默认从进程环境变量读取"""
    return build_registry(builder or RegistryBuilder())
