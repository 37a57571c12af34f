"""配置模块

提供配置管理功能：
- Option / RegistryBuilder / Registry: 环境变量配置注册表，启动时一次性校验
- shared_options: 服务共用的配置选项
- DatabaseSettings: 数据库连接的类型化配置
- EnvFileSource: 进程环境变量优先、.env 文件补充的配置来源

快速开始:
    from ymicro.config import EnvFileSource, RegistryBuilder, init_registry

    registry = init_registry(RegistryBuilder(EnvFileSource(".env")))
"""

from .option import Option
from .exceptions import (
    ConfigurationError,
    IncorrectConfigurationError,
    InvalidVariable,
    DuplicateOptionError,
    UnregisteredOptionError,
    OptionNotRequiredError,
)
from .registry import (
    Registry,
    RegistryBuilder,
    RegistrySource,
    EnvironmentSource,
    EnvFileSource,
    MappingSource,
)
from .shared_options import build_registry, init_registry
from .settings import DatabaseSettings

__all__ = [
    "Option",
    "ConfigurationError",
    "IncorrectConfigurationError",
    "InvalidVariable",
    "DuplicateOptionError",
    "UnregisteredOptionError",
    "OptionNotRequiredError",
    "Registry",
    "RegistryBuilder",
    "RegistrySource",
    "EnvironmentSource",
    "EnvFileSource",
    "MappingSource",
    "build_registry",
    "init_registry",
    "DatabaseSettings",
]
