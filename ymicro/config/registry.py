"""配置注册表

从环境变量、.env 文件或测试用的字典构建经过校验的配置注册表。

使用示例:
    from ymicro.config import RegistryBuilder, Option

    DB_USER = Option("DB_USER", required=True)

    builder = RegistryBuilder()
    builder.add_option(DB_USER)
    registry = builder.verify_and_build()  # 缺失或非法时抛出 IncorrectConfigurationError

    user = registry.get_required(DB_USER)
"""

import os
from typing import Dict, Iterable, List, Mapping, Optional, Protocol

from dotenv import dotenv_values

from ymicro.log import get_logger

from .exceptions import (
    DuplicateOptionError,
    IncorrectConfigurationError,
    InvalidVariable,
    OptionNotRequiredError,
    UnregisteredOptionError,
)
from .option import Option

logger = get_logger("ymicro.config")


class RegistrySource(Protocol):
    """配置值来源"""

    def get_value(self, variable_name: str) -> Optional[str]: ...


class EnvironmentSource:
    """从进程环境变量读取配置"""

    def get_value(self, variable_name: str) -> Optional[str]:
        return os.environ.get(variable_name)


class MappingSource:
    """基于字典的配置来源，适用于测试"""

    def __init__(self, values: Mapping[str, str] = None):
        self._values: Dict[str, str] = dict(values or {})

    def get_value(self, variable_name: str) -> Optional[str]:
        return self._values.get(variable_name)


class EnvFileSource:
    """进程环境变量优先、.env 文件补充的配置来源

    文件中的值与环境变量一样经过选项校验，不会写入进程环境。
    文件不存在时等同于 EnvironmentSource。

    使用示例:
        registry = init_registry(RegistryBuilder(EnvFileSource(".env")))
    """

    def __init__(self, env_path: str = ".env"):
        self.env_path = env_path
        self._file_values: Dict[str, str] = {}
        if os.path.exists(env_path):
            # 只有键没有值的行解析为 None，视为未配置
            self._file_values = {
                key: value for key, value in dotenv_values(env_path).items() if value is not None
            }
            logger.debug(f"已读取 {env_path}，共 {len(self._file_values)} 个变量")

    def get_value(self, variable_name: str) -> Optional[str]:
        value = os.environ.get(variable_name)
        if value is not None:
            return value
        return self._file_values.get(variable_name)


class Registry:
    """经过校验的配置注册表

    应通过 RegistryBuilder 构建，构建时已完成必填与校验检查。
    """

    def __init__(self, registered_options: Dict[str, Option], source: RegistrySource):
        self._registered_options = registered_options
        self._source = source

    def get(self, option: Option) -> Optional[str]:
        """读取选项的值

        Returns:
            选项的值，环境中不存在时返回 None

        Raises:
            UnregisteredOptionError: 选项未注册
        """
        if option.variable_name not in self._registered_options:
            raise UnregisteredOptionError(option.variable_name)
        return self._source.get_value(option.variable_name)

    def get_required(self, option: Option) -> str:
        """读取必填选项的值

        构建注册表时已验证必填选项存在，因此这里总能返回字符串。

        Raises:
            OptionNotRequiredError: 传入的是非必填选项
            UnregisteredOptionError: 选项未注册
        """
        if not option.required:
            raise OptionNotRequiredError(option.variable_name)
        return self.get(option)

    def is_registered(self, option: Option) -> bool:
        return option.variable_name in self._registered_options

    def __repr__(self) -> str:
        return f"Registry(options={sorted(self._registered_options)})"


class RegistryBuilder:
    """配置注册表构建器

    接收服务使用的全部配置选项，在构建时统一检查：
    - 所有必填选项都存在
    - 所有存在且带校验函数的选项都通过校验
    """

    def __init__(self, source: RegistrySource = None):
        self._registered_options: Dict[str, Option] = {}
        self._all_options: List[Option] = []
        self._source = source if source is not None else EnvironmentSource()

    @classmethod
    def mock(cls, environment_variables: Mapping[str, str] = None) -> "RegistryBuilder":
        """使用给定字典代替真实环境变量构建，适用于测试"""
        return cls(MappingSource(environment_variables))

    def add_option(self, option: Option) -> None:
        """注册一个配置选项

        Raises:
            DuplicateOptionError: 已存在同名选项
        """
        if option.variable_name in self._registered_options:
            raise DuplicateOptionError(option.variable_name)

        self._registered_options[option.variable_name] = option
        self._all_options.append(option)

    def add_options(self, options: Iterable[Option]) -> None:
        """批量注册配置选项"""
        for option in options:
            self.add_option(option)

    def verify_and_build(self) -> Registry:
        """校验环境并构建注册表

        Raises:
            IncorrectConfigurationError: 存在缺失的必填变量或未通过校验的变量
        """
        missing: List[str] = []
        invalid: List[InvalidVariable] = []

        for option in self._all_options:
            value = self._source.get_value(option.variable_name)
            if value is None:
                if option.required:
                    missing.append(option.variable_name)
                continue

            # 只校验实际存在的变量
            try:
                option.validate(value)
            except ValueError as e:
                invalid.append(InvalidVariable(name=option.variable_name, validation_error=e))

        if missing or invalid:
            error = IncorrectConfigurationError(missing, invalid)
            logger.error(f"配置校验失败: {error}")
            raise error

        logger.debug(f"配置注册表构建完成，共 {len(self._all_options)} 个选项")
        return Registry(dict(self._registered_options), self._source)
