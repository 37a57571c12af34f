"""配置异常类

定义配置注册表相关的异常层次结构
"""

from dataclasses import dataclass
from typing import List


class ConfigurationError(Exception):
    """配置错误基类"""
    pass


@dataclass
class InvalidVariable:
    """未通过校验的环境变量"""
    name: str
    validation_error: Exception


class IncorrectConfigurationError(ConfigurationError):
    """环境配置不正确

    汇总所有缺失的必填变量与所有未通过校验的变量，一次性报告。

    属性:
        missing_required_variables: 缺失的必填环境变量名列表
        invalid_variables: 未通过校验的变量列表
    """

    def __init__(
        self,
        missing_required_variables: List[str] = None,
        invalid_variables: List[InvalidVariable] = None
    ):
        self.missing_required_variables = list(missing_required_variables or [])
        self.invalid_variables = list(invalid_variables or [])
        super().__init__(self._build_message())

    def errors_present(self) -> bool:
        """是否存在缺失或校验失败的变量"""
        return bool(self.missing_required_variables or self.invalid_variables)

    def _build_message(self) -> str:
        parts = []
        if self.missing_required_variables:
            parts.append(
                "the following required environment variables were missing: "
                + ", ".join(self.missing_required_variables)
            )
        for invalid in self.invalid_variables:
            parts.append(f"{invalid.name} was invalid for this reason: {invalid.validation_error}")
        return ", ".join(parts)


class DuplicateOptionError(ConfigurationError):
    """重复注册同名选项（编程错误）"""

    def __init__(self, env_name: str):
        self.env_name = env_name
        super().__init__(f"注册选项失败，已存在同名选项: {env_name}")


class UnregisteredOptionError(ConfigurationError):
    """读取未注册的选项（编程错误）"""

    def __init__(self, env_name: str):
        self.env_name = env_name
        super().__init__(f"选项 {env_name} 未注册，请在构建配置注册表时注册该选项")


class OptionNotRequiredError(ConfigurationError):
    """对非必填选项调用 get_required（编程错误）"""

    def __init__(self, env_name: str):
        self.env_name = env_name
        super().__init__(f"非必填选项 {env_name} 不能通过 get_required 读取")
