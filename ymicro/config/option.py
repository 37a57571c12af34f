"""配置选项

一个 Option 代表一个环境变量：是否必填，以及可选的取值校验函数。
"""

from typing import Callable, Optional


Validator = Callable[[str], None]
"""校验函数：值不合法时抛出 ValueError"""


class Option:
    """环境变量配置选项

    在构建配置注册表时，必填选项会检查是否存在，
    带校验函数的选项在存在时会校验取值。

    使用示例:
        from ymicro.config import Option
        from ymicro.config.validators import one_of

        LOG_LEVEL = Option("LOG_LEVEL", required=False, validator=one_of("debug", "info"))
    """

    __slots__ = ("_env_name", "_required", "_validator")

    def __init__(self, env_name: str, required: bool, validator: Optional[Validator] = None):
        """初始化配置选项

        Args:
            env_name: 环境变量名
            required: 是否必填
            validator: 取值校验函数（可选）
        """
        self._env_name = env_name
        self._required = required
        self._validator = validator

    @property
    def variable_name(self) -> str:
        """该选项对应的环境变量名"""
        return self._env_name

    @property
    def required(self) -> bool:
        return self._required

    @property
    def validator(self) -> Optional[Validator]:
        return self._validator

    def set_validation(self, validator: Validator) -> None:
        """为选项设置校验函数"""
        self._validator = validator

    def validate(self, value: str) -> None:
        """校验取值，未设置校验函数时直接通过"""
        if self._validator is not None:
            self._validator(value)

    def __repr__(self) -> str:
        return f"Option(env_name={self._env_name!r}, required={self._required})"
