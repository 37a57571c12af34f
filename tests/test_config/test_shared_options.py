"""服务共用配置选项测试"""

import pytest

from ymicro.config import IncorrectConfigurationError, RegistryBuilder, build_registry
from ymicro.config.shared_options import IS_PRODUCTION, LISTEN_PORT, LOG_LEVEL

VALID_ENV = {
    "IS_PRODUCTION": "false",
    "DB_USER": "app",
    "DB_PASSWORD": "secret",
    "DB_HOST": "localhost",
    "DB_SCHEMA": "sample",
}


class TestSharedOptions:

    def test_minimal_environment(self):
        """测试只提供必填变量即可构建"""
        registry = build_registry(RegistryBuilder.mock(VALID_ENV))

        assert registry.get_required(IS_PRODUCTION) == "false"
        assert registry.get(LOG_LEVEL) is None
        assert registry.get(LISTEN_PORT) is None

    @pytest.mark.parametrize("level", ["debug", "info", "warn", "error", "panic", "fatal"])
    def test_log_levels_accepted(self, level):
        build_registry(RegistryBuilder.mock({**VALID_ENV, "LOG_LEVEL": level}))

    def test_invalid_values(self):
        """测试多个非法值一次性报告"""
        env = {
            **VALID_ENV,
            "IS_PRODUCTION": "yes",
            "LOG_LEVEL": "verbose",
            "LISTEN_PORT": "99999",
            "DB_PORT": "abc",
        }

        with pytest.raises(IncorrectConfigurationError) as exc_info:
            build_registry(RegistryBuilder.mock(env))

        names = {invalid.name for invalid in exc_info.value.invalid_variables}
        assert names == {"IS_PRODUCTION", "LOG_LEVEL", "LISTEN_PORT", "DB_PORT"}

    def test_missing_database_variables(self):
        with pytest.raises(IncorrectConfigurationError) as exc_info:
            build_registry(RegistryBuilder.mock({"IS_PRODUCTION": "true"}))

        assert set(exc_info.value.missing_required_variables) == {
            "DB_USER", "DB_PASSWORD", "DB_HOST", "DB_SCHEMA",
        }
