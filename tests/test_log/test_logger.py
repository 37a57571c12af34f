"""日志工具测试"""

import logging

import pytest

from ymicro.config import RegistryBuilder
from ymicro.config.shared_options import IS_PRODUCTION, LOG_LEVEL
from ymicro.log import (
    MicrosecondFormatter,
    adjust_level,
    create_formatter,
    current_level,
    current_level_name,
    get_logger,
    init_logger_from_registry,
    level_name,
    parse_log_level,
    setup_logger,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """每个测试后恢复根日志器"""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    propagate = root.propagate
    sql_level = logging.getLogger("sqlalchemy.engine").level
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
    root.propagate = propagate
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)


def _registry(env):
    builder = RegistryBuilder.mock(env)
    builder.add_options([IS_PRODUCTION, LOG_LEVEL])
    return builder.verify_and_build()


class TestLogLevels:

    @pytest.mark.parametrize("name, expected", [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("warn", logging.WARNING),
        ("error", logging.ERROR),
        ("panic", logging.CRITICAL),
        ("fatal", logging.CRITICAL),
    ])
    def test_parse_log_level(self, name, expected):
        assert parse_log_level(name) == expected

    def test_parse_unknown_uses_default(self):
        assert parse_log_level("verbose", default=logging.ERROR) == logging.ERROR
        assert parse_log_level("") == logging.INFO

    def test_level_name(self):
        assert level_name(logging.WARNING) == "warn"
        assert level_name(logging.CRITICAL) == "fatal"

    def test_adjust_level(self):
        """测试运行时调整根日志器级别"""
        adjust_level("error")

        assert current_level() == logging.ERROR

    def test_current_level_name_remembers_alias(self):
        adjust_level("panic")

        assert current_level_name() == "panic"
        assert level_name(current_level()) == "fatal"

    def test_current_level_name_after_direct_change(self):
        """测试绕过 adjust_level 修改级别后按级别换算名称"""
        adjust_level("panic")
        logging.getLogger().setLevel(logging.INFO)

        assert current_level_name() == "info"

    def test_adjust_level_unknown(self):
        with pytest.raises(ValueError):
            adjust_level("verbose")


class TestInitLoggerFromRegistry:

    def test_explicit_level(self):
        init_logger_from_registry(_registry({"IS_PRODUCTION": "true", "LOG_LEVEL": "warn"}))

        assert current_level() == logging.WARNING

    def test_production_defaults_to_info(self):
        init_logger_from_registry(_registry({"IS_PRODUCTION": "true"}))

        assert current_level() == logging.INFO
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_development_defaults_to_debug(self):
        init_logger_from_registry(_registry({"IS_PRODUCTION": "false"}))

        assert current_level() == logging.DEBUG


class TestGetLogger:

    def test_short_name_prefixed(self):
        assert get_logger("database").name == "ymicro.database"

    def test_dotted_name_unchanged(self):
        assert get_logger("sqlalchemy.engine").name == "sqlalchemy.engine"

    def test_inferred_from_module(self):
        assert get_logger().name == __name__


class TestSetupLogger:

    def test_microsecond_formatter(self):
        formatter = create_formatter("%(asctime)s %(message)s")
        record = logging.LogRecord("ymicro", logging.INFO, __file__, 1, "hello", None, None)
        record.created = 1700000000.5

        assert isinstance(formatter, MicrosecondFormatter)
        assert formatter.format(record).split(" ")[1].endswith(".500000")

    def test_plain_formatter(self):
        assert not isinstance(create_formatter(use_microseconds=False), MicrosecondFormatter)

    def test_log_file(self, tmp_path):
        """测试写入日志文件并自动创建目录"""
        log_file = tmp_path / "logs" / "service.log"
        named = setup_logger("ymicro.test_file", level="warn", log_file=str(log_file), console=False)

        named.warning("磁盘空间不足")
        for handler in named.handlers:
            handler.close()
        named.handlers.clear()

        assert named.level == logging.WARNING
        assert "磁盘空间不足" in log_file.read_text(encoding="utf-8")
