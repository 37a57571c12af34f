"""配置取值校验函数测试"""

import pytest

from ymicro.config.validators import is_host, is_int, is_port, one_of


class TestValidators:

    def test_one_of(self):
        validate = one_of("true", "false")
        validate("true")
        with pytest.raises(ValueError, match="true, false"):
            validate("yes")

    def test_one_of_custom_message(self):
        validate = one_of("a", message="pick a")
        with pytest.raises(ValueError, match="pick a"):
            validate("b")

    @pytest.mark.parametrize("value", ["0", "42", "-7"])
    def test_is_int_accepts(self, value):
        is_int()(value)

    @pytest.mark.parametrize("value", ["", "4.2", "ten"])
    def test_is_int_rejects(self, value):
        with pytest.raises(ValueError):
            is_int()(value)

    def test_is_port(self):
        is_port()("8080")
        is_port()("65535")
        for value in ("0", "65536", "http"):
            with pytest.raises(ValueError):
                is_port()(value)

    @pytest.mark.parametrize("value", ["localhost", "db.internal", "10.0.0.1", "::1", "my-db-1"])
    def test_is_host_accepts(self, value):
        is_host()(value)

    @pytest.mark.parametrize("value", ["", "bad host", "-leading.dash", "under_score"])
    def test_is_host_rejects(self, value):
        with pytest.raises(ValueError):
            is_host()(value)
