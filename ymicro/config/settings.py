"""
配置模块
提供数据库连接的类型化配置
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url

from .registry import Registry


def _parse_int_option(registry: Registry, option) -> Optional[int]:
    """读取整数型选项，不存在时返回 None"""
    value = registry.get(option)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(
            f'a non-number slipped past validation on {option.variable_name} option with value "{value}"'
        ) from e


class DatabaseSettings(BaseSettings):
    """数据库配置

    使用示例:
        from ymicro.config import DatabaseSettings

        # 直接指定
        db_config = DatabaseSettings(user="app", password="secret", host="db", schema_name="sample")

        # 从配置注册表构建
        db_config = DatabaseSettings.from_registry(registry)

        # 测试时可直接给出完整 URL
        db_config = DatabaseSettings(url="sqlite:///:memory:")
    """
    driver: str = Field(default="mysql+pymysql", description="SQLAlchemy 驱动名")
    user: str = Field(default="", description="数据库用户名")
    password: str = Field(default="", description="数据库密码")
    host: str = Field(default="", description="数据库主机名或 IP")
    port: Optional[int] = Field(default=None, description="数据库端口，不填使用驱动默认端口")
    schema_name: str = Field(
        default="",
        validation_alias=AliasChoices("schema_name", "DB_SCHEMA"),
        description="默认 schema",
    )
    url: Optional[str] = Field(default=None, description="完整连接 URL，提供后忽略其余连接字段")

    max_open_connections: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("max_open_connections", "DB_MAX_CONNECTIONS"),
        description="最大连接总数，默认 20",
    )
    max_idle_connections: Optional[int] = Field(default=None, description="最大空闲连接数，默认 5")
    conn_max_lifetime: int = Field(default=180, description="连接最长存活时间（秒），驱动建议小于 5 分钟")
    pool_pre_ping: bool = Field(default=True, description="连接前检查")
    echo: bool = Field(default=False, description="是否打印SQL语句")

    class Config:
        env_prefix = "DB_"

    @classmethod
    def from_registry(cls, registry: Registry) -> "DatabaseSettings":
        """从已校验的配置注册表构建数据库配置

        Raises:
            ValueError: 整数型选项无法解析
        """
        from .shared_options import (
            DB_DRIVER,
            DB_HOST,
            DB_MAX_CONNECTIONS,
            DB_MAX_IDLE_CONNECTIONS,
            DB_PASSWORD,
            DB_PORT,
            DB_SCHEMA,
            DB_USER,
        )

        # 显式给出全部字段，避免 BaseSettings 再从进程环境补齐
        return cls(
            driver=registry.get(DB_DRIVER) or "mysql+pymysql",
            user=registry.get_required(DB_USER),
            password=registry.get_required(DB_PASSWORD),
            host=registry.get_required(DB_HOST),
            schema_name=registry.get_required(DB_SCHEMA),
            port=_parse_int_option(registry, DB_PORT),
            max_open_connections=_parse_int_option(registry, DB_MAX_CONNECTIONS),
            max_idle_connections=_parse_int_option(registry, DB_MAX_IDLE_CONNECTIONS),
            url=None,
            conn_max_lifetime=cls.model_fields["conn_max_lifetime"].default,
            pool_pre_ping=cls.model_fields["pool_pre_ping"].default,
            echo=cls.model_fields["echo"].default,
        )

    def sqlalchemy_url(self) -> URL:
        """构建 SQLAlchemy 连接 URL"""
        if self.url:
            return make_url(self.url)
        return URL.create(
            self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.schema_name,
        )

    def describe(self) -> str:
        """不含密码的连接描述，用于日志与错误信息"""
        if self.url:
            return self.sqlalchemy_url().render_as_string(hide_password=True)
        host = self.host if self.port is None else f"{self.host}:{self.port}"
        return f"user {self.user}, host {host}, schema {self.schema_name}"
