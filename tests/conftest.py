"""测试公共配置

提供内存数据库引擎、连接池句柄与问候语表等公共 fixtures。
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from ymicro.database import ActiveTransaction, HandleKind, PooledConnection
from ymicro.features.sample.adapter import metadata


@pytest.fixture(scope="function")
def memory_engine():
    """创建内存数据库引擎

    使用 StaticPool 确保所有操作使用同一个连接，
    避免 SQLite 内存数据库不同连接看不到数据的问题。
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def pooled_connection(memory_engine):
    """包装内存引擎的连接池句柄"""
    return PooledConnection(memory_engine)


@pytest.fixture
def greetings_db(pooled_connection):
    """已建好 greetings 表的连接池句柄"""
    metadata.create_all(bind=pooled_connection.engine)
    return pooled_connection


@pytest.fixture
def mock_transaction():
    """记录 commit/rollback 调用的事务句柄替身"""
    return MagicMock(spec=ActiveTransaction, kind=HandleKind.TRANSACTION)


@pytest.fixture
def mock_connection(mock_transaction):
    """begin() 返回 mock_transaction 的连接池句柄替身"""
    connection = MagicMock(spec=PooledConnection, kind=HandleKind.CONNECTION)
    connection.begin.return_value = mock_transaction
    return connection
