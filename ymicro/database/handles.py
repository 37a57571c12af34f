"""数据库句柄

连接池句柄（PooledConnection）与事务句柄（ActiveTransaction）提供相同的查询接口，
数据访问代码不需要关心当前是否处于事务中。

使用示例:
    handle = retrieve_from_context(ctx)
    rows = handle.fetch_all("select greetingText from greetings")
    handle.execute("insert into greetings(greetingText) values (:text)", {"text": "Hello"})
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, TypeVar, Union

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine, Row, RootTransaction
from sqlalchemy.sql.expression import Executable

from .exceptions import (
    TransactionAlreadyCommittedError,
    TransactionAlreadyRolledBackError,
    TransactionNotActiveError,
)
from .state import HandleKind, TransactionState

T = TypeVar("T")

Statement = Union[str, Executable]
Params = Optional[Union[Mapping[str, Any], List[Mapping[str, Any]]]]


def _as_executable(statement: Statement) -> Executable:
    if isinstance(statement, str):
        return text(statement)
    return statement


class QueryHandle:
    """两类句柄共用的查询接口

    子类只需实现 _run：在一个可用的 SQLAlchemy Connection 上执行回调。
    """

    kind: HandleKind

    def _run(self, work: Callable[[Connection], T]) -> T:
        raise NotImplementedError

    def execute(self, statement: Statement, params: Params = None) -> int:
        """执行语句，不读取结果，返回受影响行数"""
        return self._run(lambda conn: conn.execute(_as_executable(statement), params).rowcount)

    def fetch_all(self, statement: Statement, params: Params = None) -> List[Row]:
        """查询全部行（整个结果集一次性读入内存）"""
        return self._run(lambda conn: conn.execute(_as_executable(statement), params).all())

    def fetch_one(self, statement: Statement, params: Params = None) -> Optional[Row]:
        """查询第一行，没有结果时返回 None"""
        return self._run(lambda conn: conn.execute(_as_executable(statement), params).first())

    def fetch_scalars(self, statement: Statement, params: Params = None) -> List[Any]:
        """查询每行第一列组成的列表"""
        return self._run(lambda conn: conn.execute(_as_executable(statement), params).scalars().all())

    def fetch_scalar(self, statement: Statement, params: Params = None) -> Any:
        """查询第一行第一列，没有结果时返回 None"""
        return self._run(lambda conn: conn.execute(_as_executable(statement), params).scalar())


class PooledConnection(QueryHandle):
    """连接池句柄

    整个进程共享一个实例。直接在它上面执行的语句各自在独立的短事务中自动提交。
    """

    kind = HandleKind.CONNECTION

    def __init__(self, engine: Engine):
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def _run(self, work: Callable[[Connection], T]) -> T:
        with self._engine.begin() as conn:
            return work(conn)

    def begin(self) -> ActiveTransaction:
        """从连接池取出一个连接并开启事务"""
        connection = self._engine.connect()
        try:
            transaction = connection.begin()
        except BaseException:
            connection.close()
            raise
        return ActiveTransaction(connection, transaction)

    def ping(self) -> None:
        """检查数据库是否可达，不可达时抛出驱动异常"""
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        """关闭连接池中的所有连接"""
        self._engine.dispose()

    def __repr__(self) -> str:
        return f"PooledConnection(url={self._engine.url.render_as_string(hide_password=True)!r})"


class ActiveTransaction(QueryHandle):
    """进行中的事务

    由开启它的调用负责结束，提交或回滚只能发生一次，结束后连接归还连接池。
    """

    kind = HandleKind.TRANSACTION

    def __init__(self, connection: Connection, transaction: RootTransaction):
        self._connection = connection
        self._transaction = transaction
        self._state = TransactionState.ACTIVE

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return not self._state.is_terminal()

    def _run(self, work: Callable[[Connection], T]) -> T:
        if not self.is_active:
            raise TransactionNotActiveError(f"无法执行语句：事务状态为 {self._state.value}")
        return work(self._connection)

    def _ensure_can_finalize(self, allowed: bool) -> None:
        if allowed:
            return
        if self._state == TransactionState.COMMITTED:
            raise TransactionAlreadyCommittedError()
        if self._state == TransactionState.ROLLED_BACK:
            raise TransactionAlreadyRolledBackError()
        raise TransactionNotActiveError(f"事务状态为 {self._state.value}")

    def commit(self) -> None:
        """提交事务"""
        self._ensure_can_finalize(self._state.can_commit())
        try:
            self._transaction.commit()
        except Exception:
            self._state = TransactionState.FAILED
            raise
        else:
            self._state = TransactionState.COMMITTED
        finally:
            self._connection.close()

    def rollback(self) -> None:
        """回滚事务"""
        self._ensure_can_finalize(self._state.can_rollback())
        try:
            self._transaction.rollback()
        except Exception:
            self._state = TransactionState.FAILED
            raise
        else:
            self._state = TransactionState.ROLLED_BACK
        finally:
            self._connection.close()

    def __repr__(self) -> str:
        return f"ActiveTransaction(state={self._state.value})"
