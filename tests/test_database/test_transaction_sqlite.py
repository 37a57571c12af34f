"""可重入事务集成测试（SQLite 内存数据库）"""

import pytest
from sqlalchemy import func, insert, select

from ymicro.database import (
    ActiveTransaction,
    NoConnectionAttachedError,
    TransactionState,
    attach_connection,
    retrieve_from_context,
    transaction,
    with_transaction,
    with_transaction_returning,
)
from ymicro.features.sample.adapter import greetings
from ymicro.request import RequestContext


class OperationFailed(Exception):
    pass


def _insert(ctx, text):
    retrieve_from_context(ctx).execute(insert(greetings).values(greetingText=text))


def _count(handle) -> int:
    return handle.fetch_scalar(select(func.count()).select_from(greetings))


class TestTransactionWithSQLite:
    """真实数据库上的提交与回滚"""

    @pytest.fixture
    def ctx(self, greetings_db):
        return attach_connection(RequestContext.background(), greetings_db)

    def test_commit_persists_rows(self, ctx, greetings_db):
        """测试提交后数据可见"""
        with_transaction(ctx, lambda tx_ctx: _insert(tx_ctx, "Hello"))

        assert _count(greetings_db) == 1

    def test_error_rolls_back_rows(self, ctx, greetings_db):
        """测试操作失败时数据回滚"""
        def op(tx_ctx):
            _insert(tx_ctx, "Hello")
            raise OperationFailed("after insert")

        with pytest.raises(OperationFailed):
            with_transaction(ctx, op)

        assert _count(greetings_db) == 0

    def test_nested_writes_share_one_transaction(self, ctx, greetings_db):
        """测试嵌套调用写入同一事务，外层失败时全部回滚"""
        def outer(tx_ctx):
            with_transaction(tx_ctx, lambda inner_ctx: _insert(inner_ctx, "Hola"))
            with_transaction(tx_ctx, lambda inner_ctx: _insert(inner_ctx, "Howdy"))
            assert _count(retrieve_from_context(tx_ctx)) == 2
            raise OperationFailed("outer failure")

        with pytest.raises(OperationFailed):
            with_transaction(ctx, outer)

        assert _count(greetings_db) == 0

    def test_returning_reads_inside_transaction(self, ctx):
        """测试事务内可以读到尚未提交的写入"""
        def op(tx_ctx):
            _insert(tx_ctx, "Bonjour")
            return _count(retrieve_from_context(tx_ctx))

        assert with_transaction_returning(ctx, op) == 1

    def test_transaction_is_finished_after_call(self, ctx):
        """测试调用结束后事务已提交且不可再用"""
        captured = []
        with_transaction(ctx, lambda tx_ctx: captured.append(retrieve_from_context(tx_ctx)))

        tx = captured[0]
        assert isinstance(tx, ActiveTransaction)
        assert tx.state == TransactionState.COMMITTED

    def test_rolled_back_state(self, ctx):
        """测试回滚后事务状态"""
        captured = []

        with pytest.raises(OperationFailed):
            with transaction(ctx) as tx_ctx:
                captured.append(retrieve_from_context(tx_ctx))
                raise OperationFailed("rollback me")

        assert captured[0].state == TransactionState.ROLLED_BACK

    def test_outer_context_still_uses_pool(self, ctx, greetings_db):
        """测试事务结束后原上下文仍解析为连接池句柄"""
        with_transaction(ctx, lambda tx_ctx: _insert(tx_ctx, "Greetings"))

        assert retrieve_from_context(ctx) is greetings_db

    def test_missing_connection(self):
        """测试未挂载连接时抛出"""
        with pytest.raises(NoConnectionAttachedError):
            with_transaction(RequestContext.background(), lambda tx_ctx: None)
