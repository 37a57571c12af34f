"""数据库模块

- PooledConnection / ActiveTransaction: 连接池句柄与事务句柄，提供相同的查询接口
- attach_connection / retrieve_from_context: 在请求上下文中挂载与取出数据库句柄
- transaction / with_transaction / with_transaction_returning: 可重入事务
- connect / must_be_connected: 启动时创建连接池并确认数据库可达

使用示例:
    from ymicro.database import retrieve_from_context, with_transaction

    def add(ctx, text):
        def op(tx_ctx):
            retrieve_from_context(tx_ctx).execute(
                "insert into greetings(greetingText) values (:text)", {"text": text}
            )
        with_transaction(ctx, op)
"""

from .state import HandleKind, TransactionMode, TransactionState
from .exceptions import (
    DatabaseError,
    DatabaseConfigurationError,
    DatabaseUnreachableError,
    NoConnectionAttachedError,
    TransactionError,
    TransactionNotActiveError,
    TransactionAlreadyCommittedError,
    TransactionAlreadyRolledBackError,
    TransactionBeginError,
    TransactionCommitError,
    TransactionRollbackError,
)
from .handles import ActiveTransaction, PooledConnection, QueryHandle
from .context import (
    DatabaseHandle,
    PreparedTransaction,
    attach_connection,
    prepare_transaction,
    retrieve_from_context,
    transaction,
    transactional,
    with_transaction,
    with_transaction_returning,
)
from .connection import connect, connect_from_registry
from .verification import must_be_connected

__all__ = [
    "HandleKind",
    "TransactionMode",
    "TransactionState",
    "DatabaseError",
    "DatabaseConfigurationError",
    "DatabaseUnreachableError",
    "NoConnectionAttachedError",
    "TransactionError",
    "TransactionNotActiveError",
    "TransactionAlreadyCommittedError",
    "TransactionAlreadyRolledBackError",
    "TransactionBeginError",
    "TransactionCommitError",
    "TransactionRollbackError",
    "ActiveTransaction",
    "PooledConnection",
    "QueryHandle",
    "DatabaseHandle",
    "PreparedTransaction",
    "attach_connection",
    "prepare_transaction",
    "retrieve_from_context",
    "transaction",
    "transactional",
    "with_transaction",
    "with_transaction_returning",
    "connect",
    "connect_from_registry",
    "must_be_connected",
]
