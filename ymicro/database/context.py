"""请求上下文中的数据库句柄与可重入事务

数据库句柄随请求上下文显式传递：
    - attach_connection: 把连接池句柄挂到上下文上
    - retrieve_from_context: 取出当前句柄（事务优先于连接池）
    - transaction / with_transaction / with_transaction_returning: 在事务中执行操作

事务调用按上下文分三种情况处理:
    1. 模拟上下文: 原样执行操作，不开启、不提交、不回滚
    2. 上下文中已有事务: 复用该事务，由最外层调用负责结束
    3. 否则开启新事务，操作成功则提交，抛出异常则回滚

使用示例:
    def handle(ctx):
        with transaction(ctx) as tx_ctx:
            reader.list(tx_ctx)
            writer.add_greeting(tx_ctx, "Hello")

    count = with_transaction_returning(ctx, lambda tx_ctx: repo.count(tx_ctx))
"""

from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Iterator, Optional, TypeVar, Union

from ymicro.log import transaction_logger as logger
from ymicro.request.context import ContextKey, RequestContext
from ymicro.request.testhelper import is_mock_context

from .exceptions import (
    NoConnectionAttachedError,
    TransactionBeginError,
    TransactionCommitError,
    TransactionRollbackError,
)
from .handles import ActiveTransaction, PooledConnection
from .state import HandleKind, TransactionMode

T = TypeVar("T")

DatabaseHandle = Union[PooledConnection, ActiveTransaction]

_CONNECTION_KEY = ContextKey("database.connection")
_TRANSACTION_KEY = ContextKey("database.transaction")


def _current_handle(ctx: RequestContext) -> Optional[DatabaseHandle]:
    transaction = ctx.value(_TRANSACTION_KEY)
    if transaction is not None:
        return transaction
    return ctx.value(_CONNECTION_KEY)


def attach_connection(ctx: RequestContext, connection: PooledConnection) -> RequestContext:
    """派生携带连接池句柄的上下文

    上下文中已经有数据库句柄时原样返回，不会覆盖。
    """
    if _current_handle(ctx) is not None:
        return ctx
    return ctx.with_value(_CONNECTION_KEY, connection)


def retrieve_from_context(ctx: RequestContext) -> DatabaseHandle:
    """取出上下文中的当前数据库句柄

    处于事务中时返回事务，否则返回连接池句柄。

    Raises:
        NoConnectionAttachedError: 上下文中既没有事务也没有连接
    """
    handle = _current_handle(ctx)
    if handle is None:
        raise NoConnectionAttachedError()
    return handle


@dataclass(frozen=True)
class PreparedTransaction:
    """一次事务调用的准备结果

    context 是操作应当使用的上下文；只有 OWNING 模式下 transaction
    由本次调用开启并负责结束。
    """

    context: RequestContext
    mode: TransactionMode
    transaction: Optional[ActiveTransaction] = None

    @property
    def is_mock(self) -> bool:
        return self.mode == TransactionMode.MOCK_BYPASS

    @property
    def is_nested(self) -> bool:
        return self.mode == TransactionMode.NESTED_REUSE

    @property
    def is_owner(self) -> bool:
        return self.mode == TransactionMode.OWNING


def prepare_transaction(ctx: RequestContext) -> PreparedTransaction:
    """按上下文决定事务处理方式，必要时开启新事务

    Raises:
        NoConnectionAttachedError: 非模拟上下文中没有数据库句柄
        TransactionBeginError: 开启事务失败
    """
    if is_mock_context(ctx):
        logger.debug("模拟请求上下文，跳过事务处理")
        return PreparedTransaction(context=ctx, mode=TransactionMode.MOCK_BYPASS)

    handle = retrieve_from_context(ctx)
    if handle.kind == HandleKind.TRANSACTION:
        logger.debug("加入现有事务")
        return PreparedTransaction(context=ctx, mode=TransactionMode.NESTED_REUSE, transaction=handle)

    try:
        transaction = handle.begin()
    except Exception as e:
        logger.error(f"开启事务失败: {e}")
        raise TransactionBeginError(e) from e

    logger.debug("开始新事务")
    return PreparedTransaction(
        context=ctx.with_value(_TRANSACTION_KEY, transaction),
        mode=TransactionMode.OWNING,
        transaction=transaction,
    )


def _commit(prepared: PreparedTransaction) -> None:
    try:
        prepared.transaction.commit()
    except Exception as e:
        logger.error(f"提交事务失败: {e}")
        raise TransactionCommitError(e) from e
    logger.debug("事务提交成功")


def _rollback(prepared: PreparedTransaction, operation_error: BaseException) -> None:
    try:
        prepared.transaction.rollback()
    except Exception as rollback_error:
        logger.error(f"回滚事务失败: {rollback_error}（业务异常: {operation_error!r}）")
        if not isinstance(operation_error, Exception):
            # 中断类异常继续向外传播，回滚异常保留在 __context__ 中
            raise operation_error
        raise TransactionRollbackError(operation_error, rollback_error) from rollback_error
    logger.debug(f"事务已回滚: {operation_error!r}")


@contextmanager
def transaction(ctx: RequestContext) -> Iterator[RequestContext]:
    """在事务中执行 with 代码块

    产出的上下文携带当前事务，块内的数据访问都应使用它。
    块内抛出的异常在回滚后原样向外抛出；回滚也失败时抛出
    TransactionRollbackError，同时携带两个异常。KeyboardInterrupt 等
    非 Exception 的异常即使回滚失败也原样抛出，回滚异常记录在其 __context__ 上。
    正常退出时提交，提交失败抛出 TransactionCommitError。
    """
    prepared = prepare_transaction(ctx)
    if not prepared.is_owner:
        yield prepared.context
        return

    try:
        yield prepared.context
    except BaseException as operation_error:
        _rollback(prepared, operation_error)
        raise
    _commit(prepared)


def with_transaction(ctx: RequestContext, operation: Callable[[RequestContext], None]) -> None:
    """在事务中执行操作

    Args:
        ctx: 请求上下文
        operation: 接收事务上下文的操作
    """
    with transaction(ctx) as tx_ctx:
        operation(tx_ctx)


def with_transaction_returning(ctx: RequestContext, operation: Callable[[RequestContext], T]) -> T:
    """在事务中执行操作并返回其结果

    提交失败时结果被丢弃，只抛出 TransactionCommitError。
    """
    with transaction(ctx) as tx_ctx:
        result = operation(tx_ctx)
    return result


def transactional(func: Callable[..., T]) -> Callable[..., T]:
    """事务装饰器

    被装饰函数的第一个参数必须是请求上下文，调用时会被替换为事务上下文。

    使用示例:
        @transactional
        def transfer(ctx, from_id, to_id, amount):
            handle = retrieve_from_context(ctx)
            ...
    """

    @wraps(func)
    def wrapper(ctx: RequestContext, *args, **kwargs) -> T:
        with transaction(ctx) as tx_ctx:
            return func(tx_ctx, *args, **kwargs)

    return wrapper
