"""事务状态枚举

定义数据库句柄种类、事务的生命周期状态以及事务调用的处理方式
"""

from enum import Enum


class HandleKind(str, Enum):
    """数据库句柄种类

    上下文中的"当前数据库句柄"只可能是这两种之一；
    两者都不存在时视为未挂载连接。
    """

    CONNECTION = "connection"
    """连接池句柄：本身不处于事务中"""

    TRANSACTION = "transaction"
    """进行中的事务"""


class TransactionState(str, Enum):
    """事务状态

    状态转换图:

        ACTIVE → COMMITTED
           ↓
        ROLLED_BACK

        ACTIVE → FAILED（提交或回滚本身失败）

    状态说明:
        - ACTIVE: 事务进行中
        - COMMITTED: 事务已成功提交
        - ROLLED_BACK: 事务已回滚
        - FAILED: 提交或回滚时数据库报错，连接已归还连接池
    """

    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """判断是否为终态（不可再转换的状态）"""
        return self != TransactionState.ACTIVE

    def can_commit(self) -> bool:
        """判断是否可以提交"""
        return self == TransactionState.ACTIVE

    def can_rollback(self) -> bool:
        """判断是否可以回滚"""
        return self == TransactionState.ACTIVE


class TransactionMode(str, Enum):
    """一次事务调用的处理方式

    由上下文决定：
        - MOCK_BYPASS: 模拟上下文，完全不涉及事务
        - NESTED_REUSE: 上下文中已有事务，复用且不负责结束
        - OWNING: 由本次调用开启事务，并负责提交或回滚
    """

    MOCK_BYPASS = "mock_bypass"
    NESTED_REUSE = "nested_reuse"
    OWNING = "owning"
