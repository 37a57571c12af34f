"""数据库异常类

定义连接与事务管理相关的异常层次结构
"""

from typing import Tuple, Type


class DatabaseError(Exception):
    """数据库错误基类"""
    pass


class NoConnectionAttachedError(RuntimeError):
    """上下文中没有数据库连接

    属于装配错误（例如未安装数据库上下文中间件），不应被捕获后继续执行。
    """

    def __init__(self, message: str = "上下文中没有数据库连接，请确认已安装数据库上下文中间件"):
        super().__init__(message)


class DatabaseConfigurationError(DatabaseError):
    """数据库连接参数有误（驱动不存在、认证失败等），重试无意义"""
    pass


class DatabaseUnreachableError(DatabaseError):
    """在限定时间内无法连上数据库"""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"数据库在 {timeout:g} 秒内无法连接")


class TransactionError(DatabaseError):
    """事务错误基类

    所有事务相关的异常都继承自此类
    """
    pass


class TransactionNotActiveError(TransactionError):
    """事务未激活错误"""

    def __init__(self, message: str = "事务未激活"):
        super().__init__(message)


class TransactionAlreadyCommittedError(TransactionError):
    """事务已提交错误"""

    def __init__(self, message: str = "事务已提交，无法执行此操作"):
        super().__init__(message)


class TransactionAlreadyRolledBackError(TransactionError):
    """事务已回滚错误"""

    def __init__(self, message: str = "事务已回滚，无法执行此操作"):
        super().__init__(message)


class TransactionBeginError(TransactionError):
    """开启事务失败

    原始驱动异常保存在 original_error 中，同时作为 __cause__。
    """

    def __init__(self, original_error: BaseException):
        self.original_error = original_error
        super().__init__(f"开启事务失败: {original_error}")


class TransactionCommitError(TransactionError):
    """提交事务失败

    业务操作本身已成功，但提交失败，操作结果作废。
    """

    def __init__(self, original_error: BaseException):
        self.original_error = original_error
        super().__init__(f"提交事务失败: {original_error}")


class TransactionRollbackError(TransactionError):
    """业务操作失败后回滚也失败

    同时保留业务异常与回滚异常，可通过属性或 has_cause 结构化判断，
    不需要解析错误消息。

    属性:
        operation_error: 业务操作抛出的原始异常
        rollback_error: 回滚时抛出的异常
    """

    def __init__(self, operation_error: BaseException, rollback_error: BaseException):
        self.operation_error = operation_error
        self.rollback_error = rollback_error
        super().__init__(
            f"业务操作失败后回滚事务也失败: 业务异常 {operation_error!r}, 回滚异常 {rollback_error!r}"
        )

    @property
    def causes(self) -> Tuple[BaseException, BaseException]:
        """(业务异常, 回滚异常)"""
        return (self.operation_error, self.rollback_error)

    def has_cause(self, exc_type: Type[BaseException]) -> bool:
        """业务异常或回滚异常中是否有指定类型"""
        return any(isinstance(cause, exc_type) for cause in self.causes)

    def __repr__(self) -> str:
        return (
            f"TransactionRollbackError(operation_error={self.operation_error!r}, "
            f"rollback_error={self.rollback_error!r})"
        )
