"""版本信息"""

__version__ = "0.1.0"
__author__ = "ymicro team"
__description__ = "分层微服务模板：配置注册表、可重入事务上下文、FastAPI 路由与示例问候语功能"
