"""路由模块

- Controller: 控制器协议（attach_routes）
- create_app: 创建 FastAPI 应用并安装标准中间件
- listen: 使用 uvicorn 启动服务
"""

from .router import (
    Controller,
    DEFAULT_LISTEN_PORT,
    attach_controllers,
    create_app,
    install_standard_middleware,
    listen,
    listen_port,
)

__all__ = [
    "Controller",
    "DEFAULT_LISTEN_PORT",
    "attach_controllers",
    "create_app",
    "install_standard_middleware",
    "listen",
    "listen_port",
]
