"""应用装配

create_app 根据配置注册表创建 FastAPI 应用、安装标准中间件并挂载控制器；
listen 使用 uvicorn 启动服务。

使用示例:
    app = create_app(registry, connection, [SampleController(reader, writer)])
    listen(app, registry)
"""

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from ymicro.config import Registry
from ymicro.config.shared_options import (
    ALLOWED_CORS_ORIGINS,
    JWT_ALGORITHMS,
    JWT_VERIFICATION_KEY,
    LISTEN_PORT,
)
from ymicro.database import PooledConnection
from ymicro.log import get_logger
from ymicro.middleware import (
    DatabaseContextMiddleware,
    JWTClaimsMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
)
from ymicro.response import register_exception_handlers
from ymicro.version import __version__

logger = get_logger("ymicro.router")

DEFAULT_LISTEN_PORT = 8080
DEFAULT_CORS_ORIGINS = ["http://localhost:8080"]
DEFAULT_JWT_ALGORITHMS = ["HS256"]


@runtime_checkable
class Controller(Protocol):
    """控制器：把自己的路由挂到应用上"""

    def attach_routes(self, app: FastAPI) -> None:
        ...


def _split_list(raw: Optional[str], default: List[str]) -> List[str]:
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def install_standard_middleware(app: FastAPI, registry: Registry, connection: PooledConnection) -> None:
    """安装所有服务共用的中间件

    执行顺序（由外到内）: CORS → 请求ID → 请求日志 → JWT 声明 → 数据库上下文
    """
    # add_middleware 后添加的在外层
    app.add_middleware(DatabaseContextMiddleware, connection=connection)

    verification_key = registry.get(JWT_VERIFICATION_KEY)
    if verification_key:
        app.add_middleware(
            JWTClaimsMiddleware,
            verification_key=verification_key,
            algorithms=_split_list(registry.get(JWT_ALGORITHMS), DEFAULT_JWT_ALGORITHMS),
        )
    else:
        logger.info("未配置 JWT_VERIFICATION_KEY，不解析 JWT 声明")

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_split_list(registry.get(ALLOWED_CORS_ORIGINS), DEFAULT_CORS_ORIGINS),
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        allow_credentials=True,
    )


def attach_controllers(app: FastAPI, controllers: Iterable[Controller]) -> None:
    for controller in controllers:
        controller.attach_routes(app)


def create_app(
    registry: Registry,
    connection: PooledConnection,
    controllers: Iterable[Controller] = (),
    title: str = "ymicro",
) -> FastAPI:
    """创建并装配 FastAPI 应用"""
    app = FastAPI(title=title, version=__version__)
    register_exception_handlers(app)
    install_standard_middleware(app, registry, connection)
    attach_controllers(app, controllers)
    return app


def listen_port(registry: Registry) -> int:
    raw = registry.get(LISTEN_PORT)
    if raw is None:
        return DEFAULT_LISTEN_PORT
    return int(raw)


def listen(app: FastAPI, registry: Registry, host: str = "0.0.0.0") -> None:
    """启动 HTTP 服务，阻塞直到服务退出"""
    port = listen_port(registry)
    logger.info(f"服务监听端口 {port}")
    uvicorn.run(app, host=host, port=port, log_config=None)
