"""应用装配测试"""

from typing import Optional
from unittest.mock import MagicMock, patch

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from jose import jwt

from ymicro.auth import CustomClaims, retrieve_auth_claims
from ymicro.config import IncorrectConfigurationError, RegistryBuilder
from ymicro.config.shared_options import SERVICE_OPTIONS
from ymicro.database import HandleKind, retrieve_from_context
from ymicro.request import RequestContext, get_request_context
from ymicro.router import (
    DEFAULT_LISTEN_PORT,
    Controller,
    attach_controllers,
    create_app,
    listen,
    listen_port,
)


def _registry(**env):
    values = {"IS_PRODUCTION": "false"}
    values.update(env)
    builder = RegistryBuilder.mock(values)
    builder.add_options(SERVICE_OPTIONS)
    return builder.verify_and_build()


class ContextEchoController:
    """回显请求上下文句柄与 JWT 用户名的控制器"""

    def attach_routes(self, app: FastAPI) -> None:
        @app.get("/echo")
        def echo(
            ctx: RequestContext = Depends(get_request_context),
            claims: Optional[CustomClaims] = Depends(retrieve_auth_claims),
        ):
            return {
                "kind": retrieve_from_context(ctx).kind.value,
                "user": claims.preferred_username if claims else None,
            }


class TestCreateApp:

    def test_database_context_installed(self, pooled_connection):
        """测试请求上下文中带有连接池句柄"""
        client = TestClient(create_app(_registry(), pooled_connection, [ContextEchoController()]))

        response = client.get("/echo")

        assert response.status_code == 200
        assert response.json() == {"kind": HandleKind.CONNECTION.value, "user": None}
        assert response.headers.get("x-request-id")

    def test_jwt_disabled_without_key(self, pooled_connection):
        """测试未配置验签密钥时不解析令牌"""
        client = TestClient(create_app(_registry(), pooled_connection, [ContextEchoController()]))

        response = client.get("/echo", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200
        assert response.json()["user"] is None

    def test_jwt_enabled_with_key(self, pooled_connection):
        registry = _registry(JWT_VERIFICATION_KEY="router-secret", JWT_ALGORITHMS="HS256")
        client = TestClient(create_app(registry, pooled_connection, [ContextEchoController()]))
        token = jwt.encode({"preferred_username": "tom"}, "router-secret", algorithm="HS256")

        ok = client.get("/echo", headers={"Authorization": f"Bearer {token}"})
        rejected = client.get("/echo", headers={"Authorization": "Bearer garbage"})

        assert ok.json()["user"] == "tom"
        assert rejected.status_code == 401

    def test_unknown_route_uses_api_error(self, pooled_connection):
        client = TestClient(create_app(_registry(), pooled_connection))

        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"description": "Not Found", "detail": "Not Found"}

    def test_cors_preflight(self, pooled_connection):
        """测试 CORS 预检请求"""
        registry = _registry(ALLOWED_CORS_ORIGINS="https://app.example.com, https://admin.example.com")
        client = TestClient(create_app(registry, pooled_connection, [ContextEchoController()]))

        response = client.options("/echo", headers={
            "Origin": "https://admin.example.com",
            "Access-Control-Request-Method": "GET",
        })

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://admin.example.com"


class TestAttachControllers:

    def test_controller_protocol(self):
        assert isinstance(ContextEchoController(), Controller)

    def test_attach_calls_each_controller(self):
        app = FastAPI()
        controllers = [MagicMock(), MagicMock()]

        attach_controllers(app, controllers)

        for controller in controllers:
            controller.attach_routes.assert_called_once_with(app)


class TestListen:

    def test_default_port(self):
        assert listen_port(_registry()) == DEFAULT_LISTEN_PORT

    def test_configured_port(self):
        assert listen_port(_registry(LISTEN_PORT="9000")) == 9000

    def test_invalid_port_rejected_by_registry(self):
        with pytest.raises(IncorrectConfigurationError):
            _registry(LISTEN_PORT="not-a-port")

    def test_listen_runs_uvicorn(self):
        app = FastAPI()

        with patch("ymicro.router.router.uvicorn.run") as run:
            listen(app, _registry(LISTEN_PORT="9000"))

        run.assert_called_once()
        assert run.call_args.args[0] is app
        assert run.call_args.kwargs["port"] == 9000
