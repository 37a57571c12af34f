"""数据库上下文中间件测试"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from ymicro.database import HandleKind, retrieve_from_context, with_transaction_returning
from ymicro.middleware import DatabaseContextMiddleware
from ymicro.request import RequestContext, get_request_context


class TestDatabaseContextMiddleware:

    @pytest.fixture
    def app(self, pooled_connection):
        app = FastAPI()
        app.add_middleware(DatabaseContextMiddleware, connection=pooled_connection)

        @app.get("/handle")
        def handle_kind(ctx: RequestContext = Depends(get_request_context)):
            handle = retrieve_from_context(ctx)
            return {"kind": handle.kind.value, "is_pool": handle is pooled_connection}

        @app.get("/in-transaction")
        def in_transaction(ctx: RequestContext = Depends(get_request_context)):
            kind = with_transaction_returning(ctx, lambda tx_ctx: retrieve_from_context(tx_ctx).kind)
            return {"kind": kind.value}

        return app

    def test_connection_attached(self, app):
        """测试请求上下文携带连接池句柄"""
        response = TestClient(app).get("/handle")

        assert response.json() == {"kind": HandleKind.CONNECTION.value, "is_pool": True}

    def test_transaction_inside_request(self, app):
        """测试请求内开启事务"""
        response = TestClient(app).get("/in-transaction")

        assert response.json() == {"kind": HandleKind.TRANSACTION.value}

    def test_without_middleware_context_is_empty(self):
        """测试未安装中间件时上下文中没有句柄"""
        app = FastAPI()

        @app.get("/ctx")
        def ctx_endpoint(ctx: RequestContext = Depends(get_request_context)):
            return {"empty": ctx.parent is None}

        assert TestClient(app).get("/ctx").json() == {"empty": True}
