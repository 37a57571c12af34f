"""Request ID 中间件测试

测试请求 ID 生成和传递功能
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ymicro.middleware import RequestIDMiddleware, get_request_id


class TestRequestIDMiddleware:
    """RequestIDMiddleware 测试"""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)

        @app.get("/test")
        def test_endpoint():
            return {"request_id": get_request_id()}

        return TestClient(app)

    def test_request_id_generated(self, client):
        """测试请求 ID 自动生成"""
        response = client.get("/test")

        assert response.status_code == 200
        assert len(response.json()["request_id"]) >= 8

    def test_request_id_consistent_within_request(self, client):
        """测试响应体和响应头中的 ID 一致"""
        response = client.get("/test")

        assert response.json()["request_id"] == response.headers["x-request-id"]

    def test_request_id_unique(self, client):
        """测试请求 ID 唯一"""
        ids = {client.get("/test").json()["request_id"] for _ in range(10)}

        assert len(ids) == 10

    def test_incoming_request_id_reused(self, client):
        """测试沿用调用方传入的请求 ID"""
        response = client.get("/test", headers={"X-Request-ID": "upstream-id-123"})

        assert response.json()["request_id"] == "upstream-id-123"
        assert response.headers["x-request-id"] == "upstream-id-123"


class TestGetRequestId:

    def test_outside_request(self):
        """测试请求之外返回空字符串"""
        assert get_request_id() == ""
