"""JWT 声明中间件测试"""

from typing import Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from jose import jwt

from ymicro.auth import CustomClaims, retrieve_auth_claims
from ymicro.middleware import JWTClaimsMiddleware

SECRET = "middleware-secret"


class TestJWTClaimsMiddleware:

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(JWTClaimsMiddleware, verification_key=SECRET, algorithms=["HS256"])

        @app.get("/whoami")
        def whoami(claims: Optional[CustomClaims] = Depends(retrieve_auth_claims)):
            return {"user": claims.preferred_username if claims else None}

        return TestClient(app)

    def test_valid_token(self, client):
        """测试有效令牌解析出用户名"""
        token = jwt.encode({"preferred_username": "tom"}, SECRET, algorithm="HS256")

        response = client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"user": "tom"}

    def test_no_token_passes_through(self, client):
        """测试未携带令牌时放行且没有声明"""
        response = client.get("/whoami")

        assert response.status_code == 200
        assert response.json() == {"user": None}

    def test_invalid_signature_returns_401(self, client):
        """测试签名无效返回 401"""
        token = jwt.encode({"preferred_username": "tom"}, "wrong", algorithm="HS256")

        response = client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert set(response.json()) == {"description", "detail"}

    def test_non_bearer_header_returns_401(self, client):
        """测试非 Bearer 认证头返回 401"""
        response = client.get("/whoami", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401

    def test_docs_skipped(self, client):
        """测试文档路径不解析令牌"""
        response = client.get("/openapi.json", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200
