"""JWT 声明测试"""

import time

import pytest
from jose import JWTError, jwt

from ymicro.auth import RawJWTClaims, decode_claims, mock_custom_claims

SECRET = "test-secret"


def _token(payload, key=SECRET):
    return jwt.encode(payload, key, algorithm="HS256")


class TestRawJWTClaims:
    """原始声明转换测试"""

    def test_user_account(self):
        """测试普通用户令牌"""
        raw = RawJWTClaims.model_validate({
            "sub": "user-1",
            "preferred_username": "tom",
            "name": "Tom Cat",
            "given_name": "Tom",
            "family_name": "Cat",
            "email": "tom@example.com",
            "organization": "acme",
            "group-full": ["/admins"],
            "aud": "ymicro",
        })

        claims = raw.to_custom_claims()

        assert not claims.is_service_account
        assert claims.preferred_username == "tom"
        assert claims.given_name == "Tom"
        assert claims.group_full == ["/admins"]
        assert claims.subject == "user-1"
        assert claims.audience == ["ymicro"]

    def test_service_account(self):
        """测试带 clientId 的服务账号令牌"""
        raw = RawJWTClaims.model_validate({
            "clientId": "billing-service",
            "preferred_username": "ignored",
            "email": "ignored@example.com",
            "organization": "acme",
        })

        claims = raw.to_custom_claims()

        assert claims.is_service_account
        assert claims.preferred_username == "billing-service"
        assert claims.name == "billing-service"
        assert claims.given_name == "service"
        assert claims.family_name == "account"
        assert claims.email == ""
        assert claims.organization == "acme"

    def test_timestamps_converted(self):
        now = int(time.time())
        claims = RawJWTClaims.model_validate({"exp": now, "iat": now}).to_custom_claims()

        assert int(claims.expires_at.timestamp()) == now
        assert claims.not_before is None


class TestDecodeClaims:

    def test_verified_decode(self):
        token = _token({"preferred_username": "tom"})

        assert decode_claims(token, SECRET, ["HS256"]).preferred_username == "tom"

    def test_wrong_key_rejected(self):
        token = _token({"preferred_username": "tom"}, key="other-secret")

        with pytest.raises(JWTError):
            decode_claims(token, SECRET, ["HS256"])

    def test_expired_rejected(self):
        token = _token({"preferred_username": "tom", "exp": int(time.time()) - 60})

        with pytest.raises(JWTError):
            decode_claims(token, SECRET, ["HS256"])

    def test_unverified_decode(self):
        """测试不提供密钥时只解析不验签"""
        token = _token({"preferred_username": "tom"}, key="unknown")

        assert decode_claims(token).preferred_username == "tom"

    def test_garbage_rejected(self):
        with pytest.raises(JWTError):
            decode_claims("not-a-token", SECRET)


class TestMockClaims:

    def test_mock_claims(self):
        claims = mock_custom_claims()

        assert claims.preferred_username == "preferredUsername"
        assert not claims.is_service_account
        assert claims.expires_at > claims.issued_at
