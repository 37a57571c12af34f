"""JWT 声明

RawJWTClaims 对应令牌中的原始载荷，CustomClaims 是应用实际使用的整理后的声明。

使用示例:
    from ymicro.auth import decode_claims

    claims = decode_claims(token, key="secret", algorithms=["HS256"])
    claims.preferred_username
"""

import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from jose import jwt
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_datetime(timestamp: Optional[int]) -> Optional[datetime]:
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class RegisteredClaims(BaseModel):
    """RFC 7519 注册声明"""
    issuer: Optional[str] = None
    subject: Optional[str] = None
    audience: List[str] = Field(default_factory=list)
    expires_at: Optional[datetime] = None
    not_before: Optional[datetime] = None
    issued_at: Optional[datetime] = None
    jwt_id: Optional[str] = None


class CustomClaims(RegisteredClaims):
    """应用使用的 JWT 声明"""
    is_service_account: bool = False
    preferred_username: str = ""
    name: str = ""
    given_name: str = ""
    family_name: str = ""
    email: str = ""
    group_full: List[str] = Field(default_factory=list)
    organization: str = ""


class RawJWTClaims(BaseModel):
    """令牌载荷中的原始声明"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Union[str, List[str], None] = None
    exp: Optional[int] = None
    nbf: Optional[int] = None
    iat: Optional[int] = None
    jti: Optional[str] = None

    client_id: str = Field(default="", alias="clientId")
    preferred_username: str = ""
    name: str = ""
    given_name: str = ""
    family_name: str = ""
    email: str = ""
    organization: str = ""
    group_full: List[str] = Field(default_factory=list, alias="group-full")

    @field_validator("group_full", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value if value is not None else []

    def registered(self) -> dict:
        audience = [self.aud] if isinstance(self.aud, str) else list(self.aud or [])
        return dict(
            issuer=self.iss,
            subject=self.sub,
            audience=audience,
            expires_at=_to_datetime(self.exp),
            not_before=_to_datetime(self.nbf),
            issued_at=_to_datetime(self.iat),
            jwt_id=self.jti,
        )

    def to_custom_claims(self) -> CustomClaims:
        """整理为应用使用的声明

        带有 clientId 的令牌属于服务账号，用户名与姓名都取 clientId。
        """
        if self.client_id:
            return CustomClaims(
                **self.registered(),
                is_service_account=True,
                preferred_username=self.client_id,
                name=self.client_id,
                given_name="service",
                family_name="account",
                email="",
                organization=self.organization,
            )
        return CustomClaims(
            **self.registered(),
            is_service_account=False,
            preferred_username=self.preferred_username,
            name=self.name,
            given_name=self.given_name,
            family_name=self.family_name,
            email=self.email,
            group_full=self.group_full,
            organization=self.organization,
        )


def decode_claims(
    token: str,
    key: Optional[str] = None,
    algorithms: Sequence[str] = ("HS256",),
) -> CustomClaims:
    """解析 JWT 并转换为 CustomClaims

    Args:
        token: JWT 字符串（不含 Bearer 前缀）
        key: 验签密钥；为 None 时只解析不验签（由网关负责验签的部署方式）
        algorithms: 允许的签名算法

    Raises:
        jose.JWTError: 令牌格式错误、签名无效或已过期
    """
    if key is None:
        payload = jwt.get_unverified_claims(token)
    else:
        payload = jwt.decode(
            token,
            key,
            algorithms=list(algorithms),
            options={"verify_aud": False},
        )
    return RawJWTClaims.model_validate(payload).to_custom_claims()


def mock_custom_claims() -> CustomClaims:
    """构造用于测试需要认证的接口的声明"""
    now = int(time.time())
    return CustomClaims(
        issuer="issuer",
        subject="subject",
        audience=[""],
        expires_at=_to_datetime(now + 600),
        not_before=_to_datetime(now),
        issued_at=_to_datetime(now),
        jwt_id="1",
        is_service_account=False,
        preferred_username="preferredUsername",
        name="name",
        given_name="givenName",
        family_name="familyName",
        email="email",
        group_full=[""],
        organization="organization",
    )
