# 보안/인증 유틸리티
# - 비밀번호 해싱/검증 (bcrypt, 스레드풀에서 실행)
# - 세션 토큰(JWT) 발급/검증
# - 현재 사용자 id 가져오기(의존성)

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from .config import Settings, get_app_settings
from .exceptions import Unauthorized

logger = logging.getLogger(__name__)

# auto_error=False: 헤더가 없을 때도 우리 Unauthorized(401)로 응답하기 위함
bearer_scheme = HTTPBearer(auto_error=False)


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        return self.context.verify(plain_password, hashed_password)

    # bcrypt는 CPU를 오래 쓰므로 이벤트 루프를 막지 않도록 스레드풀에서 실행
    async def hash_async(self, password: str) -> str:
        return await run_in_threadpool(self.hash, password)

    async def verify_async(self, plain_password: str, hashed_password: str) -> bool:
        return await run_in_threadpool(self.verify, plain_password, hashed_password)


class TokenService:
    """세션 토큰 발급/검증.

    토큰에는 {"sub": user_id}와 발급/만료 시각만 담습니다.
    갱신(refresh)이나 폐기(revocation)는 없으며, 만료가 유일한 무효화 수단입니다.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(days=expire_days)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.JWT_SECRET_KEY, settings.JWT_ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_DAYS)

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(tz=timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "nbf": now,
            "exp": now + self.expires_delta,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> str:
        if not token:
            raise Unauthorized()
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("[Auth] Rejected expired token")
            raise Unauthorized("Token has expired")
        except jwt.PyJWTError as e:
            logger.info(f"[Auth] Rejected invalid token: {e}")
            raise Unauthorized()
        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise Unauthorized()
        return user_id


def get_token_service(settings: Settings = Depends(get_app_settings)) -> TokenService:
    return TokenService.from_settings(settings)


def get_password_hasher(settings: Settings = Depends(get_app_settings)) -> PasswordHasher:
    return PasswordHasher(settings.BCRYPT_ROUNDS)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> PydanticObjectId:
    # Authorization: Bearer <token> 파싱 및 검증
    # 사용자 존재 여부는 다시 확인하지 않음 (토큰의 sub를 그대로 신뢰)
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized()
    user_id = tokens.verify(credentials.credentials)
    try:
        return PydanticObjectId(user_id)
    except (InvalidId, TypeError):
        raise Unauthorized()
