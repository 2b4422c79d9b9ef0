# 인증 서비스 레이어
# - username 중복 체크, 회원가입
# - 로그인 (비밀번호 검증, 세션 토큰 발급)

import logging
from typing import Tuple

from fastapi import Depends
from pymongo.errors import DuplicateKeyError

from ..core.exceptions import InvalidCredentials, UsernameAlreadyExists
from ..core.security import PasswordHasher, TokenService, get_password_hasher, get_token_service
from ..models.user import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repo: UserRepository, hasher: PasswordHasher, tokens: TokenService):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, username: str, password: str) -> User:
        # 사전 조회는 최적화일 뿐, 최종 판단은 unique 인덱스
        existing = await self.repo.get_by_username(username)
        if existing:
            raise UsernameAlreadyExists()
        password_hash = await self.hasher.hash_async(password)
        try:
            user = await self.repo.create(username, password_hash)
        except DuplicateKeyError:
            logger.info(f"[Auth] Concurrent registration lost the race for username={username!r}")
            raise UsernameAlreadyExists()
        logger.info(f"[Auth] Registered user id={user.id}")
        return user

    async def verify_credentials(self, username: str, password: str) -> User:
        user = await self.repo.get_by_username(username)
        if not user or not await self.hasher.verify_async(password, user.password_hash):
            logger.info("[Auth] Login rejected")
            raise InvalidCredentials()
        return user

    async def login(self, username: str, password: str) -> Tuple[str, User]:
        user = await self.verify_credentials(username, password)
        return self.tokens.issue(str(user.id)), user


def get_auth_service(
    repo: UserRepository = Depends(UserRepository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(repo, hasher, tokens)
