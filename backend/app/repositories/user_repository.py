# 사용자 저장소 레이어
# - 데이터 접근(조회/생성)만 담당 (서비스 로직 분리)

from typing import Dict, Iterable, Optional
from beanie import PydanticObjectId
from beanie.operators import In
from ..models.user import User

class UserRepository:
    async def get_by_username(self, username: str) -> Optional[User]:
        # 대소문자 구분 정확히 일치
        return await User.find_one(User.username == username)

    async def create(self, username: str, password_hash: str) -> User:
        # unique 인덱스 위반 시 pymongo DuplicateKeyError가 그대로 올라감
        user = User(username=username, password_hash=password_hash)
        return await user.insert()

    async def get_many(self, user_ids: Iterable[PydanticObjectId]) -> Dict[PydanticObjectId, User]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        users = await User.find(In(User.id, ids)).to_list()
        return {user.id: user for user in users}
