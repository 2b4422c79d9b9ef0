# 요청/응답 스키마 정의 (Pydantic 모델)

from pydantic import BaseModel, Field

from ..models.user import User

class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)

# 로그인은 길이 제한 없이 받음: 형식이 어긋난 값도 "잘못된 자격 증명"(400)으로 처리
class LoginRequest(BaseModel):
    username: str
    password: str

class UserPublic(BaseModel):
    id: str
    username: str
    avatar: str = ""

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(id=str(user.id), username=user.username, avatar=user.avatar_url)

class LoginResponse(BaseModel):
    token: str
    user: UserPublic

class MessageResponse(BaseModel):
    message: str
