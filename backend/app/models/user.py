# User 도메인 모델 (Beanie Document)
# - username, 비밀번호 해시, 아바타, 생성일
# - username은 unique 인덱스 (중복 가입의 최종 판단 기준)

from datetime import datetime, timezone
from beanie import Document, Indexed
from pydantic import Field


def utcnow() -> datetime:
    # MongoDB 저장 정밀도(밀리초)에 맞춤
    now = datetime.now(tz=timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class User(Document):
    username: Indexed(str, unique=True)  # 중복 방지 인덱스
    password_hash: str = Field(repr=False)
    avatar_url: str = ""
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "users"  # 컬렉션명
