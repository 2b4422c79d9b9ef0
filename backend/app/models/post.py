# Post 도메인 모델 (Beanie Document)
# - 제목/내용/분류(type), 이미지 URL 최대 3개
# - author_id는 User를 가리키는 참조일 뿐 소유 관계가 아님 (조회 시에만 join)
# - 조회수/좋아요/댓글은 저장만 하고 변경하는 API는 없음

from datetime import datetime
from typing import List

from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field, field_validator
import pymongo

from .user import utcnow

MAX_IMAGES_PER_POST = 3


class Comment(BaseModel):
    content: str
    author_id: PydanticObjectId
    created_at: datetime = Field(default_factory=utcnow)


class Post(Document):
    title: str
    content: str
    category: str
    image_urls: List[str] = Field(default_factory=list)
    author_id: PydanticObjectId
    view_count: int = 0
    like_count: int = 0
    comments: List[Comment] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("image_urls")
    @classmethod
    def _limit_images(cls, value: List[str]) -> List[str]:
        if len(value) > MAX_IMAGES_PER_POST:
            raise ValueError(f"a post can hold at most {MAX_IMAGES_PER_POST} images")
        return value

    class Settings:
        name = "posts"
        # 목록 조회: 분류 필터 + 최신순
        indexes = [
            [("category", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)],
            [("created_at", pymongo.DESCENDING)],
        ]
