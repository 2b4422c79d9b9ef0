# 게시글 요청/응답 스키마
# - 응답 JSON 키는 camelCase (createdAt, authorId, totalPages ...)
# - 분류/이미지/조회수/좋아요는 기존 클라이언트와 같은 키(type, images, views, likes) 사용

from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.post import Comment, Post
from ..models.user import User
from .user_schema import UserPublic


def _as_utc(value: datetime) -> datetime:
    # DB에서 읽은 값은 tz 정보가 없는 UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CommentPublic(CamelModel):
    content: str
    author_id: str
    created_at: UtcDatetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentPublic":
        return cls(content=comment.content, author_id=str(comment.author_id), created_at=comment.created_at)


class PostPublic(CamelModel):
    id: str
    title: str
    content: str
    category: str = Field(alias="type")
    image_urls: List[str] = Field(alias="images")
    author_id: str
    view_count: int = Field(alias="views")
    like_count: int = Field(alias="likes")
    comments: List[CommentPublic]
    created_at: UtcDatetime

    @classmethod
    def _fields_of(cls, post: Post) -> dict:
        return dict(
            id=str(post.id),
            title=post.title,
            content=post.content,
            category=post.category,
            image_urls=post.image_urls,
            author_id=str(post.author_id),
            view_count=post.view_count,
            like_count=post.like_count,
            comments=[CommentPublic.from_comment(c) for c in post.comments],
            created_at=post.created_at,
        )

    @classmethod
    def from_post(cls, post: Post) -> "PostPublic":
        return cls(**cls._fields_of(post))


class PostView(PostPublic):
    # 작성자가 삭제되어 조회되지 않으면 None
    author: Optional[UserPublic] = None

    @classmethod
    def from_post(cls, post: Post, author: Optional[User] = None) -> "PostView":
        return cls(
            **cls._fields_of(post),
            author=UserPublic.from_user(author) if author else None,
        )


class PostPage(CamelModel):
    posts: List[PostView]
    total_pages: int
    current_page: int


class PostCreated(CamelModel):
    message: str
    post: PostPublic
