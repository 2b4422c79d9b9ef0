# 게시글 서비스 레이어
# - 게시글 작성 (첨부 이미지 저장 → 문서 저장)
# - 목록 조회 (분류 필터, 최신순, 페이지네이션, 작성자 정보 채우기)

import logging
import math
from typing import List, Optional, Sequence

from beanie import PydanticObjectId
from fastapi import Depends, UploadFile

from ..models.post import Post
from ..repositories.post_repository import PostRepository
from ..repositories.user_repository import UserRepository
from ..schemas.post_schema import PostPage, PostView
from .attachment_service import AttachmentStore, get_attachment_store

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, posts: PostRepository, users: UserRepository, attachments: AttachmentStore):
        self.posts = posts
        self.users = users
        self.attachments = attachments

    async def create(
        self,
        author_id: PydanticObjectId,
        title: str,
        content: str,
        category: str,
        images: Sequence[UploadFile] = (),
    ) -> Post:
        image_urls = await self.attachments.store(images)
        try:
            post = await self.posts.create(author_id, title, content, category, image_urls)
        except Exception:
            # 문서 저장이 실패하면 방금 저장한 이미지도 남기지 않음
            await self.attachments.discard(image_urls)
            raise
        logger.info(f"[Posts] Created post id={post.id} author={author_id} images={len(image_urls)}")
        return post

    async def list(self, category: Optional[str] = None, page: int = 1, page_size: int = 10) -> PostPage:
        posts, total = await self.posts.list(category, page, page_size)
        authors = await self.users.get_many(p.author_id for p in posts)
        views: List[PostView] = [PostView.from_post(p, authors.get(p.author_id)) for p in posts]
        return PostPage(
            posts=views,
            total_pages=math.ceil(total / page_size),
            current_page=page,
        )


def get_post_service(
    posts: PostRepository = Depends(PostRepository),
    users: UserRepository = Depends(UserRepository),
    attachments: AttachmentStore = Depends(get_attachment_store),
) -> PostService:
    return PostService(posts, users, attachments)
